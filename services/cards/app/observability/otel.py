"""OpenTelemetry helpers for the cards service."""
from __future__ import annotations

from opentelemetry import metrics, trace
from opentelemetry.exporter.otlp.proto.http.metric_exporter import OTLPMetricExporter
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import PeriodicExportingMetricReader
from opentelemetry.sdk.resources import SERVICE_NAME, Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import BatchSpanProcessor

from ..config import CardsSettings, get_settings

_configured = False


def configure_telemetry(settings: CardsSettings | None = None) -> bool:
    """Configure tracing and metrics exporters when an OTLP endpoint is set.

    Returns whether exporters were installed. Providers are global, so this
    only ever installs them once per process.
    """
    global _configured
    settings = settings or get_settings()
    endpoint = settings.observability.otel_exporter_otlp_endpoint
    if not endpoint or _configured:
        return False

    resource = Resource(attributes={SERVICE_NAME: settings.observability.otel_service_name})

    tracer_provider = TracerProvider(resource=resource)
    tracer_provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=endpoint)))
    trace.set_tracer_provider(tracer_provider)

    reader = PeriodicExportingMetricReader(OTLPMetricExporter(endpoint=endpoint))
    metrics.set_meter_provider(MeterProvider(resource=resource, metric_readers=[reader]))
    _configured = True
    return True


__all__ = ["configure_telemetry"]
