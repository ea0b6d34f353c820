"""Application configuration using Pydantic settings."""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_RESOURCES = Path(__file__).resolve().parent / "resources"


class BackendSettings(BaseModel):
    seed_path: Path = Field(
        default=_RESOURCES / "seed_cards.json",
        description="Static fixture used to seed the card list on the first read",
    )
    default_color: str = "#000000"
    simulated_latency_ms: int = Field(default=0, ge=0)


class ClientSettings(BaseModel):
    base_url: str = Field(default="http://localhost:8000", description="Cards service base URL")
    timeout_seconds: float | None = Field(default=10.0, gt=0)
    action_delay_ms: int = Field(
        default=0,
        ge=0,
        description="Artificial pause after a confirmed action so pending states stay visible",
    )


class ObservabilitySettings(BaseModel):
    otel_service_name: str = "card-actions"
    otel_exporter_otlp_endpoint: str | None = None
    log_level: str = "INFO"


class CardsSettings(BaseSettings):
    backend: BackendSettings = BackendSettings()
    client: ClientSettings = ClientSettings()
    observability: ObservabilitySettings = ObservabilitySettings()
    environment: Literal["dev", "qa", "prod"] | str = "dev"
    host: str = "127.0.0.1"
    port: int = 8000

    model_config = SettingsConfigDict(env_nested_delimiter="__", env_prefix="CARDS_", case_sensitive=False)


@lru_cache(maxsize=1)
def get_settings(**kwargs: Any) -> CardsSettings:
    """Return cached settings instance."""
    return CardsSettings(**kwargs)


__all__ = ["CardsSettings", "get_settings"]
