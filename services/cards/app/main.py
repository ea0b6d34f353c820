"""FastAPI application entrypoint."""
from __future__ import annotations

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api import cards
from .config import CardsSettings, get_settings
from .errors import CardsError, ErrorKind
from .observability.log_config import configure_logging
from .observability.otel import configure_telemetry
from .persistence.memory import CardRepository

logger = structlog.get_logger(__name__)


def _error_response(status_code: int, message: str, kind: ErrorKind) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message, "code": kind.value},
    )


def create_app(settings: CardsSettings | None = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(
        title="Card Actions",
        version="0.1.0",
        openapi_version="3.1.0",
        docs_url="/docs",
        redoc_url=None,
    )

    configure_logging(settings)
    configure_telemetry(settings)

    app.state.settings = settings
    app.state.card_repository = CardRepository(seed_path=settings.backend.seed_path)

    @app.exception_handler(CardsError)
    async def _cards_error_handler(request: Request, exc: CardsError):
        logger.info("cards.request_failed", path=request.url.path, code=exc.kind.value, error=exc.message)
        return _error_response(exc.status_code, exc.message, exc.kind)

    @app.exception_handler(RequestValidationError)
    async def _request_validation_handler(request: Request, exc: RequestValidationError):
        return _error_response(400, "Request body is not valid card data.", ErrorKind.validation)

    @app.exception_handler(Exception)
    async def _generic_exception_handler(request: Request, exc: Exception):  # pragma: no cover - fallback
        logger.exception("cards.unhandled_error", path=request.url.path)
        return _error_response(500, "An error occurred while processing the card request.", ErrorKind.server)

    app.include_router(cards.router)

    @app.get("/healthz")
    async def healthcheck():
        return {"status": "ok", "environment": settings.environment}

    return app


app = create_app()


def run() -> None:  # pragma: no cover - dev server entry point
    import uvicorn

    settings = get_settings()
    uvicorn.run("services.cards.app.main:app", host=settings.host, port=settings.port, reload=settings.environment == "dev")


__all__ = ["app", "create_app", "run"]
