from contextlib import asynccontextmanager
import logging

from uuid import uuid4

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from railops.api.metrics import router as metrics_router
from railops.api.routes import api_router
from railops.core.config import Settings, get_settings
from railops.core.telemetry import (
    configure_opentelemetry,
    instrument_fastapi,
    instrument_httpx,
)
from railops.jobs.train_sync import TrainSyncScheduler
from railops.services.dashboard import DashboardService
from railops.services.provider import GenerativeTextProvider
from railops.services.reconciler import TrainReconciler
from railops.services.response_cache import ResponseCache
from railops.services.seed_data import seed_trains
from railops.services.train_registry import TrainRegistry

logger = logging.getLogger(__name__)
REQUEST_ID_HEADER = "X-Request-Id"


def _configure_logging() -> None:
    if logging.getLogger().handlers:
        return
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


def _install_request_id_middleware(app: FastAPI) -> None:
    """Ensure each response includes a stable X-Request-Id header."""

    @app.middleware("http")
    async def add_request_id(request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER, str(uuid4()))
        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response


def _install_exception_handlers(app: FastAPI) -> None:
    """Report malformed request bodies as 400, like any other bad parameter."""

    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        if any(error.get("type") == "json_invalid" for error in errors):
            detail = "Request body must be valid JSON."
        elif all(tuple(error.get("loc", ()))[:1] == ("body",) for error in errors):
            detail = "Request body must be a JSON object."
        else:
            detail = "Invalid request parameters."
        logger.debug("Rejected request to %s: %s", request.url.path, errors)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"detail": detail}
        )


def _install_components(
    app: FastAPI, settings: Settings, provider: GenerativeTextProvider | None
) -> None:
    """Create the process-wide components and attach them to app.state.

    The registry starts with the seed fleet so every endpoint can answer
    before (or without) a successful provider call.
    """
    registry = TrainRegistry(seed_trains())
    reconciler = TrainReconciler(registry)
    provider = provider or GenerativeTextProvider(settings)

    app.state.settings = settings
    app.state.train_registry = registry
    app.state.reconciler = reconciler
    app.state.provider = provider
    app.state.response_cache = ResponseCache(settings.response_cache_ttl_seconds)
    app.state.dashboard = DashboardService(registry, reconciler, provider, settings)
    app.state.scheduler = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events."""
    settings: Settings = app.state.settings

    # Configure OpenTelemetry at startup
    configure_opentelemetry(
        service_name=settings.otel_service_name,
        service_version=settings.otel_service_version,
        otlp_endpoint=settings.otel_exporter_otlp_endpoint,
        otlp_headers=settings.otel_exporter_otlp_headers,
        enabled=settings.otel_enabled,
    )

    # Instrument httpx for outbound request tracing
    instrument_httpx(enabled=settings.otel_enabled)

    dashboard: DashboardService = app.state.dashboard
    if await dashboard.initialize():
        logger.info("Train registry initialized from provider")
    else:
        logger.info("Train registry running on seed data")

    scheduler = None
    if settings.scheduler_enabled:
        scheduler = TrainSyncScheduler(settings, dashboard, app.state.response_cache)
        await scheduler.start()
    app.state.scheduler = scheduler

    try:
        yield
    finally:
        if scheduler is not None:
            await scheduler.stop()
        await app.state.provider.aclose()


def create_app(
    settings: Settings | None = None,
    provider: GenerativeTextProvider | None = None,
) -> FastAPI:
    """Application factory for FastAPI."""
    settings = settings or get_settings()
    app = FastAPI(
        title="RailOps API",
        description="Backend service for the RailOps train control dashboard.",
        version="0.1.0",
        lifespan=lifespan,
    )

    _install_components(app, settings, provider)

    # Instrument FastAPI for tracing if enabled
    instrument_fastapi(app, enabled=settings.otel_enabled)
    _install_request_id_middleware(app)
    _install_exception_handlers(app)

    allow_origins = settings.cors_allow_origins
    allow_origin_regex = settings.cors_allow_origin_regex
    if allow_origins or allow_origin_regex:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=allow_origins,
            allow_origin_regex=allow_origin_regex,
            allow_credentials=bool(allow_origins),
            allow_methods=["*"],
            allow_headers=["*"],
            expose_headers=[REQUEST_ID_HEADER, "X-Cache-Status"],
        )

    app.include_router(metrics_router)
    app.include_router(api_router, prefix="/api")

    return app


app = create_app()


def _main() -> None:
    import uvicorn

    _configure_logging()
    uvicorn.run(app, host="0.0.0.0", port=get_settings().port)


if __name__ == "__main__":
    _main()
