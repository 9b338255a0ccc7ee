"""FastAPI application factory.

Creates and configures the FastAPI application with middleware,
exception handlers, route registration and OpenTelemetry instrumentation.

Usage:
    uvicorn hello_otel.api.app:app --host 0.0.0.0 --port 8080
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from opentelemetry.instrumentation.fastapi import FastAPIInstrumentor
from starlette.exceptions import HTTPException as StarletteHTTPException

from hello_otel import __version__
from hello_otel.api.dependencies import reset_dependencies
from hello_otel.api.middleware.context import RequestContextMiddleware
from hello_otel.api.models.errors import ErrorBody, ErrorCode, ErrorResponse
from hello_otel.api.routes import register_routes
from hello_otel.config import get_settings
from hello_otel.config.settings import Settings
from hello_otel.observability.logging import get_logger
from hello_otel.observability.telemetry import setup_observability

logger = get_logger(__name__)

# Endpoints left out of server spans and OTLP HTTP metrics
INSTRUMENTATION_EXCLUDED_URLS = "health,metrics"

_STATUS_ERROR_CODES = {
    404: ErrorCode.NOT_FOUND,
    405: ErrorCode.METHOD_NOT_ALLOWED,
}


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Logging and the OTLP providers are set up in the lifespan handler so
    that importing this module has no process-wide side effects.

    Args:
        settings: Settings to use (loaded from config/env if None)

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        app.state.telemetry = setup_observability(settings)
        logger.info(
            "app_started",
            service_name=settings.otlp.service_name,
            protocol=settings.otlp.protocol,
        )
        yield
        logger.info("app_stopping")
        await reset_dependencies()
        app.state.telemetry.shutdown()

    app = FastAPI(
        title="hello-otel",
        description="Minimal service exporting traces, logs and metrics over OTLP",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=settings.api.cors_allow_credentials,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestContextMiddleware)

    _register_exception_handlers(app)

    register_routes(app)

    observability = settings.observability
    if observability.tracing.enabled or observability.metrics.enabled:
        FastAPIInstrumentor.instrument_app(
            app, excluded_urls=INSTRUMENTATION_EXCLUDED_URLS
        )
        logger.info("opentelemetry_instrumentation_enabled")

    logger.debug(
        "app_created",
        debug=settings.debug,
        cors_origins=settings.api.cors_origins,
    )

    return app


def _register_exception_handlers(app: FastAPI) -> None:
    """Register global exception handlers.

    Args:
        app: FastAPI application
    """

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        """Render framework HTTP errors (404, 405, ...) as ErrorResponse."""
        logger.info(
            "http_error",
            status_code=exc.status_code,
            path=request.url.path,
        )

        error_body = ErrorBody(
            code=_STATUS_ERROR_CODES.get(exc.status_code, ErrorCode.HTTP_ERROR),
            message=str(exc.detail),
        )

        return JSONResponse(
            status_code=exc.status_code,
            content=ErrorResponse(error=error_body).model_dump(),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unexpected_error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
        )

        error_body = ErrorBody(
            code=ErrorCode.INTERNAL_ERROR,
            message="An unexpected error occurred",
        )

        return JSONResponse(
            status_code=500,
            content=ErrorResponse(error=error_body).model_dump(),
        )

    logger.debug("exception_handlers_registered")


# Create the app instance for uvicorn
app = create_app()
