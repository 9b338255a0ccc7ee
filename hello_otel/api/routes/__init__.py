"""API route registration."""

from fastapi import FastAPI

from hello_otel.observability.logging import get_logger

logger = get_logger(__name__)


def register_routes(app: FastAPI) -> None:
    """Register all routes with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    from hello_otel.api.routes.health import router as health_router
    from hello_otel.api.routes.hello import router as hello_router

    app.include_router(hello_router, tags=["Hello"])
    app.include_router(health_router, tags=["Health"])

    logger.debug("routes_registered", routes=["/", "/hello", "/health", "/metrics"])
