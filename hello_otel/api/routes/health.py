"""Health check and metrics endpoints."""

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from hello_otel.api.dependencies import SettingsDep
from hello_otel.api.models.health import HealthResponse
from hello_otel.observability.logging import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: SettingsDep) -> HealthResponse:
    """Report that the process is up and serving requests."""
    logger.debug("health_check_request")

    return HealthResponse(
        status="healthy",
        service=settings.otlp.service_name,
        version=settings.otlp.service_version,
    )


@router.get("/metrics")
async def get_metrics() -> Response:
    """Get Prometheus metrics.

    Returns metrics in Prometheus text format for scraping.

    Returns:
        Prometheus metrics as text/plain
    """
    logger.debug("metrics_request")

    return Response(
        content=generate_latest(),
        media_type=CONTENT_TYPE_LATEST,
    )
