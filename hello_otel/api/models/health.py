"""Health check response models."""

from datetime import UTC, datetime
from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Overall health status response for GET /health."""

    status: Literal["healthy", "degraded", "unhealthy"]
    """Overall service status."""

    service: str
    """Service name reported to the collector."""

    version: str
    """Service version."""

    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    """When this health check was performed."""
