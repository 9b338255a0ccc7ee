"""API request and response models."""

from hello_otel.api.models.errors import ErrorBody, ErrorCode, ErrorResponse
from hello_otel.api.models.health import HealthResponse
from hello_otel.api.models.hello import HelloResponse

__all__ = [
    "ErrorBody",
    "ErrorCode",
    "ErrorResponse",
    "HealthResponse",
    "HelloResponse",
]
