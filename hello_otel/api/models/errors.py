"""Error response models for consistent API error handling."""

from enum import Enum

from pydantic import BaseModel


class ErrorCode(str, Enum):
    """Machine-readable error codes for API responses."""

    NOT_FOUND = "NOT_FOUND"
    """No route matches the requested path."""

    METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
    """The route exists but not for this HTTP method."""

    HTTP_ERROR = "HTTP_ERROR"
    """Any other HTTP error raised by the framework."""

    INTERNAL_ERROR = "INTERNAL_ERROR"
    """An unexpected internal error occurred."""


class ErrorBody(BaseModel):
    """Error body content for API error responses."""

    code: ErrorCode
    """Machine-readable error code."""

    message: str
    """Human-readable error description."""


class ErrorResponse(BaseModel):
    """Envelope for every API error response."""

    error: ErrorBody
