"""API middleware."""

from hello_otel.api.middleware.context import RequestContextMiddleware

__all__ = ["RequestContextMiddleware"]
