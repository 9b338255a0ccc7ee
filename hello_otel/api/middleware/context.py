"""Request context middleware for observability.

Binds request_id and trace_id to structlog contextvars for the duration
of each request, counts the request in Prometheus and echoes both IDs back
as response headers.
"""

import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from structlog.contextvars import bind_contextvars, clear_contextvars

from hello_otel.observability.logging import get_logger
from hello_otel.observability.metrics import REQUEST_COUNT
from hello_otel.observability.tracing import get_current_trace_id

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
TRACE_ID_HEADER = "X-Trace-ID"


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware that binds request context for logging.

    The request ID is taken from an incoming X-Request-ID header or
    generated. The trace ID comes from the active server span, which the
    FastAPI instrumentation opens before this middleware runs.
    """

    async def dispatch(  # type: ignore[override]
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        """Process request and bind context."""
        clear_contextvars()

        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        trace_id = get_current_trace_id()

        bind_contextvars(request_id=request_id, trace_id=trace_id)
        request.state.request_id = request_id

        logger.debug(
            "request_started",
            method=request.method,
            path=request.url.path,
        )

        response = await call_next(request)  # type: ignore[misc]

        # Label by route template so unknown paths share one series
        route = request.scope.get("route")
        REQUEST_COUNT.labels(
            endpoint=getattr(route, "path", "unmatched"),
            status=str(response.status_code),
        ).inc()

        logger.debug(
            "request_completed",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        if trace_id:
            response.headers[TRACE_ID_HEADER] = trace_id

        return response  # type: ignore[no-any-return]
