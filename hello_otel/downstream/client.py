"""Async client for the downstream HTTP dependency.

Each call produces a CLIENT span through the httpx OpenTelemetry
instrumentation, so the outbound request shows up as a child of the
caller's span.

Usage:
    async with DownstreamClient("https://example.com") as client:
        status = await client.fetch_status()
"""

import time

import httpx
from opentelemetry.instrumentation.httpx import HTTPXClientInstrumentor

from hello_otel.observability.logging import get_logger
from hello_otel.observability.metrics import DOWNSTREAM_ERRORS, DOWNSTREAM_LATENCY

logger = get_logger(__name__)


class DownstreamError(Exception):
    """Raised when the downstream request could not be completed."""

    def __init__(self, message: str, url: str):
        super().__init__(message)
        self.message = message
        self.url = url


class DownstreamClient:
    """Fetches a fixed URL and reports the response status code.

    Any response counts as success, whatever its status; only transport
    failures (DNS, connect, TLS, timeout, protocol) raise DownstreamError.
    """

    def __init__(
        self,
        url: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize client.

        Args:
            url: URL fetched by fetch_status
            timeout_seconds: Total request timeout
            transport: Custom transport (tests pass httpx.MockTransport)
        """
        self.url = url
        self._client = httpx.AsyncClient(
            timeout=timeout_seconds,
            transport=transport,
        )
        HTTPXClientInstrumentor.instrument_client(self._client)

    async def fetch_status(self) -> int:
        """GET the configured URL.

        Returns:
            HTTP status code of the response

        Raises:
            DownstreamError: If the request failed before a response arrived
        """
        start = time.perf_counter()
        try:
            response = await self._client.get(self.url)
        except httpx.HTTPError as e:
            DOWNSTREAM_LATENCY.labels(outcome="error").observe(time.perf_counter() - start)
            DOWNSTREAM_ERRORS.labels(error_type=type(e).__name__).inc()
            raise DownstreamError(str(e) or type(e).__name__, url=self.url) from e

        DOWNSTREAM_LATENCY.labels(outcome="ok").observe(time.perf_counter() - start)
        logger.debug(
            "downstream_response",
            url=self.url,
            status_code=response.status_code,
        )
        return response.status_code

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "DownstreamClient":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()
