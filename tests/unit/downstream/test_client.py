"""Tests for DownstreamClient."""

import httpx
import pytest
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace import SpanKind
from prometheus_client import REGISTRY

from hello_otel.downstream import DownstreamClient, DownstreamError

URL = "https://downstream.test/"


def _client(handler: httpx.MockTransport) -> DownstreamClient:
    return DownstreamClient(URL, timeout_seconds=1.0, transport=handler)


class TestFetchStatus:
    """Tests for DownstreamClient.fetch_status."""

    @pytest.mark.asyncio
    async def test_returns_status_code(self) -> None:
        """Should return the status of a successful response."""
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, text="ok")

        async with _client(httpx.MockTransport(handler)) as client:
            assert await client.fetch_status() == 200

        assert len(requests) == 1
        assert requests[0].method == "GET"
        assert str(requests[0].url) == URL

    @pytest.mark.asyncio
    async def test_error_status_is_not_a_failure(self) -> None:
        """Should report 5xx responses as plain status codes."""
        transport = httpx.MockTransport(lambda request: httpx.Response(503))

        async with _client(transport) as client:
            assert await client.fetch_status() == 503

    @pytest.mark.asyncio
    async def test_transport_error_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        async with _client(httpx.MockTransport(handler)) as client:
            with pytest.raises(DownstreamError) as exc_info:
                await client.fetch_status()

        assert exc_info.value.url == URL
        assert exc_info.value.message == "connection refused"
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    @pytest.mark.asyncio
    async def test_timeout_raises(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("", request=request)

        async with _client(httpx.MockTransport(handler)) as client:
            with pytest.raises(DownstreamError) as exc_info:
                await client.fetch_status()

        # Empty messages fall back to the exception type
        assert exc_info.value.message == "ReadTimeout"

    @pytest.mark.asyncio
    async def test_failure_counted(self) -> None:
        labels = {"error_type": "ConnectError"}
        before = REGISTRY.get_sample_value("hello_otel_downstream_errors_total", labels) or 0.0

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        async with _client(httpx.MockTransport(handler)) as client:
            with pytest.raises(DownstreamError):
                await client.fetch_status()

        after = REGISTRY.get_sample_value("hello_otel_downstream_errors_total", labels)
        assert after == before + 1


class TestInstrumentation:
    """Tests for the client span produced by each call."""

    @pytest.mark.asyncio
    async def test_emits_client_span(self, span_exporter: InMemorySpanExporter) -> None:
        transport = httpx.MockTransport(lambda request: httpx.Response(204))

        async with _client(transport) as client:
            await client.fetch_status()

        (span,) = span_exporter.get_finished_spans()
        assert span.kind == SpanKind.CLIENT
        assert span.name == "GET"

    @pytest.mark.asyncio
    async def test_propagates_trace_context(self) -> None:
        """Should send a traceparent header downstream."""
        headers: list[httpx.Headers] = []

        def handler(request: httpx.Request) -> httpx.Response:
            headers.append(request.headers)
            return httpx.Response(200)

        async with _client(httpx.MockTransport(handler)) as client:
            await client.fetch_status()

        assert "traceparent" in headers[0]
