"""OpenTelemetry distributed tracing setup.

Provides the tracer provider and the span helpers used by the API routes.
"""

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from opentelemetry import trace
from opentelemetry.context import Context
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import (
    BatchSpanProcessor,
    ConsoleSpanExporter,
    SimpleSpanProcessor,
    SpanExporter,
)
from opentelemetry.sdk.trace.sampling import ParentBased, TraceIdRatioBased
from opentelemetry.trace import Span, SpanKind, Status, StatusCode, Tracer

# Instrumentation scope for spans created by this service
TRACER_NAME = "hello_otel"


def setup_tracing(
    resource: Resource,
    exporter: SpanExporter | None = None,
    console_export: bool = False,
    sample_rate: float = 1.0,
) -> TracerProvider:
    """Create a TracerProvider and install it globally.

    Args:
        resource: Resource describing this service
        exporter: Span exporter (OTLP in production); skipped if None
        console_export: Also print finished spans to stdout
        sample_rate: Fraction of new traces to sample (0.0 to 1.0);
            child spans follow their parent's decision

    Returns:
        The installed TracerProvider
    """
    provider = TracerProvider(
        resource=resource,
        sampler=ParentBased(TraceIdRatioBased(sample_rate)),
    )

    if exporter is not None:
        provider.add_span_processor(BatchSpanProcessor(exporter))

    if console_export:
        provider.add_span_processor(SimpleSpanProcessor(ConsoleSpanExporter()))

    trace.set_tracer_provider(provider)
    return provider


def get_tracer() -> Tracer:
    """Get the service tracer from the current global provider.

    Resolves through the proxy provider, so it is a no-op tracer until
    tracing is set up.
    """
    return trace.get_tracer(TRACER_NAME)


def get_current_trace_id() -> str | None:
    """Get the current trace ID as a hex string.

    Returns:
        32-character hex trace ID, or None without an active span
    """
    span_context = trace.get_current_span().get_span_context()
    if span_context.is_valid:
        return format(span_context.trace_id, "032x")
    return None


@contextmanager
def create_span(
    name: str,
    kind: SpanKind = SpanKind.INTERNAL,
    attributes: dict[str, Any] | None = None,
    context: Context | None = None,
) -> Generator[Span, None, None]:
    """Start a span on the service tracer and make it current.

    Exceptions escaping the block are recorded by the SDK; exceptions the
    caller handles itself should go through `record_exception`.

    Args:
        name: Operation name shown in the trace view
        kind: SpanKind, INTERNAL unless the span models a remote call
        attributes: Attributes set when the span starts
        context: Explicit parent; the active span is used when omitted

    Yields:
        The active span
    """
    with get_tracer().start_as_current_span(
        name,
        kind=kind,
        attributes=attributes or {},
        context=context,
    ) as span:
        yield span


def record_exception(span: Span, exception: BaseException, escaped: bool = False) -> None:
    """Record an exception event on a span and mark the span errored."""
    span.record_exception(exception, escaped=escaped)
    span.set_status(Status(StatusCode.ERROR, str(exception)))
