"""Observability: structured logging, distributed tracing, metrics.

structlog for logging, OpenTelemetry for tracing, log export and OTLP
metrics, Prometheus for the local /metrics endpoint.
"""

from hello_otel.observability.logging import (
    SecretRedactor,
    attach_handler,
    get_logger,
    setup_logging,
)
from hello_otel.observability.metrics import (
    DOWNSTREAM_ERRORS,
    DOWNSTREAM_LATENCY,
    REQUEST_COUNT,
    setup_metrics,
)
from hello_otel.observability.telemetry import Telemetry, setup_observability
from hello_otel.observability.tracing import (
    create_span,
    get_current_trace_id,
    get_tracer,
    record_exception,
    setup_tracing,
)

__all__ = [
    # Logging
    "setup_logging",
    "attach_handler",
    "get_logger",
    "SecretRedactor",
    # Metrics
    "setup_metrics",
    "REQUEST_COUNT",
    "DOWNSTREAM_LATENCY",
    "DOWNSTREAM_ERRORS",
    # Tracing
    "setup_tracing",
    "get_tracer",
    "create_span",
    "get_current_trace_id",
    "record_exception",
    # Bootstrap
    "setup_observability",
    "Telemetry",
]
