"""Metrics for hello-otel.

Two surfaces:
- Prometheus collectors served on GET /metrics for local scraping.
- An OpenTelemetry MeterProvider exporting over OTLP. It receives the
  HTTP server metrics recorded by the FastAPI instrumentation and, when
  enabled, process/runtime metrics.
"""

from opentelemetry import metrics
from opentelemetry.instrumentation.system_metrics import SystemMetricsInstrumentor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.metrics.export import MetricExporter, PeriodicExportingMetricReader
from opentelemetry.sdk.resources import Resource
from prometheus_client import Counter, Histogram

# Request metrics
REQUEST_COUNT = Counter(
    "hello_otel_requests_total",
    "Total number of HTTP requests served",
    labelnames=["endpoint", "status"],
)

# Downstream call metrics
DOWNSTREAM_LATENCY = Histogram(
    "hello_otel_downstream_latency_seconds",
    "Latency of the outbound call made by /hello",
    labelnames=["outcome"],
    buckets=(0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0),
)

DOWNSTREAM_ERRORS = Counter(
    "hello_otel_downstream_errors_total",
    "Total number of failed outbound calls",
    labelnames=["error_type"],
)


def setup_metrics(
    resource: Resource,
    exporter: MetricExporter | None = None,
    export_interval_ms: int = 60000,
    runtime_instrumentation: bool = True,
) -> MeterProvider:
    """Create a MeterProvider and install it globally.

    Args:
        resource: Resource describing this service
        exporter: Metric exporter (OTLP in production); no reader if None
        export_interval_ms: Interval between exports
        runtime_instrumentation: Collect process and runtime metrics

    Returns:
        The installed MeterProvider
    """
    readers = []
    if exporter is not None:
        readers.append(
            PeriodicExportingMetricReader(
                exporter, export_interval_millis=export_interval_ms
            )
        )

    provider = MeterProvider(resource=resource, metric_readers=readers)
    metrics.set_meter_provider(provider)

    if runtime_instrumentation:
        SystemMetricsInstrumentor().instrument(meter_provider=provider)

    return provider


def teardown_metrics(provider: MeterProvider) -> None:
    """Stop runtime collection and flush the provider."""
    instrumentor = SystemMetricsInstrumentor()
    if instrumentor.is_instrumented_by_opentelemetry:
        instrumentor.uninstrument()
    provider.shutdown()
