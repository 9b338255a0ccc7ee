"""Shared test fixtures for the hello-otel test suite."""

import os
from collections.abc import Generator

# Selected before any hello_otel import so config/test.toml is used
os.environ.setdefault("HELLO_OTEL_ENV", "test")

import pytest  # noqa: E402
from opentelemetry import trace  # noqa: E402
from opentelemetry.sdk.metrics.export import (  # noqa: E402
    MetricExporter,
    MetricExportResult,
    MetricsData,
)
from opentelemetry.sdk.trace import TracerProvider  # noqa: E402
from opentelemetry.sdk.trace.export import SimpleSpanProcessor  # noqa: E402
from opentelemetry.sdk.trace.export.in_memory_span_exporter import (  # noqa: E402
    InMemorySpanExporter,
)

from hello_otel.config.settings import OTEL_ENV_VARS  # noqa: E402

# The global tracer provider can only be set once per process, so every
# test shares this one and reads finished spans from the exporter.
_SPAN_EXPORTER = InMemorySpanExporter()
_TRACER_PROVIDER = TracerProvider()
_TRACER_PROVIDER.add_span_processor(SimpleSpanProcessor(_SPAN_EXPORTER))
trace.set_tracer_provider(_TRACER_PROVIDER)


@pytest.fixture
def span_exporter() -> Generator[InMemorySpanExporter, None, None]:
    """In-memory exporter attached to the global tracer provider."""
    _SPAN_EXPORTER.clear()
    yield _SPAN_EXPORTER
    _SPAN_EXPORTER.clear()


@pytest.fixture(autouse=True)
def clean_otel_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Remove standard OTEL_* variables inherited from the shell."""
    for env_var in OTEL_ENV_VARS:
        monkeypatch.delenv(env_var, raising=False)


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Generator[None, None, None]:
    """Clear the settings cache before and after each test.

    This ensures test isolation for configuration tests.
    """
    from hello_otel.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


class CollectingMetricExporter(MetricExporter):
    """Metric exporter that keeps every exported batch in memory."""

    def __init__(self) -> None:
        super().__init__()
        self.batches: list[MetricsData] = []

    def export(
        self, metrics_data: MetricsData, timeout_millis: float = 10_000, **kwargs: object
    ) -> MetricExportResult:
        self.batches.append(metrics_data)
        return MetricExportResult.SUCCESS

    def force_flush(self, timeout_millis: float = 10_000) -> bool:
        return True

    def shutdown(self, timeout_millis: float = 30_000, **kwargs: object) -> None:
        pass


@pytest.fixture
def metric_exporter() -> CollectingMetricExporter:
    """Metric exporter recording batches for assertions."""
    return CollectingMetricExporter()
