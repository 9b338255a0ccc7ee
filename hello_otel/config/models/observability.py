"""Observability configuration models."""

from typing import Literal

from pydantic import BaseModel, Field

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
LogFormat = Literal["json", "console"]


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: LogLevel = Field(default="INFO", description="Log level")
    format: LogFormat = Field(default="json", description="Output format")
    redact_secrets: bool = Field(
        default=True,
        description="Mask credentials and tokens in log events",
    )
    include_trace_id: bool = Field(
        default=True,
        description="Include trace ID in logs",
    )
    export: bool = Field(
        default=True,
        description="Export log records over OTLP",
    )


class TracingConfig(BaseModel):
    """Distributed tracing configuration."""

    enabled: bool = Field(default=True, description="Enable tracing")
    console_export: bool = Field(
        default=False,
        description="Also print finished spans to stdout",
    )
    sample_rate: float = Field(
        default=1.0,
        ge=0.0,
        le=1.0,
        description="Trace sample rate",
    )


class MetricsConfig(BaseModel):
    """Metrics configuration."""

    enabled: bool = Field(default=True, description="Enable OTLP metrics export")
    export_interval_ms: int = Field(
        default=60000,
        gt=0,
        description="Interval between OTLP metric exports",
    )
    runtime_instrumentation: bool = Field(
        default=True,
        description="Collect process and runtime metrics",
    )


class ObservabilityConfig(BaseModel):
    """Observability configuration."""

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig,
        description="Logging settings",
    )
    tracing: TracingConfig = Field(
        default_factory=TracingConfig,
        description="Tracing settings",
    )
    metrics: MetricsConfig = Field(
        default_factory=MetricsConfig,
        description="Metrics settings",
    )
