"""OTLP exporter configuration models.

Values normally arrive through the standard OTEL_* environment variables
(see hello_otel.config.settings.OtelEnvSettingsSource).
"""

from enum import Enum

from pydantic import BaseModel, Field

HTTP_PROTOBUF = "http/protobuf"


class Signal(str, Enum):
    """Telemetry signal exported over OTLP."""

    TRACES = "traces"
    LOGS = "logs"
    METRICS = "metrics"


class OTLPConfig(BaseModel):
    """Exporter transport, endpoints and resource identity."""

    protocol: str = Field(
        default="grpc",
        description='Export protocol: "grpc" or "http/protobuf"',
    )
    endpoint: str = Field(
        default="http://127.0.0.1:4317",
        description="Single gRPC endpoint shared by all signals",
    )
    traces_endpoint: str = Field(
        default="http://127.0.0.1:4318/v1/traces",
        description="HTTP endpoint for traces",
    )
    logs_endpoint: str = Field(
        default="http://127.0.0.1:4318/v1/logs",
        description="HTTP endpoint for logs",
    )
    metrics_endpoint: str = Field(
        default="http://127.0.0.1:4318/v1/metrics",
        description="HTTP endpoint for metrics",
    )
    headers: str | None = Field(
        default=None,
        description='Exporter headers, e.g. "authorization=Bearer <token>"',
    )
    service_name: str = Field(default="hello-otel", description="service.name")
    service_version: str = Field(default="1.0.0", description="service.version")
    environment: str = Field(
        default="dev",
        description="deployment.environment resource attribute",
    )

    @property
    def uses_http(self) -> bool:
        """Whether exporters use the HTTP/protobuf transport."""
        return self.protocol.strip().lower() == HTTP_PROTOBUF

    def endpoint_for(self, signal: Signal) -> str:
        """Return the endpoint the exporter for `signal` should send to.

        HTTP/protobuf uses one URL per signal; anything else is treated as
        gRPC, where every signal shares `endpoint`.
        """
        if not self.uses_http:
            return self.endpoint
        if signal is Signal.TRACES:
            return self.traces_endpoint
        if signal is Signal.LOGS:
            return self.logs_endpoint
        return self.metrics_endpoint
