"""OTLP exporter and resource construction.

One exporter is built per signal. The transport follows
`OTLPConfig.protocol`: "http/protobuf" uses the HTTP exporters with their
per-signal URLs, anything else uses the gRPC exporters against the single
shared endpoint.
"""

import socket
from typing import Any
from urllib.parse import unquote

from opentelemetry.exporter.otlp.proto.grpc._log_exporter import (
    OTLPLogExporter as GrpcLogExporter,
)
from opentelemetry.exporter.otlp.proto.grpc.metric_exporter import (
    OTLPMetricExporter as GrpcMetricExporter,
)
from opentelemetry.exporter.otlp.proto.grpc.trace_exporter import (
    OTLPSpanExporter as GrpcSpanExporter,
)
from opentelemetry.exporter.otlp.proto.http._log_exporter import (
    OTLPLogExporter as HttpLogExporter,
)
from opentelemetry.exporter.otlp.proto.http.metric_exporter import (
    OTLPMetricExporter as HttpMetricExporter,
)
from opentelemetry.exporter.otlp.proto.http.trace_exporter import (
    OTLPSpanExporter as HttpSpanExporter,
)
from opentelemetry.sdk.resources import (
    DEPLOYMENT_ENVIRONMENT,
    HOST_NAME,
    SERVICE_NAME,
    SERVICE_VERSION,
    Resource,
)

from hello_otel.config.models.otlp import OTLPConfig, Signal
from hello_otel.observability.logging import get_logger

logger = get_logger(__name__)

_GRPC_EXPORTERS: dict[Signal, type[Any]] = {
    Signal.TRACES: GrpcSpanExporter,
    Signal.LOGS: GrpcLogExporter,
    Signal.METRICS: GrpcMetricExporter,
}

_HTTP_EXPORTERS: dict[Signal, type[Any]] = {
    Signal.TRACES: HttpSpanExporter,
    Signal.LOGS: HttpLogExporter,
    Signal.METRICS: HttpMetricExporter,
}


def parse_headers(raw: str | None) -> dict[str, str] | None:
    """Parse an OTLP headers string ("k1=v1,k2=v2") into a dict.

    Values are percent-decoded as in OTEL_EXPORTER_OTLP_HEADERS. Malformed
    pairs are skipped with a warning.

    Args:
        raw: Header string, or None

    Returns:
        Header mapping, or None when nothing usable was given
    """
    if raw is None or not raw.strip():
        return None

    headers: dict[str, str] = {}
    for pair in raw.split(","):
        if not pair.strip():
            continue
        key, sep, value = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            # Only the key is logged; the value may carry a credential
            logger.warning("otlp_header_skipped", header_key=key or None)
            continue
        headers[key.lower()] = unquote(value.strip())

    return headers or None


def create_exporter(config: OTLPConfig, signal: Signal) -> Any:
    """Build the OTLP exporter for one signal.

    Args:
        config: OTLP configuration
        signal: Signal the exporter will carry

    Returns:
        A span, log or metric exporter matching `signal`
    """
    endpoint = config.endpoint_for(signal)
    headers = parse_headers(config.headers)

    if config.uses_http:
        exporter = _HTTP_EXPORTERS[signal](endpoint=endpoint, headers=headers)
    else:
        exporter = _GRPC_EXPORTERS[signal](
            endpoint=endpoint,
            headers=headers,
            insecure=endpoint.startswith("http://"),
        )

    logger.info(
        "otlp_exporter_configured",
        signal=signal.value,
        protocol="http/protobuf" if config.uses_http else "grpc",
        endpoint=endpoint,
        with_headers=headers is not None,
    )
    return exporter


def build_resource(config: OTLPConfig) -> Resource:
    """Build the Resource shared by all signals."""
    return Resource.create(
        {
            SERVICE_NAME: config.service_name,
            SERVICE_VERSION: config.service_version,
            DEPLOYMENT_ENVIRONMENT: config.environment,
            HOST_NAME: socket.gethostname(),
        }
    )
