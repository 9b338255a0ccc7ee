"""Process-wide observability bootstrap.

Wires logging, tracing, log export and metrics from Settings in one call:

    telemetry = setup_observability(get_settings())
    ...
    telemetry.shutdown()
"""

import logging
from dataclasses import dataclass

from opentelemetry._logs import set_logger_provider
from opentelemetry.sdk._logs import LoggerProvider, LoggingHandler
from opentelemetry.sdk._logs.export import BatchLogRecordProcessor
from opentelemetry.sdk.metrics import MeterProvider
from opentelemetry.sdk.resources import Resource
from opentelemetry.sdk.trace import TracerProvider

from hello_otel.config.models.otlp import OTLPConfig, Signal
from hello_otel.config.settings import Settings
from hello_otel.observability.exporters import build_resource, create_exporter
from hello_otel.observability.logging import attach_handler, get_logger, setup_logging
from hello_otel.observability.metrics import setup_metrics, teardown_metrics
from hello_otel.observability.tracing import setup_tracing

logger = get_logger(__name__)

# Loggers of the OpenTelemetry SDK, exporters and instrumentations
SDK_LOGGER_PREFIX = "opentelemetry"


class SdkRecordFilter(logging.Filter):
    """Drop records from OpenTelemetry's own loggers.

    Exporter failures must never re-enter the log export pipeline.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        return not record.name.startswith(SDK_LOGGER_PREFIX)


@dataclass
class Telemetry:
    """Handle on the providers installed by setup_observability.

    A provider is None when its signal is disabled.
    """

    resource: Resource
    tracer_provider: TracerProvider | None = None
    logger_provider: LoggerProvider | None = None
    meter_provider: MeterProvider | None = None
    log_handler: logging.Handler | None = None

    def shutdown(self) -> None:
        """Flush pending telemetry and release exporters."""
        if self.tracer_provider is not None:
            self.tracer_provider.shutdown()
        if self.meter_provider is not None:
            teardown_metrics(self.meter_provider)
        if self.logger_provider is not None:
            if self.log_handler is not None:
                logging.getLogger().removeHandler(self.log_handler)
            self.logger_provider.shutdown()
        logger.info("telemetry_shutdown")


def setup_log_export(
    resource: Resource, config: OTLPConfig
) -> tuple[LoggerProvider, LoggingHandler]:
    """Create the OTLP LoggerProvider and a stdlib handler feeding it."""
    provider = LoggerProvider(resource=resource)
    provider.add_log_record_processor(
        BatchLogRecordProcessor(create_exporter(config, Signal.LOGS))
    )
    set_logger_provider(provider)

    handler = LoggingHandler(level=logging.NOTSET, logger_provider=provider)
    handler.addFilter(SdkRecordFilter())
    return provider, handler


def setup_observability(settings: Settings) -> Telemetry:
    """Configure logging and every enabled OTLP signal.

    Args:
        settings: Application settings

    Returns:
        Telemetry handle; call shutdown() on exit
    """
    obs = settings.observability
    setup_logging(
        level=obs.logging.level,
        format=obs.logging.format,
        redact_secrets=obs.logging.redact_secrets,
        include_trace_id=obs.logging.include_trace_id,
    )

    telemetry = Telemetry(resource=build_resource(settings.otlp))

    if obs.tracing.enabled:
        telemetry.tracer_provider = setup_tracing(
            telemetry.resource,
            exporter=create_exporter(settings.otlp, Signal.TRACES),
            console_export=obs.tracing.console_export,
            sample_rate=obs.tracing.sample_rate,
        )

    if obs.logging.export:
        telemetry.logger_provider, telemetry.log_handler = setup_log_export(
            telemetry.resource, settings.otlp
        )
        attach_handler(telemetry.log_handler)

    if obs.metrics.enabled:
        telemetry.meter_provider = setup_metrics(
            telemetry.resource,
            exporter=create_exporter(settings.otlp, Signal.METRICS),
            export_interval_ms=obs.metrics.export_interval_ms,
            runtime_instrumentation=obs.metrics.runtime_instrumentation,
        )

    logger.info(
        "observability_configured",
        service_name=settings.otlp.service_name,
        environment=settings.otlp.environment,
        tracing=obs.tracing.enabled,
        log_export=obs.logging.export,
        metrics=obs.metrics.enabled,
    )

    return telemetry
