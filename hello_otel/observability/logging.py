"""Structured logging configuration using structlog.

structlog events are rendered into stdlib `logging` calls so that one
record reaches every handler on the root logger: the console handler
installed here and, when OTLP log export is on, the OpenTelemetry
`LoggingHandler`.
"""

import logging
import re
import sys
from collections.abc import MutableMapping, Sequence
from typing import Any, cast

import structlog
from opentelemetry import trace
from structlog.types import EventDict, WrappedLogger

# Sensitive key names (O(1) lookup)
SENSITIVE_KEYS: frozenset[str] = frozenset({
    "authorization",
    "headers",
    "otlp_headers",
    "token",
    "access_token",
    "api_key",
    "apikey",
    "password",
    "secret",
    "bearer",
    "cookie",
    "credentials",
})

# Credentials embedded in string values
BEARER_PATTERN = re.compile(r"(?i)\b(bearer|basic)\s+[A-Za-z0-9._~+/=-]+")
KEY_VALUE_PATTERN = re.compile(r"(?i)\b(authorization|api[-_]?key|token)=([^,\s]+)")

# Handlers added by setup_logging, removed again on reconfiguration
_installed_handlers: list[logging.Handler] = []


class SecretRedactor:
    """Processor that masks credentials in log events.

    Values under sensitive key names are replaced outright; string values
    are scanned for bearer tokens and `key=value` credential pairs such as
    those found in OTEL_EXPORTER_OTLP_HEADERS.
    """

    def __call__(
        self,
        _logger: WrappedLogger,
        _method_name: str,
        event_dict: EventDict,
    ) -> EventDict:
        """Redact secrets from event dictionary."""
        return cast(EventDict, self._redact_dict(event_dict))

    def _redact_dict(self, data: MutableMapping[str, Any]) -> dict[str, Any]:
        result: dict[str, Any] = {}
        for key, value in data.items():
            if key.lower() in SENSITIVE_KEYS:
                result[key] = "[REDACTED]"
            else:
                result[key] = self._redact_value(value)
        return result

    def _redact_value(self, value: Any) -> Any:
        if isinstance(value, dict):
            return self._redact_dict(value)
        if isinstance(value, str):
            return self._redact_string(value)
        if isinstance(value, list):
            return [self._redact_value(item) for item in value]
        return value

    @staticmethod
    def _redact_string(value: str) -> str:
        value = BEARER_PATTERN.sub(r"\1 [REDACTED]", value)
        return KEY_VALUE_PATTERN.sub(r"\1=[REDACTED]", value)


def add_trace_context(
    _logger: WrappedLogger,
    _method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Add trace_id and span_id of the active span, if any."""
    span_context = trace.get_current_span().get_span_context()
    if span_context.is_valid:
        event_dict.setdefault("trace_id", format(span_context.trace_id, "032x"))
        event_dict.setdefault("span_id", format(span_context.span_id, "016x"))
    return event_dict


def _build_formatter(format: str) -> structlog.stdlib.ProcessorFormatter:
    renderer: list[Any]
    if format == "json":
        renderer = [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        renderer = [structlog.dev.ConsoleRenderer(colors=True)]

    return structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.ExtraAdder(),
            structlog.processors.TimeStamper(fmt="iso"),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            *renderer,
        ],
    )


def setup_logging(
    level: str = "INFO",
    format: str = "json",
    redact_secrets: bool = True,
    include_trace_id: bool = True,
    handlers: Sequence[logging.Handler] = (),
) -> None:
    """Configure structured logging.

    Args:
        level: Minimum log level (DEBUG, INFO, WARNING, ERROR)
        format: Output format - "json" for production, "console" for development
        redact_secrets: Whether to mask credentials in log events
        include_trace_id: Whether to add the active trace and span IDs
        handlers: Extra handlers for the root logger (e.g. the OTLP handler)
    """
    level_num = logging.getLevelName(level.upper())
    if not isinstance(level_num, int):
        level_num = logging.INFO

    processors: list[Any] = [structlog.contextvars.merge_contextvars]
    if include_trace_id:
        processors.append(add_trace_context)
    if redact_secrets:
        processors.append(SecretRedactor())
    # Bound fields become LogRecord extras for every stdlib handler
    processors.append(structlog.stdlib.render_to_log_kwargs)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level_num),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    for handler in _installed_handlers:
        root.removeHandler(handler)
    _installed_handlers.clear()

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(_build_formatter(format))
    for handler in (console, *handlers):
        root.addHandler(handler)
        _installed_handlers.append(handler)

    root.setLevel(level_num)


def attach_handler(handler: logging.Handler) -> None:
    """Add a handler to the root logger alongside the console handler.

    It is removed again the next time setup_logging runs.
    """
    logging.getLogger().addHandler(handler)
    _installed_handlers.append(handler)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance bound to the given name.

    Args:
        name: Logger name (typically __name__ of the module)

    Returns:
        A bound structlog logger
    """
    return cast(structlog.stdlib.BoundLogger, structlog.get_logger(name))
