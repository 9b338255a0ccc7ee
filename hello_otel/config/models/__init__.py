"""Configuration model exports.

This module exports all configuration models for easy access:

    from hello_otel.config.models import APIConfig, OTLPConfig
"""

from hello_otel.config.models.api import APIConfig
from hello_otel.config.models.downstream import DownstreamConfig
from hello_otel.config.models.observability import (
    LoggingConfig,
    MetricsConfig,
    ObservabilityConfig,
    TracingConfig,
)
from hello_otel.config.models.otlp import HTTP_PROTOBUF, OTLPConfig, Signal

__all__ = [
    "APIConfig",
    "DownstreamConfig",
    "LoggingConfig",
    "MetricsConfig",
    "ObservabilityConfig",
    "TracingConfig",
    "OTLPConfig",
    "Signal",
    "HTTP_PROTOBUF",
]
