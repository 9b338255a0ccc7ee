"""hello-otel: a minimal FastAPI service wired to OpenTelemetry over OTLP.

Exposes a greeting route and a /hello route that emits a log line, a span
and one outbound HTTP call, with traces, logs and metrics exported to an
OTLP collector.
"""

__version__ = "1.0.0"
