"""Run the service with uvicorn: `python -m hello_otel`."""

import uvicorn

from hello_otel.config import get_settings


def main() -> None:
    """Start uvicorn on the configured host and port."""
    settings = get_settings()
    uvicorn.run(
        "hello_otel.api.app:app",
        host=settings.api.host,
        port=settings.api.port,
        # Leave logging to setup_logging so uvicorn records reach OTLP too
        log_config=None,
    )


if __name__ == "__main__":
    main()
