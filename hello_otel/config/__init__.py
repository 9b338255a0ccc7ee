"""Configuration loading for hello-otel.

Usage:
    from hello_otel.config import get_settings

    settings = get_settings()
    endpoint = settings.otlp.endpoint
"""

from functools import lru_cache

from hello_otel.config.loader import load_config
from hello_otel.config.settings import Settings, set_toml_config


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get the singleton settings instance.

    TOML files are read first and handed to the TOML settings source;
    OTEL_* and HELLO_OTEL_* environment variables override them.

    The result is cached for the lifetime of the process.
    Call `get_settings.cache_clear()` to reload configuration.
    """
    set_toml_config(load_config())
    return Settings()


def reload_settings() -> Settings:
    """Clear the settings cache and reload configuration."""
    get_settings.cache_clear()
    return get_settings()


__all__ = ["get_settings", "reload_settings", "Settings"]
