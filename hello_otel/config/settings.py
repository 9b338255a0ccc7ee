"""Root settings model for hello-otel configuration."""

import os
from typing import Any

from pydantic import Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from hello_otel.config.models.api import APIConfig
from hello_otel.config.models.downstream import DownstreamConfig
from hello_otel.config.models.observability import ObservabilityConfig
from hello_otel.config.models.otlp import OTLPConfig


# Standard OpenTelemetry variables and the otlp fields they populate
OTEL_ENV_VARS: dict[str, str] = {
    "OTEL_SERVICE_NAME": "service_name",
    "OTEL_EXPORTER_OTLP_PROTOCOL": "protocol",
    "OTEL_EXPORTER_OTLP_ENDPOINT": "endpoint",
    "OTEL_EXPORTER_OTLP_TRACES_ENDPOINT": "traces_endpoint",
    "OTEL_EXPORTER_OTLP_LOGS_ENDPOINT": "logs_endpoint",
    "OTEL_EXPORTER_OTLP_METRICS_ENDPOINT": "metrics_endpoint",
    "OTEL_EXPORTER_OTLP_HEADERS": "headers",
    "OTEL_ENV": "environment",
}

# Values from config/*.toml, installed by get_settings()
_toml_config: dict[str, Any] = {}


def set_toml_config(config: dict[str, Any]) -> None:
    """Set the TOML configuration to be used by Settings."""
    global _toml_config
    _toml_config = config


class TomlConfigSettingsSource(PydanticBaseSettingsSource):
    """Custom settings source that reads from TOML configuration."""

    def get_field_value(
        self, field: Any, field_name: str  # noqa: ARG002
    ) -> tuple[Any, str, bool]:
        """Get field value from TOML config."""
        value = _toml_config.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        """Return the TOML config values."""
        return _toml_config.copy()


class OtelEnvSettingsSource(PydanticBaseSettingsSource):
    """Settings source for the standard OTEL_* environment variables.

    Maps each variable in OTEL_ENV_VARS onto the `otlp` section. Unset and
    blank variables are ignored so lower-priority sources still apply.
    """

    def get_field_value(
        self, field: Any, field_name: str  # noqa: ARG002
    ) -> tuple[Any, str, bool]:
        """Get field value from the OTEL environment."""
        value = self().get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        """Return the OTEL values nested under `otlp`."""
        otlp: dict[str, str] = {}
        for env_var, field_name in OTEL_ENV_VARS.items():
            value = os.environ.get(env_var)
            if value is not None and value.strip():
                otlp[field_name] = value.strip()
        return {"otlp": otlp} if otlp else {}


class Settings(BaseSettings):
    """Root configuration object containing all nested configuration sections.

    Configuration is loaded in this order:
    1. Pydantic model defaults (in code)
    2. config/default.toml (base configuration)
    3. config/{HELLO_OTEL_ENV}.toml (environment overrides)
    4. Standard OTEL_* environment variables
    5. HELLO_OTEL_* environment variables (runtime overrides)
    """

    model_config = SettingsConfigDict(
        env_prefix="HELLO_OTEL_",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # Application settings
    app_name: str = Field(default="hello-otel", description="Application name")
    debug: bool = Field(default=False, description="Enable debug mode")

    # Nested configuration sections
    api: APIConfig = Field(default_factory=APIConfig, description="API server configuration")
    downstream: DownstreamConfig = Field(
        default_factory=DownstreamConfig,
        description="Outbound call configuration",
    )
    observability: ObservabilityConfig = Field(
        default_factory=ObservabilityConfig,
        description="Observability configuration",
    )
    otlp: OTLPConfig = Field(
        default_factory=OTLPConfig,
        description="OTLP exporter configuration",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize settings sources to include OTEL env and TOML config.

        Priority order (highest to lowest):
        1. init_settings (constructor arguments)
        2. env_settings (HELLO_OTEL_* environment variables)
        3. otel_env_settings (standard OTEL_* environment variables)
        4. toml_settings (config/*.toml files)
        5. (defaults from model)
        """
        return (
            init_settings,
            env_settings,
            OtelEnvSettingsSource(settings_cls),
            TomlConfigSettingsSource(settings_cls),
        )
