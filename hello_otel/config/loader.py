"""TOML configuration loader.

Reads config/default.toml and layers config/{HELLO_OTEL_ENV}.toml on top.
The files are optional: without them the model defaults and environment
variables make up the whole configuration.
"""

import os
import tomllib
from pathlib import Path
from typing import Any

CONFIG_DIR_ENV = "HELLO_OTEL_CONFIG_DIR"
ENVIRONMENT_ENV = "HELLO_OTEL_ENV"
DEFAULT_ENVIRONMENT = "production"

# Parent directories searched for a config/ folder
_SEARCH_DEPTH = 5


def get_config_dir() -> Path | None:
    """Locate the directory holding the TOML files.

    HELLO_OTEL_CONFIG_DIR wins when set and must exist. Otherwise the
    working directory and its parents are searched for a config/ folder;
    None when there is none.
    """
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        path = Path(override)
        if not path.is_dir():
            raise FileNotFoundError(f"Config directory not found: {override}")
        return path

    candidate = Path.cwd()
    for _ in range(_SEARCH_DEPTH):
        if (candidate / "config").is_dir():
            return candidate / "config"
        candidate = candidate.parent

    return None


def get_environment() -> str:
    """Name of the active environment overlay (HELLO_OTEL_ENV)."""
    return os.environ.get(ENVIRONMENT_ENV, DEFAULT_ENVIRONMENT)


def load_toml(file_path: Path) -> dict[str, Any]:
    """Parse one TOML file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        tomllib.TOMLDecodeError: If the TOML syntax is invalid
    """
    if not file_path.is_file():
        raise FileNotFoundError(f"Configuration file not found: {file_path}")

    with file_path.open("rb") as fh:
        return tomllib.load(fh)


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Return `base` updated with `override`, merging nested tables.

    Neither input is modified.
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def load_config(
    config_dir: Path | None = None,
    environment: str | None = None,
) -> dict[str, Any]:
    """Load default.toml and the optional environment overlay.

    A directory given explicitly (argument or HELLO_OTEL_CONFIG_DIR) must
    hold default.toml. A directory found by searching may lack it, and no
    directory at all yields an empty configuration.

    Args:
        config_dir: Directory to read from (located automatically if None)
        environment: Overlay name (HELLO_OTEL_ENV if None)

    Returns:
        Merged configuration dictionary

    Raises:
        FileNotFoundError: If an explicit directory has no default.toml
    """
    explicit = config_dir is not None or bool(os.environ.get(CONFIG_DIR_ENV))
    directory = config_dir or get_config_dir()
    if directory is None:
        return {}

    default_path = directory / "default.toml"
    if not default_path.is_file():
        if explicit:
            raise FileNotFoundError(
                f"Default configuration file not found: {default_path}. "
                f"Create it or unset {CONFIG_DIR_ENV}."
            )
        return {}

    config = load_toml(default_path)

    overlay_path = directory / f"{environment or get_environment()}.toml"
    if overlay_path.is_file():
        config = deep_merge(config, load_toml(overlay_path))

    return config
