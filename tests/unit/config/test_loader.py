"""Unit tests for the TOML configuration loader."""

import tomllib
from pathlib import Path

import pytest

from hello_otel.config.loader import (
    deep_merge,
    get_config_dir,
    get_environment,
    load_config,
    load_toml,
)


@pytest.fixture
def config_dir(tmp_path: Path) -> Path:
    """Empty config directory."""
    directory = tmp_path / "config"
    directory.mkdir()
    return directory


class TestDeepMerge:
    """Tests for deep_merge."""

    def test_nested_tables_are_merged(self) -> None:
        base = {"otlp": {"protocol": "grpc", "endpoint": "http://a:4317"}, "debug": False}
        override = {"otlp": {"protocol": "http/protobuf"}}

        result = deep_merge(base, override)

        assert result == {
            "otlp": {"protocol": "http/protobuf", "endpoint": "http://a:4317"},
            "debug": False,
        }

    def test_scalar_replaces_table(self) -> None:
        assert deep_merge({"a": {"x": 1}}, {"a": "replaced"}) == {"a": "replaced"}

    def test_inputs_unmodified(self) -> None:
        base = {"a": {"x": 1}}
        override = {"a": {"y": 2}}

        deep_merge(base, override)

        assert base == {"a": {"x": 1}}
        assert override == {"a": {"y": 2}}


class TestLoadToml:
    """Tests for load_toml."""

    def test_load_valid_toml(self, tmp_path: Path) -> None:
        toml_file = tmp_path / "test.toml"
        toml_file.write_text('[downstream]\nurl = "https://example.org"\ntimeout_seconds = 2.5')

        assert load_toml(toml_file) == {
            "downstream": {"url": "https://example.org", "timeout_seconds": 2.5}
        }

    def test_load_missing_file_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_toml(tmp_path / "nonexistent.toml")

    def test_load_invalid_toml_raises(self, tmp_path: Path) -> None:
        invalid_file = tmp_path / "invalid.toml"
        invalid_file.write_text("invalid = [unclosed")

        with pytest.raises(tomllib.TOMLDecodeError):
            load_toml(invalid_file)


class TestGetEnvironment:
    """Tests for get_environment."""

    def test_returns_env_var_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("HELLO_OTEL_ENV", "production")
        assert get_environment() == "production"

    def test_defaults_to_production(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Unset HELLO_OTEL_ENV must not pick up the development overlay."""
        monkeypatch.delenv("HELLO_OTEL_ENV", raising=False)
        assert get_environment() == "production"


class TestGetConfigDir:
    """Tests for get_config_dir."""

    def test_uses_env_var_when_set(
        self, config_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("HELLO_OTEL_CONFIG_DIR", str(config_dir))
        assert get_config_dir() == config_dir

    def test_raises_for_missing_env_dir(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("HELLO_OTEL_CONFIG_DIR", str(tmp_path / "missing"))

        with pytest.raises(FileNotFoundError):
            get_config_dir()

    def test_searches_parent_directories(
        self, config_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        nested = config_dir.parent / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.delenv("HELLO_OTEL_CONFIG_DIR", raising=False)
        monkeypatch.chdir(nested)

        assert get_config_dir() == config_dir

    def test_none_without_config_folder(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("HELLO_OTEL_CONFIG_DIR", raising=False)
        monkeypatch.chdir(tmp_path)

        assert get_config_dir() is None


class TestLoadConfig:
    """Tests for load_config."""

    def test_loads_default_only(self, config_dir: Path) -> None:
        (config_dir / "default.toml").write_text("app_name = 'test'\ndebug = false")

        result = load_config(config_dir=config_dir, environment="nonexistent")

        assert result == {"app_name": "test", "debug": False}

    def test_merges_environment_overlay(
        self, config_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (config_dir / "default.toml").write_text(
            "[otlp]\nprotocol = 'grpc'\nservice_name = 'svc'"
        )
        (config_dir / "staging.toml").write_text("[otlp]\nprotocol = 'http/protobuf'")
        monkeypatch.setenv("HELLO_OTEL_CONFIG_DIR", str(config_dir))
        monkeypatch.setenv("HELLO_OTEL_ENV", "staging")

        result = load_config()

        assert result == {"otlp": {"protocol": "http/protobuf", "service_name": "svc"}}

    def test_missing_default_raises(self, config_dir: Path) -> None:
        with pytest.raises(FileNotFoundError, match="default.toml"):
            load_config(config_dir=config_dir)

    def test_missing_default_in_env_dir_raises(
        self, config_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("HELLO_OTEL_CONFIG_DIR", str(config_dir))

        with pytest.raises(FileNotFoundError, match="default.toml"):
            load_config()

    def test_empty_without_config_folder(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Running outside a checkout falls back to defaults and env vars."""
        monkeypatch.delenv("HELLO_OTEL_CONFIG_DIR", raising=False)
        monkeypatch.chdir(tmp_path)

        assert load_config() == {}

    def test_empty_when_found_folder_lacks_default(
        self, config_dir: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.delenv("HELLO_OTEL_CONFIG_DIR", raising=False)
        monkeypatch.chdir(config_dir.parent)

        assert load_config() == {}

    def test_repository_config_is_valid(self) -> None:
        """The shipped config/ directory loads for every overlay."""
        repo_config = Path(__file__).resolve().parents[3] / "config"

        for env in ("development", "test"):
            result = load_config(config_dir=repo_config, environment=env)
            assert result["otlp"]["protocol"] == "grpc"
