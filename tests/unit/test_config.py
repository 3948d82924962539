"""Unit tests for Settings, the YAML loader and client option building."""

from __future__ import annotations

from pathlib import Path

import pytest

from lyrlib.config.loader import _deep_merge, build_client_options, load_config
from lyrlib.config.settings import Settings
from lyrlib.models.options import ClientOptions
from lyrlib.utils.errors import ConfigurationError


def _write(tmp_path: Path, text: str) -> str:
    path = tmp_path / "config.yaml"
    path.write_text(text, encoding="utf-8")
    return str(path)


# ======================================================================
# load_config
# ======================================================================


class TestLoadConfig:
    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        config = load_config(str(tmp_path / "absent.yaml"), Settings(_env_file=None))
        assert config["client"]["cache_ttl_ms"] == 300_000
        assert config["client"]["max_requests_per_minute"] == 60
        assert config["lrclib"]["base_url"] == "https://lrclib.net"
        assert config["logging"]["level"] == "INFO"

    def test_yaml_overrides_defaults(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "client:\n  cache_ttl_ms: 60000\n  enable_cache: false\n")
        config = load_config(path, Settings(_env_file=None))
        assert config["client"]["cache_ttl_ms"] == 60_000
        assert config["client"]["enable_cache"] is False
        assert config["client"]["max_requests_per_minute"] == 60

    def test_explicit_settings_override_yaml(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "client:\n  max_requests_per_minute: 10\n")
        config = load_config(path, Settings(_env_file=None, max_requests_per_minute=5))
        assert config["client"]["max_requests_per_minute"] == 5

    def test_environment_variable_overrides_yaml(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("LRCLIB_BASE_URL", "http://mirror.local")
        path = _write(tmp_path, "lrclib:\n  base_url: https://lrclib.net\n")
        config = load_config(path, Settings(_env_file=None))
        assert config["lrclib"]["base_url"] == "http://mirror.local"

    def test_non_mapping_yaml_rejected(self, tmp_path: Path) -> None:
        path = _write(tmp_path, "- just\n- a list\n")
        with pytest.raises(ConfigurationError):
            load_config(path, Settings(_env_file=None))

    def test_repo_config_file_loads(self, project_root: Path) -> None:
        config = load_config(str(project_root / "config" / "config.yaml"), Settings(_env_file=None))
        assert build_client_options(config) == ClientOptions()


# ======================================================================
# build_client_options
# ======================================================================


class TestBuildClientOptions:
    def test_builds_from_client_section(self) -> None:
        options = build_client_options({"client": {"cache_ttl_ms": 1500, "request_timeout_ms": 250}})
        assert options.cache_ttl_seconds == 1.5
        assert options.request_timeout_seconds == 0.25

    def test_invalid_value_raises_configuration_error(self) -> None:
        with pytest.raises(ConfigurationError):
            build_client_options({"client": {"cache_ttl_ms": 0}})

    def test_non_mapping_section(self) -> None:
        with pytest.raises(ConfigurationError):
            build_client_options({"client": ["nope"]})

    def test_missing_section_gives_defaults(self) -> None:
        assert build_client_options({}) == ClientOptions()


class TestDeepMerge:
    def test_recursive_merge(self) -> None:
        base = {"client": {"a": 1, "b": 2}, "app": {"port": 8000}}
        _deep_merge(base, {"client": {"b": 3}, "logging": {"level": "DEBUG"}})
        assert base == {
            "client": {"a": 1, "b": 3},
            "app": {"port": 8000},
            "logging": {"level": "DEBUG"},
        }
