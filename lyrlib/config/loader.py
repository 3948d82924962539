"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ──────────────────────────────────────────
#
# Configuration is loaded in layers (later layers override earlier):
#
#   1. config/config.yaml: Static defaults checked into the repo
#   2. .env file: Local developer overrides (not committed)
#   3. Environment vars: Set at deploy time
#
# Only settings that were explicitly provided by the environment or .env
# override the YAML file; pydantic defaults never clobber YAML values.
#
# The _deep_merge helper does recursive dict merging:
#   base = {"client": {"cache_ttl_ms": 60000}}
#   overrides = {"client": {"enable_cache": False}}
#   result = {"client": {"cache_ttl_ms": 60000, "enable_cache": False}}
# ──────────────────────────────────────────────────────────────────────
"""

from pathlib import Path
from typing import Any

import yaml

from lyrlib.config.settings import Settings
from lyrlib.models.options import ClientOptions
from lyrlib.utils.errors import ConfigurationError

# Settings field → (config section, key inside that section)
_SECTION_MAP: dict[str, tuple[str, str]] = {
    "enable_cache": ("client", "enable_cache"),
    "cache_ttl_ms": ("client", "cache_ttl_ms"),
    "cache_max_entries": ("client", "cache_max_entries"),
    "enable_rate_limit": ("client", "enable_rate_limit"),
    "max_requests_per_minute": ("client", "max_requests_per_minute"),
    "request_timeout_ms": ("client", "request_timeout_ms"),
    "user_agent": ("client", "user_agent"),
    "lrclib_base_url": ("lrclib", "base_url"),
    "app_host": ("app", "host"),
    "app_port": ("app", "port"),
    "app_env": ("app", "env"),
    "log_level": ("logging", "level"),
}


def _defaults(settings: Settings) -> dict[str, Any]:
    config: dict[str, Any] = {}
    for field, (section, key) in _SECTION_MAP.items():
        config.setdefault(section, {})[key] = getattr(settings, field)
    return config


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Args:
        path: Path to the YAML configuration file.  A missing file is not
              an error; defaults and environment values still apply.
        settings: Pre-built settings (tests pass one); read from the
                  environment when omitted.

    Returns:
        Fully resolved configuration dictionary with ``client``, ``lrclib``,
        ``app`` and ``logging`` sections.

    Raises:
        ConfigurationError: If the YAML file is not a mapping.
    """
    settings = settings or Settings()

    config_path = Path(path)
    yaml_config: Any = {}
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}
    if not isinstance(yaml_config, dict):
        raise ConfigurationError(f"{path} must contain a mapping at the top level")

    env_overrides: dict[str, Any] = {}
    for field in settings.model_fields_set:
        if field in _SECTION_MAP:
            section, key = _SECTION_MAP[field]
            env_overrides.setdefault(section, {})[key] = getattr(settings, field)

    config = _defaults(settings)
    _deep_merge(config, yaml_config)
    _deep_merge(config, env_overrides)
    return config


def build_client_options(config: dict) -> ClientOptions:
    """Build :class:`ClientOptions` from the ``client`` section of *config*."""
    section = config.get("client") or {}
    if not isinstance(section, dict):
        raise ConfigurationError("the 'client' config section must be a mapping")
    return ClientOptions.from_mapping(section)


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
