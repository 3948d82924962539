"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ─────────────────────────────────────────────────
#
# pydantic-settings reads configuration from TWO sources (in priority order):
#
#   1. **Environment variables**: e.g., MAX_REQUESTS_PER_MINUTE=30
#   2. **.env file**: key=value lines in the project root .env file
#
# Field `cache_ttl_ms` maps to env var `CACHE_TTL_MS` (case-insensitive).
# Defaults below apply when neither source sets a value.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

from lyrlib.models.options import DEFAULT_USER_AGENT
from lyrlib.providers.lyrics.lrclib_provider import DEFAULT_BASE_URL


class Settings(BaseSettings):
    """lyrlib settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # === Client pipeline ===
    enable_cache: bool = True
    cache_ttl_ms: int = 300_000
    cache_max_entries: int = 1000
    enable_rate_limit: bool = True
    max_requests_per_minute: int = 60
    request_timeout_ms: int = 10_000
    user_agent: str = DEFAULT_USER_AGENT

    # === Provider ===
    lrclib_base_url: str = DEFAULT_BASE_URL

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"
