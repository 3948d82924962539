"""Option models for the lyrics client and its operations.

``ClientOptions`` is the configuration surface of :class:`LyricsClient`;
``SearchOptions`` and ``LyricsOptions`` are per-call options.  Per-call
options are folded into cache keys, so two calls that differ only in their
options never share a cache entry.
"""

from __future__ import annotations

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from lyrlib.models.lyrics import LyricsFormat
from lyrlib.utils.errors import ConfigurationError

DEFAULT_USER_AGENT = "lyrlib/0.1.0 (+https://github.com/lyrlib/lyrlib)"


class ClientOptions(BaseModel):
    """Recognized client options and their defaults.

    Durations are expressed in milliseconds to match the documented
    configuration surface; the client converts them to seconds internally.
    """

    model_config = ConfigDict(frozen=True)

    enable_cache: bool = True
    cache_ttl_ms: int = Field(default=300_000, gt=0)
    cache_max_entries: int = Field(default=1000, gt=0)
    enable_rate_limit: bool = True
    max_requests_per_minute: int = Field(default=60, gt=0)
    request_timeout_ms: int = Field(default=10_000, gt=0)
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ClientOptions:
        """Build options from a plain mapping, raising ConfigurationError on bad values."""
        try:
            return cls.model_validate(dict(data))
        except PydanticValidationError as exc:
            raise ConfigurationError(f"Invalid client options: {exc}") from exc

    @property
    def cache_ttl_seconds(self) -> float:
        return self.cache_ttl_ms / 1000.0

    @property
    def request_timeout_seconds(self) -> float:
        return self.request_timeout_ms / 1000.0


class SearchOptions(BaseModel):
    """Options for ``LyricsClient.search``."""

    model_config = ConfigDict(frozen=True)

    limit: int = Field(default=10, ge=1)
    include_metadata: bool = True   # False strips lyric bodies from results
    prefer_synced: bool = False     # rank synced-capable results first


class LyricsOptions(BaseModel):
    """Options for the lyrics retrieval operations.

    ``synced`` is only consulted by ``get_lyrics_by_metadata``; the
    dedicated ``get_synced``/``get_unsynced`` calls imply it.
    """

    model_config = ConfigDict(frozen=True)

    include_metadata: bool = False
    format: LyricsFormat = LyricsFormat.JSON
    synced: bool = False
