"""Pydantic v2 models and state records for lyrlib.

- **lyrics** -- Query, TrackMetadata, line variants, SearchResult,
  FormattedLyrics and the LyricsFormat enum.
- **options** -- ClientOptions plus per-call SearchOptions / LyricsOptions.
- **state** -- CacheEntry, RateWindowState and their public snapshots.
"""

from lyrlib.models.lyrics import (
    FormattedLyrics,
    LyricsFormat,
    LyricsLine,
    Query,
    SearchResult,
    SyncedLine,
    TrackMetadata,
    UnsyncedLine,
)
from lyrlib.models.options import ClientOptions, LyricsOptions, SearchOptions
from lyrlib.models.state import CacheEntry, CacheStats, RateLimitStatus, RateWindowState

__all__ = [
    "CacheEntry",
    "CacheStats",
    "ClientOptions",
    "FormattedLyrics",
    "LyricsFormat",
    "LyricsLine",
    "LyricsOptions",
    "Query",
    "RateLimitStatus",
    "RateWindowState",
    "SearchOptions",
    "SearchResult",
    "SyncedLine",
    "TrackMetadata",
    "UnsyncedLine",
]
