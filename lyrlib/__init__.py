"""lyrlib -- cached, rate-limited client for the LRCLIB lyrics service.

Typical usage::

    from lyrlib import LyricsClient

    async with LyricsClient() as client:
        results = await client.search({"track_name": "Song", "artist_name": "Artist"})
        lyrics = await client.get_synced(
            {"track_name": "Song", "artist_name": "Artist"},
            {"format": "lrc"},
        )
"""

from lyrlib.models import (
    CacheStats,
    ClientOptions,
    FormattedLyrics,
    LyricsFormat,
    LyricsOptions,
    Query,
    RateLimitStatus,
    SearchOptions,
    SearchResult,
    SyncedLine,
    TrackMetadata,
    UnsyncedLine,
)
from lyrlib.pipeline.orchestrator import LyricsClient
from lyrlib.providers.cache.memory_cache import TTLCache
from lyrlib.providers.lyrics.lrclib_provider import LrclibProvider
from lyrlib.services.lyrics_formatter import format_lyrics
from lyrlib.services.result_ranker import build_search_result, score, sort_results
from lyrlib.utils.concurrency import retry_with_backoff, with_timeout
from lyrlib.utils.errors import (
    ConfigurationError,
    ErrorKind,
    LyrlibError,
    NotFoundError,
    ProviderError,
    RateLimitError,
    RequestTimeoutError,
    ValidationError,
)
from lyrlib.utils.rate_limiter import RateLimiter
from lyrlib.utils.similarity import similarity
from lyrlib.utils.validation import validate_query

__version__ = "0.1.0"

__all__ = [
    "CacheStats",
    "ClientOptions",
    "ConfigurationError",
    "ErrorKind",
    "FormattedLyrics",
    "LrclibProvider",
    "LyricsClient",
    "LyricsFormat",
    "LyricsOptions",
    "LyrlibError",
    "NotFoundError",
    "ProviderError",
    "Query",
    "RateLimitError",
    "RateLimitStatus",
    "RateLimiter",
    "RequestTimeoutError",
    "SearchOptions",
    "SearchResult",
    "SyncedLine",
    "TTLCache",
    "TrackMetadata",
    "UnsyncedLine",
    "ValidationError",
    "build_search_result",
    "format_lyrics",
    "retry_with_backoff",
    "score",
    "similarity",
    "sort_results",
    "validate_query",
    "with_timeout",
]
