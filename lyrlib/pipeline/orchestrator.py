"""Orchestrating client for cached, rate-limited lyrics lookups.

Every public lookup runs the same fixed sequence of stages:

    Validate → CacheCheck → (hit: return) → RateCheck
             → ProviderCall (timeout-bounded) → Score / Format → CacheStore

ARCHITECTURE NOTE:
    Each stage either hands its output to the next one or raises; a failure
    aborts the call immediately and nothing is substituted for it.  The only
    short-circuit is a cache hit, which skips every stage after CacheCheck.

    Cache keys are namespaced by operation kind (``search``, ``unsynced``,
    ``synced``, ``metadata``, ``lyrics_by_metadata``) and built from the
    sorted query and option fields, so the same query under two operations
    never shares an entry.

    The cache and the rate limiter are owned by the client instance (or
    injected explicitly).  Two clients never share state unless the caller
    hands them the same component on purpose.
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Mapping, Sequence, TypeVar

import httpx
import structlog

from lyrlib.interfaces.cache_provider import ICacheProvider
from lyrlib.interfaces.lyrics_provider import ILyricsProvider
from lyrlib.models.lyrics import (
    FormattedLyrics,
    LyricsFormat,
    LyricsLine,
    Query,
    SearchResult,
    TrackMetadata,
)
from lyrlib.models.options import ClientOptions, LyricsOptions, SearchOptions
from lyrlib.models.state import CacheStats, RateLimitStatus
from lyrlib.providers.cache.memory_cache import TTLCache
from lyrlib.providers.lyrics.lrclib_provider import LrclibProvider
from lyrlib.services.lyrics_formatter import format_lyrics
from lyrlib.services.result_ranker import (
    build_search_result,
    prefer_synced,
    sort_results,
    strip_lyrics,
)
from lyrlib.utils.concurrency import with_timeout
from lyrlib.utils.errors import LyrlibError, NotFoundError, ProviderError, ValidationError
from lyrlib.utils.logging import get_logger
from lyrlib.utils.rate_limiter import RateLimiter
from lyrlib.utils.validation import coerce_options, validate_query

_T = TypeVar("_T")

_RATE_WINDOW_SECONDS = 60.0

_UNSYNCED_FORMATS = frozenset({LyricsFormat.PLAIN, LyricsFormat.JSON})
_SYNCED_FORMATS = frozenset({LyricsFormat.LRC, LyricsFormat.JSON})


class LyricsClient:
    """Cached, rate-limited, timeout-bounded front for a lyrics provider.

    Parameters
    ----------
    provider:
        The lyrics provider.  When omitted, an :class:`LrclibProvider` is
        built on a client-owned ``httpx.AsyncClient`` that ``aclose()``
        releases.
    options:
        :class:`ClientOptions`, a mapping of option values, or ``None`` for
        defaults.
    cache:
        Optional injected cache; defaults to a private :class:`TTLCache`
        sized from *options*.
    rate_limiter:
        Optional injected limiter; defaults to a private
        :class:`RateLimiter` allowing ``max_requests_per_minute``.
    """

    def __init__(
        self,
        provider: ILyricsProvider | None = None,
        options: ClientOptions | Mapping[str, Any] | None = None,
        cache: ICacheProvider | None = None,
        rate_limiter: RateLimiter | None = None,
    ) -> None:
        if options is None:
            options = ClientOptions()
        elif not isinstance(options, ClientOptions):
            options = ClientOptions.from_mapping(options)
        self._options = options

        self._owned_http: httpx.AsyncClient | None = None
        if provider is None:
            self._owned_http = httpx.AsyncClient(timeout=options.request_timeout_seconds)
            provider = LrclibProvider(self._owned_http, user_agent=options.user_agent)
        self._provider = provider

        self._cache: ICacheProvider = cache or TTLCache(
            default_ttl=options.cache_ttl_seconds,
            max_entries=options.cache_max_entries,
        )
        self._rate_limiter = rate_limiter or RateLimiter(
            max_requests=options.max_requests_per_minute,
            window_seconds=_RATE_WINDOW_SECONDS,
        )
        self._logger: structlog.BoundLogger = get_logger(__name__)

        self._logger.info(
            "lyrics_client_initialized",
            provider=provider.get_provider_name(),
            cache_enabled=options.enable_cache,
            rate_limit_enabled=options.enable_rate_limit,
            max_requests_per_minute=options.max_requests_per_minute,
            request_timeout_ms=options.request_timeout_ms,
        )

    @property
    def options(self) -> ClientOptions:
        return self._options

    @property
    def provider(self) -> ILyricsProvider:
        return self._provider

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owned_http is not None and not self._owned_http.is_closed:
            await self._owned_http.aclose()

    async def __aenter__(self) -> LyricsClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ------------------------------------------------------------------
    # Pipeline stages
    # ------------------------------------------------------------------

    async def _call_provider(self, operation: Callable[[], Awaitable[_T]]) -> _T:
        """Run one provider call under the request timeout.

        Library errors pass through untouched; anything else the provider
        raises is wrapped in :class:`ProviderError` with the cause chained.
        """
        provider_name = self._provider.get_provider_name()
        try:
            return await with_timeout(
                operation,
                self._options.request_timeout_seconds,
                provider_name=provider_name,
            )
        except LyrlibError:
            raise
        except Exception as exc:
            self._logger.error("provider_call_failed", provider=provider_name, error=str(exc))
            raise ProviderError(
                message=f"Provider call failed: {exc}",
                provider_name=provider_name,
            ) from exc

    async def _run(
        self,
        kind: str,
        query: Query,
        params: Mapping[str, Any],
        fetch: Callable[[], Awaitable[_T]],
    ) -> _T:
        """CacheCheck → RateCheck → fetch → CacheStore for an already-validated query."""
        key = self._cache.generate_key(kind, {**query.model_dump(), **params})

        if self._options.enable_cache:
            cached = self._cache.get(key)
            if cached is not None:
                self._logger.debug("lookup_served_from_cache", kind=kind, key=key)
                return cached

        if self._options.enable_rate_limit:
            self._rate_limiter.check_limit()

        result = await fetch()

        if self._options.enable_cache:
            self._cache.set(key, result)

        self._logger.info(
            "lookup_complete",
            kind=kind,
            track=query.track_name,
            artist=query.artist_name,
        )
        return result

    async def _require_metadata(self, query: Query) -> TrackMetadata:
        metadata = await self._call_provider(lambda: self._provider.find_metadata(query))
        if metadata is None:
            raise NotFoundError(
                "No lyrics found for the given query",
                provider_name=self._provider.get_provider_name(),
            )
        return self._check_metadata(metadata)

    async def _optional_metadata(self, query: Query) -> TrackMetadata | None:
        metadata = await self._call_provider(lambda: self._provider.find_metadata(query))
        if metadata is None:
            return None
        return self._check_metadata(metadata)

    def _check_metadata(self, metadata: object) -> TrackMetadata:
        if not isinstance(metadata, TrackMetadata):
            raise ProviderError(
                f"Provider returned {type(metadata).__name__} instead of TrackMetadata",
                provider_name=self._provider.get_provider_name(),
            )
        return metadata

    async def _fetch_lines(self, query: Query, synced: bool) -> Sequence[LyricsLine]:
        if synced:
            lines = await self._call_provider(lambda: self._provider.get_synced_lines(query))
        else:
            lines = await self._call_provider(lambda: self._provider.get_unsynced_lines(query))

        if lines is None:
            variant = "synced" if synced else "unsynced"
            raise NotFoundError(
                f"No {variant} lyrics found for the given query",
                provider_name=self._provider.get_provider_name(),
            )
        return lines

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def search(
        self,
        query: Query | Mapping[str, Any],
        options: SearchOptions | Mapping[str, Any] | None = None,
    ) -> list[SearchResult]:
        """Look up *query* and return scored results, best first.

        Raises
        ------
        ValidationError
            If the query or options are malformed.
        NotFoundError
            If the provider has no match.
        RateLimitError, RequestTimeoutError, ProviderError
            From the corresponding pipeline stage.
        """
        validated = validate_query(query)
        opts = coerce_options(SearchOptions, options)

        async def fetch() -> tuple[SearchResult, ...]:
            metadata = await self._require_metadata(validated)
            results = sort_results([build_search_result(metadata, validated)])
            if opts.prefer_synced:
                results = prefer_synced(results)
            if not opts.include_metadata:
                results = [strip_lyrics(result) for result in results]
            return tuple(results[: opts.limit])

        results = await self._run("search", validated, opts.model_dump(mode="json"), fetch)
        return list(results)

    async def get_unsynced(
        self,
        query: Query | Mapping[str, Any],
        options: LyricsOptions | Mapping[str, Any] | None = None,
    ) -> FormattedLyrics:
        """Fetch plain lyric lines for *query* and render them as ``plain`` or ``json``."""
        validated = validate_query(query)
        opts = coerce_options(LyricsOptions, options)
        if opts.format not in _UNSYNCED_FORMATS:
            raise ValidationError(f"unsynced lyrics cannot be rendered as {opts.format.value}")

        async def fetch() -> FormattedLyrics:
            lines = await self._fetch_lines(validated, synced=False)
            metadata = await self._optional_metadata(validated) if opts.include_metadata else None
            return format_lyrics(lines, opts.format, metadata)

        params = opts.model_dump(mode="json", exclude={"synced"})
        return await self._run("unsynced", validated, params, fetch)

    async def get_synced(
        self,
        query: Query | Mapping[str, Any],
        options: LyricsOptions | Mapping[str, Any] | None = None,
    ) -> FormattedLyrics:
        """Fetch timestamped lyric lines for *query* and render them as ``lrc`` or ``json``."""
        validated = validate_query(query)
        opts = coerce_options(LyricsOptions, options)
        if opts.format not in _SYNCED_FORMATS:
            raise ValidationError(f"synced lyrics cannot be rendered as {opts.format.value}")

        async def fetch() -> FormattedLyrics:
            lines = await self._fetch_lines(validated, synced=True)
            metadata = await self._optional_metadata(validated) if opts.include_metadata else None
            return format_lyrics(lines, opts.format, metadata)

        params = opts.model_dump(mode="json", exclude={"synced"})
        return await self._run("synced", validated, params, fetch)

    async def find_metadata(self, query: Query | Mapping[str, Any]) -> TrackMetadata:
        """Return the provider's track record for *query*.

        Raises
        ------
        NotFoundError
            If the provider has no match.
        """
        validated = validate_query(query)
        return await self._run("metadata", validated, {}, lambda: self._require_metadata(validated))

    async def get_lyrics_by_metadata(
        self,
        title: str,
        artist: str,
        album: str | None = None,
        options: LyricsOptions | Mapping[str, Any] | None = None,
    ) -> FormattedLyrics:
        """Resolve a track from loose title/artist/album values, then fetch its lyrics.

        ``options.synced`` chooses between synced and unsynced lines; the
        metadata of the resolved track is attached when
        ``options.include_metadata`` is set.
        """
        validated = validate_query(
            {"track_name": title, "artist_name": artist, "album_name": album}
        )
        opts = coerce_options(LyricsOptions, options)
        allowed = _SYNCED_FORMATS if opts.synced else _UNSYNCED_FORMATS
        if opts.format not in allowed:
            variant = "synced" if opts.synced else "unsynced"
            raise ValidationError(f"{variant} lyrics cannot be rendered as {opts.format.value}")

        async def fetch() -> FormattedLyrics:
            metadata = await self._require_metadata(validated)
            lines = await self._fetch_lines(validated, synced=opts.synced)
            return format_lyrics(lines, opts.format, metadata if opts.include_metadata else None)

        return await self._run(
            "lyrics_by_metadata", validated, opts.model_dump(mode="json"), fetch
        )

    def format_lyrics(
        self,
        lines: Sequence[LyricsLine],
        format: LyricsFormat | str = LyricsFormat.JSON,  # noqa: A002
        metadata: TrackMetadata | None = None,
    ) -> FormattedLyrics:
        """Render *lines* without touching the provider, cache or limiter."""
        return format_lyrics(lines, format, metadata)

    # ------------------------------------------------------------------
    # Administration
    # ------------------------------------------------------------------

    def cache_stats(self) -> CacheStats:
        """Evict expired entries, then report the remaining size and the eviction count."""
        evicted = self._cache.clean()
        return CacheStats(size=self._cache.size(), evicted=evicted)

    def rate_limit_status(self) -> RateLimitStatus:
        return self._rate_limiter.get_status()

    def clear_cache(self) -> None:
        self._cache.clear()
        self._logger.info("cache_cleared_by_client")

    def reset_rate_limit(self) -> None:
        self._rate_limiter.reset()
