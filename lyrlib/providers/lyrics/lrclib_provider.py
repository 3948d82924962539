"""LRCLIB provider implementing ILyricsProvider.

Queries the public LRCLIB JSON API (lrclib.net).  No API key is required,
but clients identify themselves with a User-Agent header.  The
``httpx.AsyncClient`` is injected for testability and connection pooling.

Lookup strategy per query:
    1. ``GET /api/get`` -- exact signature match by track/artist/album
    2. ``GET /api/search`` -- fallback when /api/get answers 404; the first
       hit is used

Every payload passes through :func:`map_track_metadata`, an explicit
field-by-field translation that rejects shapes it does not recognise.
"""

from __future__ import annotations

import re
from typing import Any

import httpx
import structlog

from lyrlib.interfaces.lyrics_provider import ILyricsProvider
from lyrlib.models.lyrics import Query, SyncedLine, TrackMetadata, UnsyncedLine
from lyrlib.models.options import DEFAULT_USER_AGENT
from lyrlib.utils.errors import ProviderError
from lyrlib.utils.logging import get_logger

DEFAULT_BASE_URL = "https://lrclib.net"
_PROVIDER_NAME = "lrclib"

# One or more "[mm:ss]", "[mm:ss.xx]" or "[mm:ss:xx]" stamps at line start.
_LRC_TIMESTAMP_RE = re.compile(r"\[(\d+):([0-5]?\d)(?:[.:](\d{1,3}))?\]")
_LRC_PREFIX_RE = re.compile(r"^(?:\[\d+:[0-5]?\d(?:[.:]\d{1,3})?\]\s*)+")


# ---------------------------------------------------------------------------
# Payload mapping
# ---------------------------------------------------------------------------


def _require(raw: dict[str, Any], field: str, kind: type) -> Any:
    value = raw.get(field)
    # bool is an int subclass; a boolean id is malformed, not a number.
    if isinstance(value, bool) or not isinstance(value, kind):
        raise ProviderError(
            message=f"Unexpected LRCLIB payload: field '{field}' missing or malformed",
            provider_name=_PROVIDER_NAME,
        )
    return value


def _optional_text(raw: dict[str, Any], field: str) -> str | None:
    value = raw.get(field)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ProviderError(
            message=f"Unexpected LRCLIB payload: field '{field}' is not text",
            provider_name=_PROVIDER_NAME,
        )
    return value


def map_track_metadata(raw: Any) -> TrackMetadata:
    """Translate an LRCLIB track record into :class:`TrackMetadata`.

    Raises
    ------
    ProviderError
        If *raw* is not an object or lacks ``id``, ``trackName`` or
        ``artistName`` with the expected types.
    """
    if not isinstance(raw, dict):
        raise ProviderError(
            message=f"Unexpected LRCLIB payload type: {type(raw).__name__}",
            provider_name=_PROVIDER_NAME,
        )

    track_name = _require(raw, "trackName", str)
    duration = raw.get("duration")
    if isinstance(duration, bool) or not isinstance(duration, (int, float)):
        duration = 0.0

    return TrackMetadata(
        id=_require(raw, "id", int),
        name=_optional_text(raw, "name") or track_name,
        track_name=track_name,
        artist_name=_require(raw, "artistName", str),
        album_name=_optional_text(raw, "albumName") or "",
        duration_seconds=float(duration),
        is_instrumental=bool(raw.get("instrumental", False)),
        plain_lyrics=_optional_text(raw, "plainLyrics"),
        synced_lyrics=_optional_text(raw, "syncedLyrics"),
    )


def _timestamp_to_ms(minutes: str, seconds: str, fraction: str | None) -> int:
    ms = int(minutes) * 60_000 + int(seconds) * 1000
    if fraction:
        # "5" -> 500 ms, "05" -> 50 ms, "005" -> 5 ms
        ms += int(fraction.ljust(3, "0"))
    return ms


def parse_lrc(document: str) -> list[SyncedLine]:
    """Parse an LRC document into synced lines ordered by start time.

    Lines carrying several timestamps (repeated choruses) produce one
    SyncedLine per stamp.  Metadata tags such as ``[ar:Artist]`` and lines
    without a timestamp are skipped.
    """
    lines: list[SyncedLine] = []
    for raw_line in document.splitlines():
        prefix = _LRC_PREFIX_RE.match(raw_line.strip())
        if not prefix:
            continue
        text = raw_line.strip()[prefix.end():].strip()
        for stamp in _LRC_TIMESTAMP_RE.finditer(prefix.group(0)):
            lines.append(
                SyncedLine(text=text, start_time_ms=_timestamp_to_ms(*stamp.groups()))
            )

    lines.sort(key=lambda line: line.start_time_ms)
    return lines


def split_plain_lyrics(document: str) -> list[UnsyncedLine]:
    """Split plain lyrics into one UnsyncedLine per text line."""
    return [UnsyncedLine(text=line) for line in document.splitlines()]


# ---------------------------------------------------------------------------
# Provider
# ---------------------------------------------------------------------------


class LrclibProvider(ILyricsProvider):
    """Lyrics provider backed by the LRCLIB public API.

    Parameters
    ----------
    http_client:
        Shared async HTTP client; its lifecycle belongs to the caller.
    base_url:
        API root, overridable for self-hosted LRCLIB mirrors.
    user_agent:
        Sent with every request as LRCLIB asks clients to identify themselves.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        base_url: str = DEFAULT_BASE_URL,
        user_agent: str = DEFAULT_USER_AGENT,
    ) -> None:
        self._http = http_client
        self._base_url = base_url.rstrip("/")
        self._user_agent = user_agent
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @staticmethod
    def _params(query: Query) -> dict[str, str]:
        params = {
            "track_name": query.track_name,
            "artist_name": query.artist_name,
        }
        if query.album_name:
            params["album_name"] = query.album_name
        return params

    async def _request(self, path: str, params: dict[str, str]) -> httpx.Response:
        url = f"{self._base_url}{path}"
        headers = {
            "User-Agent": self._user_agent,
            "Accept": "application/json",
        }
        try:
            response = await self._http.get(url, params=params, headers=headers)
        except httpx.HTTPError as exc:
            raise ProviderError(
                message=f"LRCLIB request to {path} failed: {exc}",
                provider_name=_PROVIDER_NAME,
            ) from exc
        self._logger.debug("lrclib_response", path=path, status=response.status_code)
        return response

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        try:
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as exc:
            raise ProviderError(
                message=f"LRCLIB returned HTTP {exc.response.status_code}",
                provider_name=_PROVIDER_NAME,
            ) from exc
        except ValueError as exc:
            raise ProviderError(
                message="LRCLIB returned a non-JSON body",
                provider_name=_PROVIDER_NAME,
            ) from exc

    async def _fetch_track(self, query: Query) -> TrackMetadata | None:
        params = self._params(query)

        response = await self._request("/api/get", params)
        if response.status_code != 404:
            return map_track_metadata(self._decode(response))

        response = await self._request("/api/search", params)
        hits = self._decode(response)
        if not isinstance(hits, list):
            raise ProviderError(
                message="Unexpected LRCLIB search payload: expected a list",
                provider_name=_PROVIDER_NAME,
            )
        if not hits:
            self._logger.debug("lrclib_no_match", track=query.track_name, artist=query.artist_name)
            return None

        self._logger.debug("lrclib_search_fallback", hits=len(hits))
        return map_track_metadata(hits[0])

    # -- ILyricsProvider implementation ----------------------------------------

    async def find_metadata(self, query: Query) -> TrackMetadata | None:
        return await self._fetch_track(query)

    async def get_unsynced_lines(self, query: Query) -> list[UnsyncedLine] | None:
        track = await self._fetch_track(query)
        if track is None or not track.plain_lyrics:
            return None
        return split_plain_lyrics(track.plain_lyrics)

    async def get_synced_lines(self, query: Query) -> list[SyncedLine] | None:
        track = await self._fetch_track(query)
        if track is None or not track.synced_lyrics:
            return None
        lines = parse_lrc(track.synced_lyrics)
        return lines or None

    def get_provider_name(self) -> str:
        return _PROVIDER_NAME

    def is_available(self) -> bool:
        return not self._http.is_closed
