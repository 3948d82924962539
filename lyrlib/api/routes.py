"""FastAPI route definitions for the lyrlib HTTP API.

Exposes the client's lookups (search, lyrics, metadata) plus health and
administration endpoints.  The shared :class:`LyricsClient` is resolved from
``app.state`` via FastAPI's ``Depends`` using the ``Annotated`` pattern.

# ─── API ROUTE MAP ────────────────────────────────────────────────────
#
# Endpoint                       Method  Description
# ─────────────────────────────────────────────────────────────────────
# /api/v1/search                 GET     Scored matches for track/artist/album
# /api/v1/lyrics                 GET     Synced or unsynced lyrics, formatted
# /api/v1/lyrics/by-metadata     GET     Loose title/artist lookup, then lyrics
# /api/v1/metadata               GET     Provider track record
# /api/v1/health                 GET     Health check + cache/limiter status
# /api/v1/cache                  DELETE  Drop every cached response
# /api/v1/rate-limit/reset       POST    Start a fresh rate-limit window
#
# Library errors raised here are turned into JSON responses by
# ErrorHandlingMiddleware (see middleware.py).
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Depends, Query, Request

from lyrlib import __version__
from lyrlib.api.schemas import (
    AdminActionResponse,
    HealthResponse,
    LyricsResponse,
    MetadataResponse,
    SearchResponse,
    SearchResultItem,
)
from lyrlib.models.lyrics import LyricsFormat, SearchResult
from lyrlib.pipeline.orchestrator import LyricsClient
from lyrlib.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter(prefix="/api/v1", tags=["lyrics"])


# ---------------------------------------------------------------------------
# Dependency helpers
# ---------------------------------------------------------------------------


def _get_client(request: Request) -> LyricsClient:
    return request.app.state.lyrics_client


ClientDep = Annotated[LyricsClient, Depends(_get_client)]


def _query(track: str, artist: str, album: str | None) -> dict[str, Any]:
    return {"track_name": track, "artist_name": artist, "album_name": album}


def _to_item(result: SearchResult) -> SearchResultItem:
    metadata = result.metadata
    return SearchResultItem(
        id=metadata.id,
        track=metadata.track_name,
        artist=metadata.artist_name,
        album=metadata.album_name,
        duration=metadata.duration_seconds,
        score=result.score,
        has_synced_lyrics=result.has_synced,
        has_unsynced_lyrics=result.has_unsynced,
    )


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------


@router.get("/search", response_model=SearchResponse)
async def search(
    client: ClientDep,
    track: Annotated[str, Query(description="Track title")],
    artist: Annotated[str, Query(description="Artist name")],
    album: Annotated[str | None, Query(description="Album title")] = None,
    limit: Annotated[int, Query(ge=1)] = 10,
    prefer_synced: bool = False,
) -> SearchResponse:
    """Return scored matches for the given track, best first."""
    results = await client.search(
        _query(track, artist, album),
        {"limit": limit, "prefer_synced": prefer_synced, "include_metadata": False},
    )
    return SearchResponse(results=[_to_item(result) for result in results])


@router.get("/lyrics", response_model=LyricsResponse)
async def lyrics(
    client: ClientDep,
    track: Annotated[str, Query(description="Track title")],
    artist: Annotated[str, Query(description="Artist name")],
    album: Annotated[str | None, Query(description="Album title")] = None,
    synced: bool = False,
    format: LyricsFormat = LyricsFormat.JSON,  # noqa: A002
    include_metadata: bool = False,
) -> LyricsResponse:
    """Return lyrics rendered as ``plain``, ``lrc`` or ``json``.

    ``synced=true`` selects timestamped lines (``lrc`` or ``json``);
    otherwise plain lines are returned (``plain`` or ``json``).
    """
    options = {"format": format, "include_metadata": include_metadata}
    fetch = client.get_synced if synced else client.get_unsynced
    formatted = await fetch(_query(track, artist, album), options)
    return LyricsResponse(
        lyrics=formatted.content,
        format=formatted.format,
        metadata=formatted.metadata,
    )


@router.get("/lyrics/by-metadata", response_model=LyricsResponse)
async def lyrics_by_metadata(
    client: ClientDep,
    title: str,
    artist: str,
    album: str | None = None,
    synced: bool = False,
    format: LyricsFormat = LyricsFormat.JSON,  # noqa: A002
    include_metadata: bool = True,
) -> LyricsResponse:
    """Resolve the track first, then return its lyrics with the resolved record."""
    formatted = await client.get_lyrics_by_metadata(
        title,
        artist,
        album,
        {"synced": synced, "format": format, "include_metadata": include_metadata},
    )
    return LyricsResponse(
        lyrics=formatted.content,
        format=formatted.format,
        metadata=formatted.metadata,
    )


@router.get("/metadata", response_model=MetadataResponse)
async def metadata(
    client: ClientDep,
    track: str,
    artist: str,
    album: str | None = None,
) -> MetadataResponse:
    record = await client.find_metadata(_query(track, artist, album))
    return MetadataResponse(metadata=record)


# ---------------------------------------------------------------------------
# Health & administration
# ---------------------------------------------------------------------------


@router.get("/health", response_model=HealthResponse)
async def health(client: ClientDep) -> HealthResponse:
    provider = client.provider
    return HealthResponse(
        version=__version__,
        provider=provider.get_provider_name(),
        provider_available=provider.is_available(),
        cache=client.cache_stats(),
        rate_limit=client.rate_limit_status(),
    )


@router.delete("/cache", response_model=AdminActionResponse)
async def clear_cache(client: ClientDep) -> AdminActionResponse:
    client.clear_cache()
    return AdminActionResponse(message="Cache cleared")


@router.post("/rate-limit/reset", response_model=AdminActionResponse)
async def reset_rate_limit(client: ClientDep) -> AdminActionResponse:
    client.reset_rate_limit()
    _logger.info("rate_limit_reset_via_api")
    return AdminActionResponse(message="Rate limit window reset")
