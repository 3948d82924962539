"""Pydantic response schemas for the lyrlib HTTP API.

# ─── HOW SCHEMAS WORK ─────────────────────────────────────────────────
#
# FastAPI uses these models to serialize responses (via response_model=...)
# and to generate the OpenAPI docs at /docs.  Lookup parameters arrive as
# query-string values and are validated by the client's own validator, so
# only response shapes are declared here.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from lyrlib.models.lyrics import LyricsFormat, TrackMetadata
from lyrlib.models.state import CacheStats, RateLimitStatus


class SearchResultItem(BaseModel):
    """One scored match, flattened for API consumers."""

    id: int
    track: str
    artist: str
    album: str
    duration: float
    score: float = Field(ge=0.0, le=1.0)
    has_synced_lyrics: bool
    has_unsynced_lyrics: bool


class SearchResponse(BaseModel):
    success: bool = True
    results: list[SearchResultItem] = Field(default_factory=list)


class LyricsResponse(BaseModel):
    success: bool = True
    lyrics: str
    format: LyricsFormat
    metadata: TrackMetadata | None = None


class MetadataResponse(BaseModel):
    success: bool = True
    metadata: TrackMetadata


class HealthResponse(BaseModel):
    """Health check payload including cache and rate-limit snapshots."""

    status: str = "healthy"
    version: str
    provider: str
    provider_available: bool
    cache: CacheStats
    rate_limit: RateLimitStatus


class AdminActionResponse(BaseModel):
    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    """Sanitized error body returned for every library error."""

    success: bool = False
    error: str
    kind: str
    detail: str
