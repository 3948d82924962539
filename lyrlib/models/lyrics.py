"""Core domain models for lyrics lookup.

Defines the query shape, provider-identified track metadata, the two lyric
line variants, scored search results and formatted output.  All models use
frozen config so that values handed out of the cache can be shared freely
between callers without defensive copying.

Key relationships:
    - Query is produced only by :func:`lyrlib.utils.validation.validate_query`
    - SearchResult wraps one TrackMetadata plus a derived score
    - FormattedLyrics is produced by :mod:`lyrlib.services.lyrics_formatter`
"""

from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field


class LyricsFormat(str, Enum):  # noqa: UP042 (StrEnum requires Python 3.11+)
    """Output formats supported by the formatter.

    PLAIN: newline-joined text, timestamps dropped
    LRC:   ``[MM:SS.CC]text`` lines, synced input only
    JSON:  pretty-printed structural dump of the line sequence
    """

    PLAIN = "plain"
    LRC = "lrc"
    JSON = "json"


class Query(BaseModel):
    """A validated lookup query.

    Construct through ``validate_query``; every field is already trimmed and
    ``album_name`` is ``None`` when the caller did not supply one.
    """

    model_config = ConfigDict(frozen=True)

    track_name: str
    artist_name: str
    album_name: str | None = None


class TrackMetadata(BaseModel):
    """A track record identified by the lyrics provider.

    Built only by the provider adapter's explicit mapping function so the
    internal model stays decoupled from the provider's wire representation.
    """

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    track_name: str
    artist_name: str
    album_name: str = ""
    duration_seconds: float = 0.0
    is_instrumental: bool = False
    plain_lyrics: str | None = None     # raw newline-separated text
    synced_lyrics: str | None = None    # raw LRC document


class UnsyncedLine(BaseModel):
    """A lyric line without timing information."""

    model_config = ConfigDict(frozen=True)

    text: str


class SyncedLine(BaseModel):
    """A lyric line annotated with its playback start offset."""

    model_config = ConfigDict(frozen=True)

    text: str
    start_time_ms: int = Field(ge=0)


LyricsLine = Union[UnsyncedLine, SyncedLine]


class SearchResult(BaseModel):
    """A provider match scored against the query that produced it.

    ``score`` is derived from the query and ``metadata``; recomputing it via
    :func:`lyrlib.services.result_ranker.score` yields the same value.
    """

    model_config = ConfigDict(frozen=True)

    metadata: TrackMetadata
    score: float = Field(ge=0.0, le=1.0)
    has_synced: bool = False
    has_unsynced: bool = False


class FormattedLyrics(BaseModel):
    """Rendered lyrics plus the format used and optional track metadata."""

    model_config = ConfigDict(frozen=True)

    content: str
    format: LyricsFormat
    metadata: TrackMetadata | None = None
