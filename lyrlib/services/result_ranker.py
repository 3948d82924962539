"""Scoring and ranking of provider matches.

A match is scored against the query as a weighted average of per-field
similarities:

    track name   0.4
    artist name  0.4
    album name   0.2  (only when both query and match name an album)

The weights actually applied are renormalized, so a query without an album
can still reach a perfect 1.0.
"""

from __future__ import annotations

from typing import Iterable

from lyrlib.models.lyrics import Query, SearchResult, TrackMetadata
from lyrlib.utils.similarity import similarity

TRACK_WEIGHT = 0.4
ARTIST_WEIGHT = 0.4
ALBUM_WEIGHT = 0.2


def _weighted_average(factors: Iterable[tuple[float, float]]) -> float:
    total_weight = 0.0
    weighted_sum = 0.0
    for value, weight in factors:
        weighted_sum += value * weight
        total_weight += weight
    if total_weight == 0:
        return 0.0
    # Clamp to guard against floating-point drift past the bounds.
    return max(0.0, min(1.0, weighted_sum / total_weight))


def score(query: Query, metadata: TrackMetadata) -> float:
    """Return how well *metadata* matches *query*, in ``[0.0, 1.0]``."""
    factors: list[tuple[float, float]] = []

    if query.track_name:
        factors.append((similarity(query.track_name, metadata.track_name), TRACK_WEIGHT))
    if query.artist_name:
        factors.append((similarity(query.artist_name, metadata.artist_name), ARTIST_WEIGHT))
    if query.album_name and metadata.album_name:
        factors.append((similarity(query.album_name, metadata.album_name), ALBUM_WEIGHT))

    return _weighted_average(factors)


def _has_text(value: str | None) -> bool:
    return bool(value and value.strip())


def build_search_result(metadata: TrackMetadata, query: Query) -> SearchResult:
    """Wrap *metadata* with its score and lyric availability flags."""
    return SearchResult(
        metadata=metadata,
        score=score(query, metadata),
        has_synced=_has_text(metadata.synced_lyrics),
        has_unsynced=_has_text(metadata.plain_lyrics),
    )


def sort_results(results: Iterable[SearchResult]) -> list[SearchResult]:
    """Return a new list sorted by descending score; ties keep input order."""
    return sorted(results, key=lambda result: result.score, reverse=True)


def prefer_synced(results: Iterable[SearchResult]) -> list[SearchResult]:
    """Move results with synced lyrics ahead of the rest, preserving order within each group."""
    return sorted(results, key=lambda result: not result.has_synced)


def strip_lyrics(result: SearchResult) -> SearchResult:
    """Return a copy of *result* whose metadata omits the lyric bodies.

    The availability flags are kept, so callers still know what exists.
    """
    metadata = result.metadata.model_copy(update={"plain_lyrics": None, "synced_lyrics": None})
    return result.model_copy(update={"metadata": metadata})
