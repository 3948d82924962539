"""Shared pytest fixtures for the lyrlib test suite."""

from __future__ import annotations

from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from lyrlib.interfaces.lyrics_provider import ILyricsProvider
from lyrlib.models.lyrics import SyncedLine, TrackMetadata, UnsyncedLine

SAMPLE_LRC = "[00:12.50]Hello darkness\n[00:17.00]my old friend"
SAMPLE_PLAIN = "Hello darkness\nmy old friend"


class FakeClock:
    """Manually advanced time source for cache and rate-limiter tests."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sample_metadata() -> TrackMetadata:
    """A fully populated track record as the LRCLIB adapter would build it."""
    return TrackMetadata(
        id=3396226,
        name="The Sound of Silence",
        track_name="The Sound of Silence",
        artist_name="Simon & Garfunkel",
        album_name="Wednesday Morning, 3 A.M.",
        duration_seconds=185.0,
        is_instrumental=False,
        plain_lyrics=SAMPLE_PLAIN,
        synced_lyrics=SAMPLE_LRC,
    )


@pytest.fixture
def sample_lrclib_payload() -> dict:
    """Raw /api/get response body for the sample track."""
    return {
        "id": 3396226,
        "name": "The Sound of Silence",
        "trackName": "The Sound of Silence",
        "artistName": "Simon & Garfunkel",
        "albumName": "Wednesday Morning, 3 A.M.",
        "duration": 185,
        "instrumental": False,
        "plainLyrics": SAMPLE_PLAIN,
        "syncedLyrics": SAMPLE_LRC,
    }


@pytest.fixture
def sample_query() -> dict:
    return {"track_name": "The Sound of Silence", "artist_name": "Simon & Garfunkel"}


@pytest.fixture
def mock_lyrics_provider(sample_metadata: TrackMetadata) -> ILyricsProvider:
    """Mock ILyricsProvider answering every lookup with the sample track."""
    mock = MagicMock(spec=ILyricsProvider)
    mock.get_provider_name.return_value = "mock"
    mock.is_available.return_value = True
    mock.find_metadata = AsyncMock(return_value=sample_metadata)
    mock.get_unsynced_lines = AsyncMock(
        return_value=[UnsyncedLine(text="Hello darkness"), UnsyncedLine(text="my old friend")]
    )
    mock.get_synced_lines = AsyncMock(
        return_value=[
            SyncedLine(text="Hello darkness", start_time_ms=12_500),
            SyncedLine(text="my old friend", start_time_ms=17_000),
        ]
    )
    return mock
