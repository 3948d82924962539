"""Integration tests for FastAPI API endpoints using TestClient."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from lyrlib.interfaces.lyrics_provider import ILyricsProvider
from lyrlib.main import create_app
from lyrlib.pipeline.orchestrator import LyricsClient
from lyrlib.utils.errors import ProviderError, RequestTimeoutError

PARAMS = {"track": "The Sound of Silence", "artist": "Simon & Garfunkel"}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _create_test_client(provider: ILyricsProvider, **options) -> TestClient:
    lyrics_client = LyricsClient(provider=provider, options=options or None)
    return TestClient(create_app(client=lyrics_client))


@pytest.fixture
def api(mock_lyrics_provider: ILyricsProvider):
    with _create_test_client(mock_lyrics_provider) as client:
        yield client


# ======================================================================
# Lookups
# ======================================================================


class TestSearchEndpoint:
    def test_search(self, api: TestClient) -> None:
        response = api.get("/api/v1/search", params=PARAMS)
        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["results"] == [
            {
                "id": 3396226,
                "track": "The Sound of Silence",
                "artist": "Simon & Garfunkel",
                "album": "Wednesday Morning, 3 A.M.",
                "duration": 185.0,
                "score": 1.0,
                "has_synced_lyrics": True,
                "has_unsynced_lyrics": True,
            }
        ]

    def test_missing_artist_is_422(self, api: TestClient) -> None:
        response = api.get("/api/v1/search", params={"track": "x"})
        assert response.status_code == 422

    def test_blank_track_is_400(self, api: TestClient) -> None:
        response = api.get("/api/v1/search", params={"track": "  ", "artist": "x"})
        assert response.status_code == 400
        body = response.json()
        assert body["success"] is False
        assert body["error"] == "ValidationError"
        assert body["kind"] == "VALIDATION_ERROR"
        assert "track_name" in body["detail"]


class TestLyricsEndpoint:
    def test_unsynced_plain(self, api: TestClient) -> None:
        response = api.get("/api/v1/lyrics", params={**PARAMS, "format": "plain"})
        assert response.status_code == 200
        body = response.json()
        assert body["lyrics"] == "Hello darkness\nmy old friend"
        assert body["format"] == "plain"
        assert body["metadata"] is None

    def test_synced_lrc_with_metadata(self, api: TestClient) -> None:
        response = api.get(
            "/api/v1/lyrics",
            params={**PARAMS, "synced": "true", "format": "lrc", "include_metadata": "true"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["lyrics"].startswith("[00:12.50]Hello darkness")
        assert body["metadata"]["id"] == 3396226

    def test_lrc_for_unsynced_is_400(self, api: TestClient) -> None:
        response = api.get("/api/v1/lyrics", params={**PARAMS, "format": "lrc"})
        assert response.status_code == 400

    def test_unknown_format_is_422(self, api: TestClient) -> None:
        response = api.get("/api/v1/lyrics", params={**PARAMS, "format": "srt"})
        assert response.status_code == 422

    def test_by_metadata(self, api: TestClient) -> None:
        response = api.get(
            "/api/v1/lyrics/by-metadata",
            params={"title": "The Sound of Silence", "artist": "Simon & Garfunkel", "synced": "true"},
        )
        assert response.status_code == 200
        body = response.json()
        assert body["format"] == "json"
        assert body["metadata"]["track_name"] == "The Sound of Silence"


class TestMetadataEndpoint:
    def test_metadata(self, api: TestClient) -> None:
        response = api.get("/api/v1/metadata", params=PARAMS)
        assert response.status_code == 200
        assert response.json()["metadata"]["artist_name"] == "Simon & Garfunkel"


# ======================================================================
# Error mapping
# ======================================================================


class TestErrorMapping:
    def test_not_found_is_404(self, mock_lyrics_provider: ILyricsProvider) -> None:
        mock_lyrics_provider.find_metadata = AsyncMock(return_value=None)
        with _create_test_client(mock_lyrics_provider) as api:
            response = api.get("/api/v1/metadata", params=PARAMS)
        assert response.status_code == 404
        assert response.json()["kind"] == "NOT_FOUND"

    def test_rate_limit_is_429_with_retry_after(self, mock_lyrics_provider: ILyricsProvider) -> None:
        with _create_test_client(
            mock_lyrics_provider, max_requests_per_minute=1, enable_cache=False
        ) as api:
            assert api.get("/api/v1/metadata", params=PARAMS).status_code == 200
            response = api.get("/api/v1/metadata", params=PARAMS)
        assert response.status_code == 429
        assert 0 < int(response.headers["Retry-After"]) <= 60

    def test_timeout_is_504(self, mock_lyrics_provider: ILyricsProvider) -> None:
        mock_lyrics_provider.find_metadata = AsyncMock(side_effect=RequestTimeoutError())
        with _create_test_client(mock_lyrics_provider) as api:
            response = api.get("/api/v1/metadata", params=PARAMS)
        assert response.status_code == 504

    def test_provider_error_is_502(self, mock_lyrics_provider: ILyricsProvider) -> None:
        mock_lyrics_provider.find_metadata = AsyncMock(
            side_effect=ProviderError("LRCLIB returned HTTP 500", provider_name="lrclib")
        )
        with _create_test_client(mock_lyrics_provider) as api:
            response = api.get("/api/v1/metadata", params=PARAMS)
        assert response.status_code == 502
        assert response.json()["detail"] == "LRCLIB returned HTTP 500"


# ======================================================================
# Health & administration
# ======================================================================


class TestHealthAndAdmin:
    def test_health(self, api: TestClient) -> None:
        response = api.get("/api/v1/health")
        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "healthy"
        assert body["provider"] == "mock"
        assert body["provider_available"] is True
        assert body["cache"] == {"size": 0, "evicted": 0}
        assert body["rate_limit"]["count"] == 0
        assert body["rate_limit"]["max_requests"] == 60

    def test_clear_cache(self, api: TestClient) -> None:
        api.get("/api/v1/metadata", params=PARAMS)
        assert api.get("/api/v1/health").json()["cache"]["size"] == 1
        response = api.delete("/api/v1/cache")
        assert response.status_code == 200
        assert api.get("/api/v1/health").json()["cache"]["size"] == 0

    def test_reset_rate_limit(self, api: TestClient) -> None:
        api.get("/api/v1/metadata", params=PARAMS)
        assert api.get("/api/v1/health").json()["rate_limit"]["count"] == 1
        response = api.post("/api/v1/rate-limit/reset")
        assert response.status_code == 200
        assert api.get("/api/v1/health").json()["rate_limit"]["count"] == 0
