"""Unit tests for the fixed-window RateLimiter."""

from __future__ import annotations

import pytest

from lyrlib.utils.errors import RateLimitError
from lyrlib.utils.rate_limiter import RateLimiter


class TestRateLimiter:
    @pytest.fixture()
    def limiter(self, clock) -> RateLimiter:
        return RateLimiter(max_requests=3, window_seconds=60.0, clock=clock)

    def test_admits_up_to_max_requests(self, limiter: RateLimiter) -> None:
        for _ in range(3):
            limiter.check_limit()
        assert limiter.get_status().count == 3

    def test_rejects_when_exhausted(self, limiter: RateLimiter, clock) -> None:
        for _ in range(3):
            limiter.check_limit()
        clock.advance(15)
        with pytest.raises(RateLimitError) as exc_info:
            limiter.check_limit()
        assert exc_info.value.retry_after == pytest.approx(45.0)
        assert "45 seconds" in exc_info.value.message

    def test_rejection_does_not_increment_count(self, limiter: RateLimiter) -> None:
        for _ in range(3):
            limiter.check_limit()
        for _ in range(2):
            with pytest.raises(RateLimitError):
                limiter.check_limit()
        status = limiter.get_status()
        assert status.count == 3
        assert status.limited is True

    def test_window_resets_after_elapsed(self, limiter: RateLimiter, clock) -> None:
        for _ in range(3):
            limiter.check_limit()
        clock.advance(60)
        limiter.check_limit()
        status = limiter.get_status()
        assert status.count == 1
        assert status.limited is False
        assert status.reset_time == pytest.approx(clock.now + 60)

    def test_status_snapshot(self, limiter: RateLimiter, clock) -> None:
        limiter.check_limit()
        status = limiter.get_status()
        assert status.count == 1
        assert status.max_requests == 3
        assert status.reset_time == pytest.approx(clock.now + 60)
        assert status.limited is False

    def test_get_status_does_not_mutate(self, limiter: RateLimiter) -> None:
        limiter.check_limit()
        limiter.get_status()
        limiter.get_status()
        assert limiter.get_status().count == 1

    def test_reset(self, limiter: RateLimiter, clock) -> None:
        for _ in range(3):
            limiter.check_limit()
        clock.advance(5)
        limiter.reset()
        status = limiter.get_status()
        assert status.count == 0
        assert status.limited is False
        assert status.reset_time == pytest.approx(clock.now + 60)
        limiter.check_limit()

    def test_max_requests_property(self, limiter: RateLimiter) -> None:
        assert limiter.max_requests == 3
