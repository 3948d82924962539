"""Fixed-window request governor for outbound provider calls.

The limiter counts requests in fixed windows of ``window_seconds``.  A burst
straddling a window boundary can admit up to ``2 * max_requests`` calls in a
short span; the limiter governs the client's own outbound rate against a
generous provider ceiling, so that approximation is accepted.

State is a single :class:`RateWindowState` per instance, guarded by a lock so
concurrent calls sharing one limiter never race on the counter.
"""

from __future__ import annotations

import threading
import time
from typing import Callable

import structlog

from lyrlib.models.state import RateLimitStatus, RateWindowState
from lyrlib.utils.errors import RateLimitError
from lyrlib.utils.logging import get_logger


class RateLimiter:
    """Fixed-window counting rate limiter.

    Parameters
    ----------
    max_requests:
        Maximum number of admitted calls per window.
    window_seconds:
        Length of each window in seconds.
    clock:
        Time source in seconds.  Defaults to ``time.time`` so that
        ``reset_time`` in the status snapshot is a Unix timestamp.
    """

    def __init__(
        self,
        max_requests: int = 60,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._max_requests = max_requests
        self._window = window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._state = RateWindowState(count=0, window_start=clock())
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def max_requests(self) -> int:
        return self._max_requests

    def check_limit(self) -> None:
        """Admit one request or raise :class:`RateLimitError`.

        Resets the window first if it has elapsed.  A rejected call does not
        increment the counter.
        """
        with self._lock:
            now = self._clock()
            state = self._state

            if now - state.window_start >= self._window:
                state.count = 0
                state.window_start = now
                state.limited = False

            if state.count >= self._max_requests:
                state.limited = True
                retry_after = (state.window_start + self._window) - now
                self._logger.warning(
                    "rate_limit_exceeded",
                    count=state.count,
                    max_requests=self._max_requests,
                    retry_after=round(retry_after, 3),
                )
                raise RateLimitError(retry_after=retry_after)

            state.count += 1

    def get_status(self) -> RateLimitStatus:
        """Return a snapshot of the current window without mutating it."""
        with self._lock:
            return RateLimitStatus(
                count=self._state.count,
                max_requests=self._max_requests,
                reset_time=self._state.window_start + self._window,
                limited=self._state.limited,
            )

    def reset(self) -> None:
        """Zero the window as if the limiter were newly constructed."""
        with self._lock:
            self._state = RateWindowState(count=0, window_start=self._clock())
        self._logger.debug("rate_limit_reset")
