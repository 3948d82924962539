"""Internal state records for the cache and rate limiter, plus their snapshots.

``CacheEntry`` and ``RateWindowState`` are owned exclusively by the component
that created them and never leave it; callers only ever see the frozen
``CacheStats`` / ``RateLimitStatus`` snapshots.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

_T = TypeVar("_T")


@dataclass(frozen=True)
class CacheEntry(Generic[_T]):
    """A cached value with its creation time and lifetime (both in seconds).

    Entries are replaced on every ``set``; they are never mutated in place.
    """

    data: _T
    created_at: float
    ttl: float

    def is_expired(self, now: float) -> bool:
        return now - self.created_at > self.ttl


@dataclass
class RateWindowState:
    """Mutable counter for the current fixed window of a rate limiter."""

    count: int
    window_start: float
    limited: bool = False


class CacheStats(BaseModel):
    """Cache size after an eager sweep, and how many entries that sweep evicted."""

    model_config = ConfigDict(frozen=True)

    size: int
    evicted: int


class RateLimitStatus(BaseModel):
    """Read-only view of a rate limiter's current window."""

    model_config = ConfigDict(frozen=True)

    count: int
    max_requests: int
    reset_time: float
    limited: bool
