"""In-memory TTL cache with per-entry lifetimes.

Entries live in a ``cachetools.LRUCache`` that bounds memory by entry count;
expiry is tracked per entry in :class:`CacheEntry` records and enforced
lazily on read, so the hot path stays O(1) with no timer infrastructure.
``clean()`` is the only O(n) operation and exists to reclaim memory held by
expired entries that nobody reads any more.
"""

from __future__ import annotations

import threading
import time
from typing import Any, Callable

import structlog
from cachetools import LRUCache

from lyrlib.interfaces.cache_provider import ICacheProvider
from lyrlib.models.state import CacheEntry
from lyrlib.utils.logging import get_logger


class TTLCache(ICacheProvider):
    """Thread-safe in-memory cache with per-entry time-to-live.

    Parameters
    ----------
    default_ttl:
        Lifetime in seconds applied when ``set`` is called without a TTL.
    max_entries:
        Capacity bound; when exceeded the least-recently-used entry is
        evicted regardless of its remaining lifetime.
    clock:
        Monotonic time source in seconds (tests inject a fake clock).
    """

    def __init__(
        self,
        default_ttl: float = 300.0,
        max_entries: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._default_ttl = default_ttl
        self._clock = clock
        self._lock = threading.Lock()
        self._store: LRUCache[str, CacheEntry[Any]] = LRUCache(maxsize=max_entries)
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def default_ttl(self) -> float:
        return self._default_ttl

    # ------------------------------------------------------------------
    # ICacheProvider implementation
    # ------------------------------------------------------------------

    def get(self, key: str) -> Any | None:
        """Return the value for *key*, evicting it first if it has expired."""
        with self._lock:
            entry = self._store.get(key)
            if entry is None:
                self._logger.debug("cache_miss", key=key)
                return None

            if entry.is_expired(self._clock()):
                del self._store[key]
                self._logger.debug("cache_expired", key=key)
                return None

        self._logger.debug("cache_hit", key=key)
        return entry.data

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Store *value* under *key*, replacing any entry and restarting its clock."""
        entry = CacheEntry(
            data=value,
            created_at=self._clock(),
            ttl=self._default_ttl if ttl is None else ttl,
        )
        with self._lock:
            self._store[key] = entry
        self._logger.debug("cache_set", key=key, ttl=entry.ttl)

    def delete(self, key: str) -> bool:
        """Remove *key*; return whether an entry was present."""
        with self._lock:
            existed = self._store.pop(key, None) is not None
        self._logger.debug("cache_delete", key=key, existed=existed)
        return existed

    def clear(self) -> None:
        with self._lock:
            self._store.clear()
        self._logger.debug("cache_cleared")

    def size(self) -> int:
        with self._lock:
            return len(self._store)

    def clean(self) -> int:
        """Evict every expired entry; return the number evicted."""
        with self._lock:
            now = self._clock()
            expired = [key for key, entry in list(self._store.items()) if entry.is_expired(now)]
            for key in expired:
                del self._store[key]

        if expired:
            self._logger.info("cache_cleaned", evicted=len(expired))
        return len(expired)
