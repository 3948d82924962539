"""Abstract base class for cache providers.

Defines the contract for the key-value cache that sits in front of the
lyrics provider.  The orchestrating client only talks to this interface, so
an alternative store can be injected without touching the pipeline.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Mapping


class ICacheProvider(ABC):
    """Contract for TTL key-value caches.

    Operations are synchronous: the in-process store never blocks, and the
    client holds no await points between a lookup and its decision.
    """

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the value under *key*, or ``None`` if missing or expired.

        An expired entry is evicted as a side effect of the lookup.
        """

    @abstractmethod
    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Store *value* under *key*, replacing any existing entry.

        Parameters
        ----------
        key:
            The cache key.
        value:
            The value to store.  Should be immutable (frozen models, tuples)
            since the same object is handed to every reader.
        ttl:
            Lifetime in seconds; ``None`` uses the provider's default.
        """

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove *key*; return ``True`` iff an entry existed."""

    @abstractmethod
    def clear(self) -> None:
        """Drop every entry."""

    @abstractmethod
    def size(self) -> int:
        """Return the number of stored entries, including expired ones not yet evicted."""

    @abstractmethod
    def clean(self) -> int:
        """Evict every expired entry and return how many were evicted."""

    @staticmethod
    def generate_key(prefix: str, params: Mapping[str, Any]) -> str:
        """Build a deterministic key from *prefix* and *params*.

        Parameter names are sorted so insertion order never matters, and the
        prefix namespaces the key so different operations never collide.
        ``None`` values are skipped.

        Example: ``generate_key("search", {"b": 2, "a": 1})`` returns
        ``"search:a:1|b:2"``.
        """
        parts = [f"{name}:{params[name]}" for name in sorted(params) if params[name] is not None]
        return f"{prefix}:{'|'.join(parts)}"
