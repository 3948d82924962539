"""Abstract base class for lyrics lookup providers.

Defines the capability the orchestrating client needs from the external
lyrics service: given a validated query, asynchronously return track
metadata or lyric lines, or signal absence with ``None``.  Concrete adapters
map the provider's own payloads into lyrlib models before returning.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from lyrlib.models.lyrics import Query, SyncedLine, TrackMetadata, UnsyncedLine


class ILyricsProvider(ABC):
    """Contract for lyrics lookup services.

    Implementations may raise :class:`lyrlib.utils.errors.ProviderError` on
    transport or protocol failures; any other exception escaping a method is
    wrapped in ``ProviderError`` by the client.
    """

    @abstractmethod
    async def find_metadata(self, query: Query) -> TrackMetadata | None:
        """Return the best-matching track for *query*, or ``None`` if absent."""

    @abstractmethod
    async def get_unsynced_lines(self, query: Query) -> list[UnsyncedLine] | None:
        """Return the plain lyric lines for *query*, or ``None`` if absent."""

    @abstractmethod
    async def get_synced_lines(self, query: Query) -> list[SyncedLine] | None:
        """Return the timestamped lyric lines for *query*, or ``None`` if absent."""

    @abstractmethod
    def get_provider_name(self) -> str:
        """Return a short identifier for this provider, e.g. ``"lrclib"``."""

    @abstractmethod
    def is_available(self) -> bool:
        """Return ``True`` if the provider is configured and usable."""
