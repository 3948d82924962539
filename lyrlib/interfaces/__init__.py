"""Public interface definitions for the client's collaborators.

The orchestrating client reaches its cache and the external lyrics service
exclusively through these abstract base classes.  Concrete adapters are
injected at construction time:

    Interface          →  Concrete implementations
    ─────────────────────────────────────────────────
    ICacheProvider     →  TTLCache (lyrlib.providers.cache)
    ILyricsProvider    →  LrclibProvider (lyrlib.providers.lyrics)

Unit tests inject ``MagicMock(spec=ILyricsProvider)`` stubs in place of the
real provider.
"""

from lyrlib.interfaces.cache_provider import ICacheProvider
from lyrlib.interfaces.lyrics_provider import ILyricsProvider

__all__ = [
    "ICacheProvider",
    "ILyricsProvider",
]
