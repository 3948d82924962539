"""Lyrics lookup providers.

LrclibProvider talks to the public LRCLIB API over an injected
``httpx.AsyncClient``.  The mapping helpers are exported for reuse by
callers that already hold raw LRCLIB payloads.
"""

from lyrlib.providers.lyrics.lrclib_provider import (
    LrclibProvider,
    map_track_metadata,
    parse_lrc,
    split_plain_lyrics,
)

__all__ = ["LrclibProvider", "map_track_metadata", "parse_lrc", "split_plain_lyrics"]
