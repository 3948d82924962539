"""Build a ready-to-use :class:`LyricsClient` from a resolved config dict."""

from __future__ import annotations

import httpx

from lyrlib.config.loader import build_client_options
from lyrlib.pipeline.orchestrator import LyricsClient
from lyrlib.providers.lyrics.lrclib_provider import DEFAULT_BASE_URL, LrclibProvider


def build_client(config: dict) -> tuple[LyricsClient, httpx.AsyncClient]:
    """Build a :class:`LyricsClient` and the HTTP client it talks through.

    *config* is the output of :func:`lyrlib.config.load_config`.  The caller
    owns the returned ``httpx.AsyncClient`` and must close it.
    """
    options = build_client_options(config)
    base_url = (config.get("lrclib") or {}).get("base_url") or DEFAULT_BASE_URL
    http_client = httpx.AsyncClient(timeout=options.request_timeout_seconds)
    provider = LrclibProvider(http_client, base_url=base_url, user_agent=options.user_agent)
    return LyricsClient(provider=provider, options=options), http_client
