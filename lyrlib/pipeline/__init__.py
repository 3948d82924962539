"""Request orchestration: the LyricsClient pipeline."""

from lyrlib.pipeline.orchestrator import LyricsClient

__all__ = ["LyricsClient"]
