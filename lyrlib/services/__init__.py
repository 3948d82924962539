"""Pure services applied to provider output.

- **result_ranker** -- weighted similarity scoring, search result
  construction, stable ranking.
- **lyrics_formatter** -- plain / LRC / JSON rendering of line sequences.
"""

from lyrlib.services.lyrics_formatter import format_lyrics
from lyrlib.services.result_ranker import build_search_result, score, sort_results

__all__ = ["build_search_result", "format_lyrics", "score", "sort_results"]
