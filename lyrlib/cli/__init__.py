"""Command-line tools for lyrlib.

- ``python -m lyrlib.cli`` (or ``python -m lyrlib.cli.lookup``): search
  LRCLIB, print lyrics, or show a track record.
- ``python -m lyrlib.main``: serve the HTTP API.
"""
