"""Command-line lyrics lookups.

Usage::

    python -m lyrlib.cli search "Track" "Artist" [--album ALBUM] [--limit N]
    python -m lyrlib.cli lyrics "Track" "Artist" [--synced] [--format lrc]
    python -m lyrlib.cli metadata "Track" "Artist"

Results go to stdout; log output always goes to stderr so the output can be
piped.  ``--quiet`` (implied by ``--json``) raises the log threshold to
WARNING.  Library errors are printed as ``Error: ...`` and exit with code 1.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any

from lyrlib.config.loader import load_config
from lyrlib.models.lyrics import LyricsFormat, SearchResult
from lyrlib.pipeline.factory import build_client
from lyrlib.pipeline.orchestrator import LyricsClient
from lyrlib.utils.errors import LyrlibError
from lyrlib.utils.logging import configure_logging


def _query(args: argparse.Namespace) -> dict[str, Any]:
    return {"track_name": args.track, "artist_name": args.artist, "album_name": args.album}


def _format_result(result: SearchResult) -> str:
    metadata = result.metadata
    album = f" ({metadata.album_name})" if metadata.album_name else ""
    flags = [name for name, present in (("synced", result.has_synced), ("plain", result.has_unsynced)) if present]
    return (
        f"{result.score:.2f}  {metadata.artist_name} - {metadata.track_name}{album}"
        f"  [{', '.join(flags) or 'instrumental'}]  id={metadata.id}"
    )


# ---------------------------------------------------------------------------
# Subcommand handlers
# ---------------------------------------------------------------------------


async def _handle_search(client: LyricsClient, args: argparse.Namespace) -> str:
    results = await client.search(
        _query(args),
        {"limit": args.limit, "prefer_synced": args.prefer_synced, "include_metadata": False},
    )
    if args.json_output:
        return json.dumps([r.model_dump(mode="json") for r in results], indent=2, ensure_ascii=False)
    return "\n".join(_format_result(r) for r in results)


async def _handle_lyrics(client: LyricsClient, args: argparse.Namespace) -> str:
    fmt = args.format or (LyricsFormat.LRC if args.synced else LyricsFormat.PLAIN)
    options = {"format": fmt, "include_metadata": args.json_output}
    if args.synced:
        formatted = await client.get_synced(_query(args), options)
    else:
        formatted = await client.get_unsynced(_query(args), options)
    if args.json_output:
        return json.dumps(formatted.model_dump(mode="json"), indent=2, ensure_ascii=False)
    return formatted.content


async def _handle_metadata(client: LyricsClient, args: argparse.Namespace) -> str:
    metadata = await client.find_metadata(_query(args))
    if args.json_output:
        return json.dumps(metadata.model_dump(mode="json"), indent=2, ensure_ascii=False)
    lines = [
        f"ID:           {metadata.id}",
        f"Track:        {metadata.track_name}",
        f"Artist:       {metadata.artist_name}",
        f"Album:        {metadata.album_name or '-'}",
        f"Duration:     {metadata.duration_seconds:.0f}s",
        f"Instrumental: {'yes' if metadata.is_instrumental else 'no'}",
        f"Synced:       {'yes' if metadata.synced_lyrics else 'no'}",
        f"Plain:        {'yes' if metadata.plain_lyrics else 'no'}",
    ]
    return "\n".join(lines)


_HANDLERS = {
    "search": _handle_search,
    "lyrics": _handle_lyrics,
    "metadata": _handle_metadata,
}


async def _run(args: argparse.Namespace) -> int:
    """Build a client from config, dispatch the subcommand and print its output.

    Returns 0 on success, 1 on any library error.
    """
    config = load_config(args.config)
    client, http_client = build_client(config)
    try:
        output = await _HANDLERS[args.command](client, args)
    except LyrlibError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    finally:
        await http_client.aclose()

    if output:
        print(output)
    return 0


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def _add_common(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("track", type=str, help="Track title.")
    parser.add_argument("artist", type=str, help="Artist name.")
    parser.add_argument("--album", type=str, default=None, help="Album title (improves matching).")
    parser.add_argument(
        "--json",
        action="store_true",
        dest="json_output",
        help="Output results as JSON instead of formatted text.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m lyrlib.cli",
        description="Look up tracks and lyrics on LRCLIB from the command line.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default="config/config.yaml",
        help="YAML config file (missing files fall back to defaults).",
    )
    parser.add_argument(
        "--quiet", "-q",
        action="store_true",
        help="Only log warnings and errors (implied by --json).",
    )
    subparsers = parser.add_subparsers(dest="command", help="Lookup commands")

    search_parser = subparsers.add_parser("search", help="List scored matches")
    _add_common(search_parser)
    search_parser.add_argument("--limit", type=int, default=10, help="Maximum results.")
    search_parser.add_argument(
        "--prefer-synced",
        action="store_true",
        help="List matches with synced lyrics first.",
    )

    lyrics_parser = subparsers.add_parser("lyrics", help="Print lyrics")
    _add_common(lyrics_parser)
    lyrics_parser.add_argument("--synced", action="store_true", help="Fetch timestamped lyrics.")
    lyrics_parser.add_argument(
        "--format",
        type=str,
        choices=[f.value for f in LyricsFormat],
        default=None,
        help="Output format (default: lrc with --synced, plain otherwise).",
    )

    metadata_parser = subparsers.add_parser("metadata", help="Show the track record")
    _add_common(metadata_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entry point: parse arguments, configure logging, run the lookup."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    quiet = args.quiet or args.json_output
    configure_logging(log_level="WARNING" if quiet else "INFO", stream=sys.stderr)

    sys.exit(asyncio.run(_run(args)))


if __name__ == "__main__":
    main()
