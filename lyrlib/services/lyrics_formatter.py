"""Rendering of lyric line sequences into plain text, LRC, or JSON.

All functions are pure and synchronous.  The output of ``format_lyrics`` is a
frozen :class:`FormattedLyrics`, so a rendered result can be cached and
shared as-is.
"""

from __future__ import annotations

import json
from typing import Sequence

from lyrlib.models.lyrics import (
    FormattedLyrics,
    LyricsFormat,
    LyricsLine,
    SyncedLine,
    TrackMetadata,
)
from lyrlib.utils.errors import ValidationError


def is_synced(lines: Sequence[LyricsLine]) -> bool:
    """Return ``True`` if every line carries a start time.

    Raises:
        ValidationError: If synced and unsynced lines are mixed.
    """
    synced = [isinstance(line, SyncedLine) for line in lines]
    if any(synced) and not all(synced):
        raise ValidationError("lyrics must not mix synced and unsynced lines")
    return all(synced)


def format_timestamp(start_time_ms: int) -> str:
    """Render milliseconds as an LRC ``[MM:SS.CC]`` stamp.

    >>> format_timestamp(61_230)
    '[01:01.23]'
    """
    minutes = start_time_ms // 60_000
    seconds = (start_time_ms % 60_000) // 1000
    centiseconds = (start_time_ms % 1000) // 10
    return f"[{minutes:02d}:{seconds:02d}.{centiseconds:02d}]"


def to_plain(lines: Sequence[LyricsLine]) -> str:
    return "\n".join(line.text for line in lines)


def to_lrc(lines: Sequence[SyncedLine]) -> str:
    return "\n".join(f"{format_timestamp(line.start_time_ms)}{line.text}" for line in lines)


def to_json(lines: Sequence[LyricsLine]) -> str:
    # model_dump preserves declaration order: text, then start_time_ms.
    return json.dumps([line.model_dump() for line in lines], indent=2, ensure_ascii=False)


def format_lyrics(
    lines: Sequence[LyricsLine],
    format: LyricsFormat | str = LyricsFormat.JSON,  # noqa: A002
    metadata: TrackMetadata | None = None,
) -> FormattedLyrics:
    """Render *lines* in *format*.

    Parameters
    ----------
    lines:
        A sequence of UnsyncedLine or of SyncedLine (never mixed).
    format:
        ``plain``, ``lrc`` or ``json``.
    metadata:
        Attached to the result unchanged when given.

    Raises
    ------
    ValidationError
        If the format is unknown, the lines are mixed, or ``lrc`` is requested
        for unsynced lines.
    """
    try:
        fmt = LyricsFormat(format)
    except ValueError as exc:
        raise ValidationError(f"unsupported lyrics format: {format!r}") from exc

    synced = is_synced(lines)

    if fmt is LyricsFormat.PLAIN:
        content = to_plain(lines)
    elif fmt is LyricsFormat.LRC:
        if not synced:
            raise ValidationError("LRC format requires synced lyrics")
        content = to_lrc([line for line in lines if isinstance(line, SyncedLine)])
    else:
        content = to_json(lines)

    return FormattedLyrics(content=content, format=fmt, metadata=metadata)
