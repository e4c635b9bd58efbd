"""ANSI-aware width helpers for picker rows.

Candidate labels carry kind styling, so clipping and padding walk the text as
alternating escape and printable tokens and only count the printable ones.
"""

from __future__ import annotations

import re
import unicodedata
from collections.abc import Iterator

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
TAB_STOP = 8


def char_display_width(ch: str, col: int) -> int:
    """Columns taken by ``ch`` when drawn at column ``col``.

    Tabs run to the next stop, combining marks take none, wide and fullwidth
    East Asian characters take two.
    """
    if ch == "\t":
        return TAB_STOP - col % TAB_STOP
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1


def _tokens(text: str) -> Iterator[tuple[bool, str]]:
    """Yield ``(is_escape, chunk)`` pairs covering ``text`` in order."""
    pos = 0
    for match in ANSI_ESCAPE_RE.finditer(text):
        if match.start() > pos:
            yield False, text[pos : match.start()]
        yield True, match.group(0)
        pos = match.end()
    if pos < len(text):
        yield False, text[pos:]


def strip_ansi(text: str) -> str:
    return ANSI_ESCAPE_RE.sub("", text)


def display_width(text: str) -> int:
    """Terminal columns used by ``text``, escapes excluded."""
    col = 0
    for ch in strip_ansi(text):
        col += char_display_width(ch, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Cut ``text`` to ``max_cols`` columns, keeping escapes before the cut.

    Tabs are emitted as spaces so the result lines up with terminal cells.
    """
    if max_cols <= 0:
        return ""
    out: list[str] = []
    col = 0
    for is_escape, chunk in _tokens(text):
        if is_escape:
            out.append(chunk)
            continue
        for ch in chunk:
            width = char_display_width(ch, col)
            if col + width > max_cols:
                return "".join(out)
            out.append(" " * width if ch == "\t" else ch)
            col += width
        if col >= max_cols:
            break
    return "".join(out)


def pad_ansi_line(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` and right-pad it with spaces to fill the row."""
    clipped = clip_ansi_line(text, width)
    return clipped + " " * max(0, width - display_width(clipped))


__all__ = [
    "ANSI_ESCAPE_RE",
    "char_display_width",
    "clip_ansi_line",
    "display_width",
    "pad_ansi_line",
    "strip_ansi",
]
