"""Display-column arithmetic for styled terminal text.

Frames never wrap: every row is cut to the terminal width and list/diff
cells are padded to fixed columns. SGR sequences pass through untouched and
occupy no columns.
"""

from __future__ import annotations

import re
import unicodedata

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;?]*[ -/]*[@-~]")
_ESCAPE_SPLIT_RE = re.compile(f"({ANSI_ESCAPE_RE.pattern})")
TAB_STOP = 8


def cell_width(ch: str, col: int) -> int:
    """Columns taken by ``ch`` when drawn at column ``col``."""
    if ch == "\t":
        return TAB_STOP - col % TAB_STOP
    if unicodedata.combining(ch):
        return 0
    return 2 if unicodedata.east_asian_width(ch) in ("W", "F") else 1


def display_width(text: str) -> int:
    """Return the rendered width of ``text`` ignoring escape sequences."""
    col = 0
    for ch in ANSI_ESCAPE_RE.sub("", text):
        col += cell_width(ch, col)
    return col


def clip_ansi_line(text: str, max_cols: int) -> str:
    """Cut ``text`` after ``max_cols`` display columns.

    Escape sequences before the cut are kept; tabs become spaces so the cut
    lines up with what the terminal would draw. A wide character that would
    straddle the edge is dropped.
    """
    if max_cols <= 0 or not text:
        return ""

    pieces: list[str] = []
    col = 0
    for chunk in _ESCAPE_SPLIT_RE.split(text):
        if not chunk:
            continue
        if ANSI_ESCAPE_RE.fullmatch(chunk):
            pieces.append(chunk)
            continue
        for ch in chunk:
            width = cell_width(ch, col)
            if col + width > max_cols:
                return "".join(pieces)
            pieces.append(" " * width if ch == "\t" else ch)
            col += width
        if col >= max_cols:
            break
    return "".join(pieces)


def pad_ansi_line(text: str, width: int) -> str:
    """Clip ``text`` to ``width`` and right-pad it with spaces to exactly ``width``."""
    clipped = clip_ansi_line(text, width)
    return clipped + " " * max(0, width - display_width(clipped))
