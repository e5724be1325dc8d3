"""Project a parsed diff into renderable unified or split rows.

Only the first file section is projected; the diff view shows one file.
Split rows pair removed/added runs index by index using line kinds alone,
with no content-similarity alignment.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .model import FileDiff, LineKind, ParsedDiff

SPLIT_MIN_WIDTH = 100
SPLIT_GAP = " | "
MIN_PANEL_WIDTH = 10


class RowStyle(Enum):
    HUNK_HEADER = "hunk_header"
    ADDED = "added"
    REMOVED = "removed"
    CONTEXT = "context"


class CellKind(Enum):
    REMOVED = "removed"
    ADDED = "added"
    CONTEXT = "context"
    EMPTY = "empty"


@dataclass(frozen=True)
class UnifiedRow:
    text: str
    style: RowStyle


@dataclass(frozen=True)
class SplitRow:
    left_text: str
    left_kind: CellKind
    right_text: str
    right_kind: CellKind
    header: bool = False


DisplayRow = UnifiedRow | SplitRow

_UNIFIED_STYLES = {
    LineKind.ADDED: RowStyle.ADDED,
    LineKind.REMOVED: RowStyle.REMOVED,
    LineKind.CONTEXT: RowStyle.CONTEXT,
}


def is_wide(width: int, split_min_width: int = SPLIT_MIN_WIDTH) -> bool:
    return width >= split_min_width


def split_panel_width(width: int) -> int:
    """Return the column width of one side of the split layout."""
    return max(MIN_PANEL_WIDTH, (width - len(SPLIT_GAP)) // 2)


def _strip_prefix(text: str, prefix: str) -> str:
    return text[1:] if text.startswith(prefix) else text


def _strip_context_column(text: str) -> str:
    return text[1:] if text[:1].isspace() else text


def build_unified_rows(file_diff: FileDiff | None) -> list[UnifiedRow]:
    if file_diff is None:
        return []
    rows: list[UnifiedRow] = []
    for hunk in file_diff.hunks:
        rows.append(UnifiedRow(hunk.header, RowStyle.HUNK_HEADER))
        for line in hunk.lines:
            rows.append(UnifiedRow(line.content, _UNIFIED_STYLES[line.kind]))
    return rows


def build_split_rows(file_diff: FileDiff | None) -> list[SplitRow]:
    """Build two-column rows for one file.

    Context lines mirror on both sides. A removed run is paired with the
    added run that immediately follows it, padding the shorter side with
    empty cells. An added run with no removed run before it fills the right
    side only.
    """
    if file_diff is None:
        return []
    rows: list[SplitRow] = []
    for hunk in file_diff.hunks:
        rows.append(
            SplitRow(hunk.header, CellKind.CONTEXT, hunk.header, CellKind.CONTEXT, header=True)
        )
        lines = hunk.lines
        i = 0
        while i < len(lines):
            line = lines[i]
            if line.kind is LineKind.CONTEXT:
                text = _strip_context_column(line.content)
                rows.append(SplitRow(text, CellKind.CONTEXT, text, CellKind.CONTEXT))
                i += 1
            elif line.kind is LineKind.REMOVED:
                removed: list[str] = []
                while i < len(lines) and lines[i].kind is LineKind.REMOVED:
                    removed.append(_strip_prefix(lines[i].content, "-"))
                    i += 1
                added: list[str] = []
                j = i
                while j < len(lines) and lines[j].kind is LineKind.ADDED:
                    added.append(_strip_prefix(lines[j].content, "+"))
                    j += 1
                for k in range(max(len(removed), len(added))):
                    has_left = k < len(removed)
                    has_right = k < len(added)
                    rows.append(
                        SplitRow(
                            removed[k] if has_left else "",
                            CellKind.REMOVED if has_left else CellKind.EMPTY,
                            added[k] if has_right else "",
                            CellKind.ADDED if has_right else CellKind.EMPTY,
                        )
                    )
                i = j
            elif line.kind is LineKind.ADDED:
                while i < len(lines) and lines[i].kind is LineKind.ADDED:
                    rows.append(
                        SplitRow("", CellKind.EMPTY, _strip_prefix(lines[i].content, "+"), CellKind.ADDED)
                    )
                    i += 1
            else:
                rows.append(SplitRow(line.content, CellKind.CONTEXT, line.content, CellKind.CONTEXT))
                i += 1
    return rows


def build_display_rows(
    parsed: ParsedDiff,
    width: int,
    split_min_width: int = SPLIT_MIN_WIDTH,
) -> list[DisplayRow]:
    """Project the first file diff for a terminal ``width`` columns wide."""
    if is_wide(width, split_min_width):
        return list(build_split_rows(parsed.first_file))
    return list(build_unified_rows(parsed.first_file))


def row_text(row: DisplayRow) -> str:
    """Return the plain text copied for ``row`` by a yank."""
    if isinstance(row, SplitRow):
        return f"{row.left_text}{SPLIT_GAP}{row.right_text}"
    return row.text
