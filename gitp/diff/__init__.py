"""Diff parsing and row projection."""

from .model import CommitMetadata, DiffLine, FileDiff, FileStat, Hunk, LineKind, ParsedDiff
from .parser import parse_diff, split_lines
from .rows import (
    SPLIT_MIN_WIDTH,
    CellKind,
    DisplayRow,
    RowStyle,
    SplitRow,
    UnifiedRow,
    build_display_rows,
    build_split_rows,
    build_unified_rows,
    is_wide,
    row_text,
    split_panel_width,
)

__all__ = [
    "SPLIT_MIN_WIDTH",
    "CellKind",
    "CommitMetadata",
    "DiffLine",
    "DisplayRow",
    "FileDiff",
    "FileStat",
    "Hunk",
    "LineKind",
    "ParsedDiff",
    "RowStyle",
    "SplitRow",
    "UnifiedRow",
    "build_display_rows",
    "build_split_rows",
    "build_unified_rows",
    "is_wide",
    "parse_diff",
    "row_text",
    "split_lines",
    "split_panel_width",
]
