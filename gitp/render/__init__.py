"""Rendering engine for the history browser views.

Composes one full frame of ANSI lines from ``NavigationState`` without
mutating it, then writes the frame with a single ``os.write``.
"""

from __future__ import annotations

import os
import sys
from functools import lru_cache

from ..ansi import clip_ansi_line, pad_ansi_line
from ..diff import CellKind, RowStyle, SplitRow, UnifiedRow, split_lines, split_panel_width
from ..diff.rows import SPLIT_GAP
from ..git import commit_hash_of
from ..highlight import DEFAULT_STYLE, colorize_lines
from ..runtime.browser import SEARCH_VISIBLE_RESULTS
from ..runtime.scroll import compute_window
from ..runtime.state import VIEW_VISIBLE_LINES, NavigationState, View
from ..search import DEFAULT_RANK_LIMIT, rank_fuzzy_matches
from ..ui_theme import UITheme
from .help import SEARCH_HINT, STATUS_RIGHT_TEXT, view_hint, visual_banner

REVERSE_SGR = "\033[7m"
RESET_SGR = "\033[0m"
CURSOR_MARKER = "▶ "
EMPTY_FILE_TEXT = "(empty file)"
LOADING_DIFF_TEXT = "Loading diff..."
NO_DIFF_TEXT = "No diff content to display."
NO_MATCHES_TEXT = "No matches"
LINE_NUMBER_WIDTH = 6
MAX_MESSAGE_LINES = 4

_ROW_STYLE_COLORS = {
    RowStyle.HUNK_HEADER: "hunk_header",
    RowStyle.ADDED: "added",
    RowStyle.REMOVED: "removed",
    RowStyle.CONTEXT: "context",
}

_CELL_KIND_COLORS = {
    CellKind.REMOVED: "removed",
    CellKind.ADDED: "added",
    CellKind.CONTEXT: "context",
    CellKind.EMPTY: "empty_cell",
}


def _styled(text: str, sgr: str, theme: UITheme) -> str:
    if not sgr or not text:
        return text
    return f"{sgr}{text}{theme.reset}"


def _clipped(text: str, width: int, sgr: str, theme: UITheme) -> str:
    return _styled(clip_ansi_line(text, width), sgr, theme)


def _highlight_line(text: str, sgr: str, width: int) -> str:
    """Paint ``text`` across the full row width with one background style."""
    return f"{sgr}{pad_ansi_line(text, width)}{RESET_SGR}"


def build_status_line(left_text: str, width: int, right_text: str = STATUS_RIGHT_TEXT) -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = left_text[:left_limit]
    gap = " " * (usable - len(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def status_text(state: NavigationState) -> str:
    if state.status_message:
        return state.status_message
    total = state.row_count()
    cursor = state.position().cursor + 1 if total else 0
    return f"gitp {state.view.value} {cursor}/{total}"


def _row_highlight_sgr(state: NavigationState, index: int, theme: UITheme) -> str:
    """Return the background style for content row ``index``, or ``""``.

    The cursor row is only marked while no visual selection is active.
    """
    selection = state.selection_range()
    if selection is not None:
        if selection[0] <= index <= selection[1]:
            return theme.selected_row or REVERSE_SGR
        return ""
    if index == state.position().cursor:
        return theme.cursor_row or REVERSE_SGR
    return ""


def _list_rows(items: list[str], view: View, state: NavigationState, width: int, theme: UITheme) -> list[str]:
    position = state.positions[view]
    start, end = compute_window(position.offset, len(items), VIEW_VISIBLE_LINES[view])
    rows: list[str] = []
    for idx in range(start, end):
        active = idx == position.cursor
        marker = CURSOR_MARKER if active else "  "
        color = theme.list_selected if active else theme.commit_text
        rows.append(_clipped(marker + items[idx], width, color, theme))
    return rows


def _branches_view(state: NavigationState, width: int, theme: UITheme) -> tuple[list[str], list[str]]:
    header = [
        _clipped("GITP - Git Branch Explorer", width, theme.title, theme),
        _clipped(f"Current Branch: {state.current_branch}", width, theme.heading, theme),
        _clipped(view_hint(View.BRANCHES), width, theme.hint, theme),
    ]
    return header, _list_rows(state.branches, View.BRANCHES, state, width, theme)


def _commits_view(state: NavigationState, width: int, theme: UITheme) -> tuple[list[str], list[str]]:
    cursor = state.positions[View.BRANCHES].cursor
    branch = state.branches[cursor] if 0 <= cursor < len(state.branches) else ""
    header = [
        _clipped(f"Commits in {branch}", width, theme.muted, theme),
        _clipped(view_hint(View.COMMITS), width, theme.hint, theme),
    ]
    return header, _list_rows(state.commits, View.COMMITS, state, width, theme)


def _files_view(state: NavigationState, width: int, theme: UITheme) -> tuple[list[str], list[str]]:
    header = [
        _clipped(f"Files in commit: {state.selected_commit}", width, theme.muted, theme),
        _clipped(view_hint(View.FILES), width, theme.hint, theme),
    ]
    return header, _list_rows(state.files, View.FILES, state, width, theme)


def _paint_unified_row(row: UnifiedRow, width: int, theme: UITheme, highlight_sgr: str) -> str:
    if highlight_sgr:
        return _highlight_line(row.text, highlight_sgr, width)
    return _clipped(row.text, width, getattr(theme, _ROW_STYLE_COLORS[row.style]), theme)


def _paint_split_row(row: SplitRow, width: int, panel: int, theme: UITheme, highlight_sgr: str) -> str:
    right_width = max(0, min(panel, width - panel - len(SPLIT_GAP)))
    left = pad_ansi_line(row.left_text, panel)
    right = clip_ansi_line(row.right_text, right_width)
    if highlight_sgr:
        return _highlight_line(left + SPLIT_GAP + right, highlight_sgr, width)
    if row.header:
        left_sgr = right_sgr = theme.hunk_header
    else:
        left_sgr = getattr(theme, _CELL_KIND_COLORS[row.left_kind])
        right_sgr = getattr(theme, _CELL_KIND_COLORS[row.right_kind])
    return _styled(left, left_sgr, theme) + _styled(SPLIT_GAP, theme.divider, theme) + _styled(right, right_sgr, theme)


def _diff_view(state: NavigationState, width: int, theme: UITheme) -> tuple[list[str], list[str]]:
    # Panels follow the terminal width the rows were projected for; only the
    # right panel gives up the column reserved at the edge.
    panel = split_panel_width(state.terminal_width)
    metadata = state.commit_metadata
    if metadata is None:
        return [_clipped(LOADING_DIFF_TEXT, width, theme.hint, theme)], []

    header = [
        _clipped(f"Commit: {metadata.hash}", width, theme.commit_hash, theme),
        _clipped(f"Author: {metadata.author}", width, theme.commit_text, theme),
        _clipped(f"Date: {metadata.date}", width, theme.commit_text, theme),
        "",
    ]
    message_lines = metadata.message.splitlines() or [""]
    for line in message_lines[:MAX_MESSAGE_LINES]:
        header.append(_clipped(line, width, theme.commit_message, theme))
    header.append("")

    stats = state.parsed_diff.file_stats
    if stats:
        header.append(_clipped("Files changed:", width, theme.stats_heading, theme))
        for stat in stats:
            header.append(
                _clipped(f"{stat.file} | {stat.change_count} {stat.histogram}", width, theme.commit_text, theme)
            )
        header.append("")

    if state.visual_active:
        header.append(_clipped(visual_banner(state.visual_mode.value), width, theme.visual_banner, theme))
    header.append(_clipped(view_hint(View.DIFF), width, theme.hint, theme))

    file_diff = state.parsed_diff.first_file
    if file_diff is None:
        header.append(_clipped(NO_DIFF_TEXT, width, theme.muted, theme))
        return header, []

    header.append(_clipped(file_diff.header, width, theme.file_header, theme))
    header.append(_clipped(f"--- a/{file_diff.old_path}", width, theme.path_header, theme))
    header.append(_clipped(f"+++ b/{file_diff.new_path}", width, theme.path_header, theme))

    position = state.positions[View.DIFF]
    start, end = compute_window(position.offset, len(state.diff_rows), VIEW_VISIBLE_LINES[View.DIFF])
    rows: list[str] = []
    for idx in range(start, end):
        row = state.diff_rows[idx]
        highlight_sgr = _row_highlight_sgr(state, idx, theme)
        if isinstance(row, SplitRow):
            rows.append(_paint_split_row(row, width, panel, theme, highlight_sgr))
        else:
            rows.append(_paint_unified_row(row, width, theme, highlight_sgr))
    return header, rows


@lru_cache(maxsize=8)
def _highlighted_file_lines(content: str, path: str, style: str) -> tuple[str, ...]:
    return tuple(colorize_lines(split_lines(content), path, style))


def _file_view(state: NavigationState, width: int, theme: UITheme, style: str) -> tuple[list[str], list[str]]:
    metadata = state.commit_metadata
    commit_hash = metadata.hash if metadata is not None else commit_hash_of(state.selected_commit)
    header = [
        _clipped(f"Commit: {commit_hash}", width, theme.commit_hash, theme),
        _clipped(f"File: {state.current_file_path}", width, theme.commit_text, theme),
        "",
    ]
    if state.visual_active:
        header.append(_clipped(visual_banner(state.visual_mode.value), width, theme.visual_banner, theme))
    header.append(_clipped(view_hint(View.FILE), width, theme.hint, theme))

    if not state.file_content:
        return header, [_clipped(EMPTY_FILE_TEXT, width, theme.muted, theme)]

    lines = state.file_lines
    colored: tuple[str, ...] | list[str] = lines
    if theme.reset:
        colored = _highlighted_file_lines(state.file_content, state.current_file_path, style)

    position = state.positions[View.FILE]
    start, end = compute_window(position.offset, len(lines), VIEW_VISIBLE_LINES[View.FILE])
    rows: list[str] = []
    for idx in range(start, end):
        prefix = f"{idx + 1:>{LINE_NUMBER_WIDTH}} | "
        highlight_sgr = _row_highlight_sgr(state, idx, theme)
        if highlight_sgr:
            rows.append(_highlight_line(prefix + lines[idx], highlight_sgr, width))
            continue
        text = clip_ansi_line(colored[idx], max(0, width - len(prefix)))
        if "\033" in text:
            text += RESET_SGR
        rows.append(_styled(prefix, theme.muted, theme) + text)
    return header, rows


def _boxed(content: str, inner: int, theme: UITheme) -> str:
    border = _styled("│", theme.search_border, theme)
    return f"{border} {pad_ansi_line(content, inner)}{theme.reset} {border}"


def search_overlay_lines(state: NavigationState, width: int, theme: UITheme) -> list[str]:
    """Return the boxed search prompt and up to ten ranked matches."""
    search = state.search
    if not search.open or search.mode is None:
        return []
    inner = max(1, width - 4)
    results = rank_fuzzy_matches(search.query, state.list_items(search.mode), DEFAULT_RANK_LIMIT)
    lines = [
        _styled("╭" + "─" * (inner + 2) + "╮", theme.search_border, theme),
        _boxed(_styled(f"/{search.query}", theme.search_query, theme), inner, theme),
    ]
    if not results:
        lines.append(_boxed(_styled(NO_MATCHES_TEXT, theme.muted, theme), inner, theme))
    for idx, ranked in enumerate(results[:SEARCH_VISIBLE_RESULTS]):
        active = idx == search.selected
        marker = CURSOR_MARKER if active else "  "
        color = theme.list_selected if active else theme.commit_text
        lines.append(_boxed(_styled(clip_ansi_line(marker + ranked.item, inner), color, theme), inner, theme))
    lines.append(_boxed(_styled(SEARCH_HINT, theme.hint, theme), inner, theme))
    lines.append(_styled("╰" + "─" * (inner + 2) + "╯", theme.search_border, theme))
    return lines


def _fit(header: list[str], rows: list[str], overlay: list[str], available: int) -> list[str]:
    """Drop header lines first, then trailing rows, to fit ``available`` lines."""
    room = max(0, available - len(overlay))
    kept_rows = rows[:room]
    kept_header = header[: max(0, room - len(kept_rows))]
    return (kept_header + kept_rows + overlay)[:available]


def render_frame(
    state: NavigationState,
    width: int,
    height: int,
    theme: UITheme,
    *,
    style: str = DEFAULT_STYLE,
) -> list[str]:
    """Build the lines of one frame: the active view, search overlay, status line."""
    usable = max(1, width - 1)
    view = state.view
    if view is View.BRANCHES:
        header, rows = _branches_view(state, usable, theme)
    elif view is View.COMMITS:
        header, rows = _commits_view(state, usable, theme)
    elif view is View.FILES:
        header, rows = _files_view(state, usable, theme)
    elif view is View.DIFF:
        header, rows = _diff_view(state, usable, theme)
    else:
        header, rows = _file_view(state, usable, theme, style)

    overlay = search_overlay_lines(state, usable, theme)
    lines = _fit(header, rows, overlay, max(0, height - 1))
    status = build_status_line(status_text(state), width)
    lines.append(f"{REVERSE_SGR}{status}{RESET_SGR}")
    return lines


def write_frame(lines: list[str], fd: int | None = None) -> None:
    """Clear the screen and write ``lines`` with one ``os.write`` call."""
    out = "\033[H\033[J" + "\r\n".join(lines)
    os.write(sys.stdout.fileno() if fd is None else fd, out.encode("utf-8", errors="replace"))
