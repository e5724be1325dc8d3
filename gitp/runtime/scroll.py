"""Pure cursor/scroll arithmetic shared by every list-like view.

No function here touches ``NavigationState``; the controller feeds in
counts and positions and stores the results.
"""

from __future__ import annotations

VISIBLE_LINES = 20
COMMITS_VISIBLE_LINES = 18
HALF_PAGE = max(1, VISIBLE_LINES // 2)


def clamp_offset(offset: int, total: int, visible_lines: int = VISIBLE_LINES) -> int:
    """Clamp a scroll offset into ``[0, max(0, total - visible_lines)]``."""
    max_start = max(0, total - visible_lines)
    return max(0, min(offset, max_start))


def clamp_cursor(cursor: int, total: int) -> int:
    """Clamp a cursor into ``[0, total - 1]``, or ``0`` for empty lists."""
    if total <= 0:
        return 0
    return max(0, min(cursor, total - 1))


def compute_window(offset: int, total: int, visible_lines: int = VISIBLE_LINES) -> tuple[int, int]:
    """Return the ``[start, end)`` row range drawn for ``offset``."""
    start = clamp_offset(offset, total, visible_lines)
    end = min(start + visible_lines, total)
    return start, end


def follow_cursor(cursor: int, offset: int, total: int, visible_lines: int = VISIBLE_LINES) -> int:
    """Return the offset that keeps ``cursor`` inside the visible window.

    Scrolls down once the cursor reaches ``offset + visible_lines`` and up as
    soon as it falls above ``offset``.
    """
    if cursor < offset:
        offset = cursor
    elif cursor >= offset + visible_lines:
        offset = cursor - visible_lines + 1
    return clamp_offset(offset, total, visible_lines)


def page_offset(offset: int, delta: int, total: int, visible_lines: int = VISIBLE_LINES) -> int:
    """Shift ``offset`` by ``delta`` rows, clamped to the scrollable range."""
    return clamp_offset(offset + delta, total, visible_lines)
