"""Key hint lines shown under each view's header.

Presentation-only and side-effect free.
"""

from __future__ import annotations

from ..runtime.state import View

VIEW_HINTS: dict[View, str] = {
    View.BRANCHES: "Select a branch (↑↓ or j/k to navigate, Enter to select, / to search, Esc to exit):",
    View.COMMITS: "Select a commit (↑↓ or j/k to navigate, Enter to select, / to search, Esc to go back):",
    View.FILES: (
        "Select a file (↑↓ or j/k to navigate, Enter to view diff, f to view file, "
        "/ to search, Esc to go back):"
    ),
    View.DIFF: (
        "↑↓ or j/k to scroll, Ctrl+d/Ctrl+u half-page, [ and ] prev/next file, "
        "f view file, v/V visual mode, y yank, Esc back"
    ),
    View.FILE: (
        "j/k or ↑/↓ to move line, Ctrl+d/Ctrl+u half-page, [ and ] prev/next file, "
        "d view diff, v/V visual mode, y yank, Esc back"
    ),
}

SEARCH_HINT = "Type to filter, j/k or ↑↓ to choose, Enter to select, Esc to cancel"
STATUS_RIGHT_TEXT = "│ q quit"


def view_hint(view: View) -> str:
    return VIEW_HINTS[view]


def visual_banner(mode_name: str) -> str:
    return f"VISUAL {mode_name.upper()} MODE - Press 'y' to yank, Esc to exit"
