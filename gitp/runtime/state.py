from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..diff import CommitMetadata, DisplayRow, ParsedDiff
from .scroll import COMMITS_VISIBLE_LINES, VISIBLE_LINES


class View(Enum):
    BRANCHES = "branches"
    COMMITS = "commits"
    FILES = "files"
    DIFF = "diff"
    FILE = "file"


class VisualMode(Enum):
    NONE = "none"
    CHARACTER = "character"
    LINE = "line"


LIST_VIEWS = (View.BRANCHES, View.COMMITS, View.FILES)
CONTENT_VIEWS = (View.DIFF, View.FILE)

PARENT_VIEW: dict[View, View] = {
    View.COMMITS: View.BRANCHES,
    View.FILES: View.COMMITS,
    View.DIFF: View.FILES,
    View.FILE: View.FILES,
}

VIEW_VISIBLE_LINES: dict[View, int] = {
    View.BRANCHES: VISIBLE_LINES,
    View.COMMITS: COMMITS_VISIBLE_LINES,
    View.FILES: VISIBLE_LINES,
    View.DIFF: VISIBLE_LINES,
    View.FILE: VISIBLE_LINES,
}


@dataclass
class ListPosition:
    """Cursor and scroll offset of one view."""

    cursor: int = 0
    offset: int = 0

    def reset(self) -> None:
        self.cursor = 0
        self.offset = 0


@dataclass
class SearchState:
    open: bool = False
    mode: View | None = None
    query: str = ""
    selected: int = 0


@dataclass
class NavigationState:
    """Everything the key handler mutates and the renderer reads."""

    view: View = View.BRANCHES
    positions: dict[View, ListPosition] = field(
        default_factory=lambda: {view: ListPosition() for view in View}
    )
    visual_mode: VisualMode = VisualMode.NONE
    visual_anchor: int = 0
    visual_focus: int = 0
    search: SearchState = field(default_factory=SearchState)
    terminal_width: int = 80
    branches: list[str] = field(default_factory=list)
    current_branch: str = ""
    commits: list[str] = field(default_factory=list)
    files: list[str] = field(default_factory=list)
    commit_metadata: CommitMetadata | None = None
    diff_text: str = ""
    parsed_diff: ParsedDiff = field(default_factory=ParsedDiff)
    diff_rows: list[DisplayRow] = field(default_factory=list)
    diff_is_wide: bool = False
    file_content: str = ""
    file_lines: list[str] = field(default_factory=list)
    current_file_path: str = ""
    status_message: str = ""
    status_message_until: float = 0.0
    dirty: bool = True

    def position(self, view: View | None = None) -> ListPosition:
        return self.positions[self.view if view is None else view]

    @property
    def visual_active(self) -> bool:
        return self.visual_mode is not VisualMode.NONE

    def selection_range(self) -> tuple[int, int] | None:
        """Return the inclusive ``(start, end)`` visual range, if any."""
        if not self.visual_active:
            return None
        return min(self.visual_anchor, self.visual_focus), max(self.visual_anchor, self.visual_focus)

    def clear_visual(self) -> bool:
        changed = self.visual_active
        self.visual_mode = VisualMode.NONE
        self.visual_anchor = 0
        self.visual_focus = 0
        return changed

    def row_count(self, view: View | None = None) -> int:
        """Return the number of navigable rows in ``view``."""
        target = self.view if view is None else view
        if target is View.BRANCHES:
            return len(self.branches)
        if target is View.COMMITS:
            return len(self.commits)
        if target is View.FILES:
            return len(self.files)
        if target is View.DIFF:
            return len(self.diff_rows)
        return len(self.file_lines)

    def list_items(self, view: View | None = None) -> list[str]:
        target = self.view if view is None else view
        if target is View.BRANCHES:
            return self.branches
        if target is View.COMMITS:
            return self.commits
        if target is View.FILES:
            return self.files
        return []

    @property
    def selected_commit(self) -> str:
        cursor = self.positions[View.COMMITS].cursor
        return self.commits[cursor] if 0 <= cursor < len(self.commits) else ""

    @property
    def selected_file(self) -> str:
        cursor = self.positions[View.FILES].cursor
        return self.files[cursor] if 0 <= cursor < len(self.files) else ""
