"""Navigation state machine operations and collaborator wiring.

``BrowserController`` owns the only ``NavigationState`` and applies one
action at a time. Git retrieval and clipboard delivery are injected so the
state machine stays testable without a repository or a display.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Protocol

from ..diff import CommitMetadata, build_display_rows, is_wide, parse_diff, row_text, split_lines
from ..diff.rows import SPLIT_MIN_WIDTH
from ..git import GitCommandError, commit_hash_of
from ..highlight import sanitize_terminal_text
from ..search import DEFAULT_RANK_LIMIT, RankedItem, rank_fuzzy_matches
from .scroll import HALF_PAGE, clamp_cursor, clamp_offset, follow_cursor, page_offset
from .state import CONTENT_VIEWS, LIST_VIEWS, PARENT_VIEW, VIEW_VISIBLE_LINES, NavigationState, View, VisualMode

logger = logging.getLogger(__name__)

STATUS_MESSAGE_SECONDS = 2.5
SEARCH_VISIBLE_RESULTS = 10


class HistorySource(Protocol):
    """Retrieval operations the browser needs from a repository."""

    def load_branches(self) -> list[str]: ...

    def load_current_branch(self) -> str: ...

    def load_commits(self, branch: str) -> list[str]: ...

    def load_files(self, commit_ref: str) -> list[str]: ...

    def load_commit_metadata(self, commit_hash: str) -> CommitMetadata: ...

    def load_diff(self, commit_hash: str, path: str | None = None) -> str: ...

    def load_file_at_commit(self, commit_hash: str, path: str) -> str: ...


class BrowserController:
    def __init__(
        self,
        state: NavigationState,
        source: HistorySource,
        copy_text_to_clipboard: Callable[[str], bool],
        *,
        split_min_width: int = SPLIT_MIN_WIDTH,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.state = state
        self.source = source
        self.copy_text_to_clipboard = copy_text_to_clipboard
        self.split_min_width = split_min_width
        self.clock = clock

    # -- status ---------------------------------------------------------

    def set_status_message(self, message: str) -> None:
        self.state.status_message = message
        self.state.status_message_until = self.clock() + STATUS_MESSAGE_SECONDS
        self.state.dirty = True

    def expire_status_message(self) -> None:
        state = self.state
        if state.status_message and self.clock() >= state.status_message_until:
            state.status_message = ""
            state.status_message_until = 0.0
            state.dirty = True

    def _report_failure(self, what: str, exc: GitCommandError) -> None:
        logger.warning("unable to load %s: %s", what, exc)
        self.set_status_message(f"Unable to load {what}: {exc.message}")

    # -- loading --------------------------------------------------------

    def load_initial(self) -> None:
        """Populate the branch list and the current branch name."""
        state = self.state
        try:
            state.branches = self.source.load_branches()
        except GitCommandError as exc:
            state.branches = []
            self._report_failure("branches", exc)
        state.positions[View.BRANCHES].reset()
        try:
            state.current_branch = self.source.load_current_branch()
        except GitCommandError as exc:
            state.current_branch = ""
            self._report_failure("current branch", exc)
        state.dirty = True

    def _switch_view(self, view: View) -> None:
        state = self.state
        if state.view is not view:
            state.clear_visual()
        state.view = view
        state.dirty = True

    def set_diff_text(self, text: str) -> None:
        """Replace diff content, reparse, reproject and reset the diff position."""
        state = self.state
        state.diff_text = sanitize_terminal_text(text)
        state.parsed_diff = parse_diff(state.diff_text)
        state.positions[View.DIFF].reset()
        state.clear_visual()
        self._rebuild_diff_rows()

    def set_file_content(self, path: str, content: str) -> None:
        state = self.state
        state.current_file_path = path
        state.file_content = sanitize_terminal_text(content)
        state.file_lines = split_lines(state.file_content)
        state.positions[View.FILE].reset()
        state.clear_visual()
        state.dirty = True

    def _rebuild_diff_rows(self) -> None:
        state = self.state
        state.diff_is_wide = is_wide(state.terminal_width, self.split_min_width)
        state.diff_rows = build_display_rows(state.parsed_diff, state.terminal_width, self.split_min_width)
        total = len(state.diff_rows)
        position = state.positions[View.DIFF]
        position.cursor = clamp_cursor(position.cursor, total)
        position.offset = clamp_offset(position.offset, total, VIEW_VISIBLE_LINES[View.DIFF])
        if state.visual_active:
            state.visual_anchor = clamp_cursor(state.visual_anchor, total)
            state.visual_focus = clamp_cursor(state.visual_focus, total)
        state.dirty = True

    def set_terminal_width(self, width: int) -> None:
        """Apply a resize; rows are reprojected only when the width changed."""
        if width == self.state.terminal_width:
            return
        self.state.terminal_width = width
        self._rebuild_diff_rows()

    def _load_metadata(self, commit_hash: str) -> None:
        state = self.state
        try:
            state.commit_metadata = self.source.load_commit_metadata(commit_hash)
        except GitCommandError as exc:
            state.commit_metadata = None
            self._report_failure("commit metadata", exc)

    def _load_diff_for(self, commit_hash: str, path: str) -> None:
        try:
            text = self.source.load_diff(commit_hash, path)
        except GitCommandError as exc:
            self._report_failure("diff", exc)
            text = ""
        self.set_diff_text(text)
        if self.state.commit_metadata is None and self.state.parsed_diff.metadata is not None:
            self.state.commit_metadata = self.state.parsed_diff.metadata

    def _load_file_for(self, commit_hash: str, path: str) -> None:
        self.set_file_content(path, self.source.load_file_at_commit(commit_hash, path))

    def _selected_commit_hash(self) -> str:
        return commit_hash_of(self.state.selected_commit)

    # -- hierarchy ------------------------------------------------------

    def open_selected(self) -> None:
        """Descend one level from the active list view."""
        state = self.state
        view = state.view
        if view is View.BRANCHES:
            cursor = state.positions[View.BRANCHES].cursor
            if not 0 <= cursor < len(state.branches):
                return
            branch = state.branches[cursor]
            try:
                commits = self.source.load_commits(branch)
            except GitCommandError as exc:
                self._report_failure(f"commits for {branch}", exc)
                return
            state.commits = commits
            state.positions[View.COMMITS].reset()
            self._switch_view(View.COMMITS)
        elif view is View.COMMITS:
            commit = state.selected_commit
            if not commit:
                return
            try:
                files = self.source.load_files(commit)
            except GitCommandError as exc:
                self._report_failure("files", exc)
                return
            state.files = files
            state.positions[View.FILES].reset()
            self._switch_view(View.FILES)
        elif view is View.FILES:
            path = state.selected_file
            if not path:
                return
            commit_hash = self._selected_commit_hash()
            self._load_metadata(commit_hash)
            self._load_diff_for(commit_hash, path)
            self._switch_view(View.DIFF)

    def go_back(self) -> bool:
        """Handle Escape outside search; return ``True`` when the app should quit."""
        state = self.state
        if state.clear_visual():
            state.dirty = True
            return False
        parent = PARENT_VIEW.get(state.view)
        if parent is None:
            return True
        state.positions[state.view].reset()
        self._switch_view(parent)
        return False

    def show_file(self) -> None:
        """Show the selected file's content at the selected commit."""
        state = self.state
        path = state.selected_file or state.current_file_path
        if not path or not state.selected_commit:
            return
        commit_hash = self._selected_commit_hash()
        if state.view is View.FILES:
            self._load_metadata(commit_hash)
        self._load_file_for(commit_hash, path)
        self._switch_view(View.FILE)

    def show_diff(self) -> None:
        """Switch from the file view back to the diff of the same file."""
        state = self.state
        path = state.selected_file or state.current_file_path
        if not path or not state.selected_commit:
            return
        self._load_diff_for(self._selected_commit_hash(), path)
        self._switch_view(View.DIFF)

    def show_diff_from_file(self) -> None:
        if self.state.view is View.FILE:
            self.show_diff()

    def toggle_file_view(self) -> None:
        if self.state.view is View.FILE:
            self.show_diff()
        elif self.state.view in (View.FILES, View.DIFF):
            self.show_file()

    def step_file(self, direction: int) -> None:
        """Move to the previous/next file of the commit and reload the pane."""
        state = self.state
        if state.view not in CONTENT_VIEWS or not state.files:
            return
        files_position = state.positions[View.FILES]
        new_index = clamp_cursor(files_position.cursor + direction, len(state.files))
        if new_index == files_position.cursor:
            return
        files_position.cursor = new_index
        files_position.offset = follow_cursor(
            new_index, files_position.offset, len(state.files), VIEW_VISIBLE_LINES[View.FILES]
        )
        commit_hash = self._selected_commit_hash()
        path = state.files[new_index]
        if state.view is View.DIFF:
            self._load_diff_for(commit_hash, path)
        else:
            self._load_file_for(commit_hash, path)

    # -- cursor ---------------------------------------------------------

    def _set_cursor(self, cursor: int) -> None:
        state = self.state
        total = state.row_count()
        position = state.position()
        position.cursor = clamp_cursor(cursor, total)
        position.offset = follow_cursor(position.cursor, position.offset, total, VIEW_VISIBLE_LINES[state.view])
        if state.visual_active:
            state.visual_focus = position.cursor
        state.dirty = True

    def move_cursor(self, delta: int) -> None:
        self._set_cursor(self.state.position().cursor + delta)

    def jump_to(self, index: int) -> None:
        self._set_cursor(index)

    def jump_to_end(self) -> None:
        self._set_cursor(self.state.row_count() - 1)

    def page(self, direction: int) -> None:
        """Move cursor and scroll offset together by half a page (content views only)."""
        state = self.state
        if state.view not in CONTENT_VIEWS:
            return
        total = state.row_count()
        visible = VIEW_VISIBLE_LINES[state.view]
        position = state.position()
        delta = HALF_PAGE * direction
        position.cursor = clamp_cursor(position.cursor + delta, total)
        position.offset = page_offset(position.offset, delta, total, visible)
        position.offset = follow_cursor(position.cursor, position.offset, total, visible)
        if state.visual_active:
            state.visual_focus = position.cursor
        state.dirty = True

    # -- visual selection -----------------------------------------------

    def toggle_visual(self, mode: VisualMode) -> None:
        state = self.state
        if state.view not in CONTENT_VIEWS:
            return
        if state.visual_active:
            state.clear_visual()
        else:
            cursor = state.position().cursor
            state.visual_mode = mode
            state.visual_anchor = cursor
            state.visual_focus = cursor
        state.dirty = True

    def selected_text(self) -> str:
        """Return the text of the rows inside the visual range, joined by newlines."""
        state = self.state
        selection = state.selection_range()
        if selection is None:
            return ""
        start, end = selection
        if state.view is View.DIFF and state.diff_rows:
            return "\n".join(row_text(row) for row in state.diff_rows[start:end + 1])
        if state.view is View.FILE and state.file_content:
            return "\n".join(state.file_lines[start:end + 1])
        return ""

    def yank(self) -> None:
        """Copy the visual selection; an empty selection leaves everything unchanged."""
        state = self.state
        if not state.visual_active:
            return
        text = self.selected_text()
        if not text:
            return
        line_count = text.count("\n") + 1
        copied = self.copy_text_to_clipboard(text)
        state.clear_visual()
        if copied:
            self.set_status_message(f"Copied {line_count} line{'s' if line_count != 1 else ''}")
        else:
            logger.warning("clipboard copy failed for %d line(s)", line_count)
            self.set_status_message("Copy failed: no clipboard command available")
        state.dirty = True

    # -- search overlay -------------------------------------------------

    def open_search(self) -> None:
        state = self.state
        if state.view not in LIST_VIEWS:
            return
        state.search.open = True
        state.search.mode = state.view
        state.search.query = ""
        state.search.selected = 0
        state.dirty = True

    def close_search(self) -> None:
        search = self.state.search
        search.open = False
        search.mode = None
        search.query = ""
        search.selected = 0
        self.state.dirty = True

    def search_results(self) -> list[RankedItem]:
        search = self.state.search
        if not search.open or search.mode is None:
            return []
        return rank_fuzzy_matches(search.query, self.state.list_items(search.mode), DEFAULT_RANK_LIMIT)

    def set_search_query(self, query: str) -> None:
        self.state.search.query = query
        self.state.search.selected = 0
        self.state.dirty = True

    def move_search_selection(self, delta: int) -> None:
        search = self.state.search
        search.selected = clamp_cursor(search.selected + delta, len(self.search_results()))
        self.state.dirty = True

    def accept_search(self) -> None:
        """Select the highlighted match as if it had been chosen directly."""
        state = self.state
        results = self.search_results()
        mode = state.search.mode
        selected = state.search.selected
        self.close_search()
        if mode is None or not 0 <= selected < len(results):
            return
        state.view = mode
        self.jump_to(results[selected].index)
        self.open_selected()
