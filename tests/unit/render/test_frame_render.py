"""Frame rendering tests for the history views.

Frames are built with the plain theme so assertions can match text exactly;
one test checks that the colored theme still renders the file view.
"""

from __future__ import annotations

import os
import unittest

from history_fakes import FakeHistory

from gitp.ansi import ANSI_ESCAPE_RE, pad_ansi_line
from gitp.render import (
    EMPTY_FILE_TEXT,
    LOADING_DIFF_TEXT,
    NO_MATCHES_TEXT,
    RESET_SGR,
    REVERSE_SGR,
    build_status_line,
    render_frame,
    write_frame,
)
from gitp.runtime.browser import BrowserController
from gitp.runtime.state import NavigationState, View, VisualMode
from gitp.ui_theme import DEFAULT_THEME, PLAIN_THEME


def _highlighted(text: str, width: int) -> str:
    return f"{REVERSE_SGR}{pad_ansi_line(text, width)}{RESET_SGR}"


class FrameTestCase(unittest.TestCase):
    width = 80
    height = 40

    def setUp(self) -> None:
        self.state = NavigationState(terminal_width=self.width)
        self.controller = BrowserController(self.state, FakeHistory(), lambda _text: True, clock=lambda: 0.0)
        self.controller.load_initial()

    def frame(self, theme=PLAIN_THEME, height: int | None = None) -> list[str]:
        return render_frame(self.state, self.width, self.height if height is None else height, theme)

    def open_diff(self, file_index: int = 0) -> None:
        self.controller.open_selected()
        self.controller.open_selected()
        self.controller.jump_to(file_index)
        self.controller.open_selected()


class StatusLineTests(unittest.TestCase):
    def test_left_text_and_right_hint_fill_usable_width(self) -> None:
        line = build_status_line("abc", 20)
        self.assertEqual(line, "abc" + " " * 8 + "│ q quit")
        self.assertEqual(len(line), 19)

    def test_narrow_terminal_keeps_tail_of_right_hint(self) -> None:
        self.assertEqual(build_status_line("abc", 5), "quit")

    def test_long_left_text_is_truncated(self) -> None:
        line = build_status_line("x" * 100, 30)
        self.assertEqual(len(line), 29)
        self.assertTrue(line.endswith(" │ q quit"))


class ListViewFrameTests(FrameTestCase):
    def test_branch_view_frame(self) -> None:
        lines = self.frame()

        self.assertEqual(lines[0], "GITP - Git Branch Explorer")
        self.assertEqual(lines[1], "Current Branch: main")
        self.assertIn("▶ main", lines)
        self.assertIn("  feature/login", lines)
        self.assertTrue(lines[-1].startswith(REVERSE_SGR))
        self.assertIn("gitp branches 1/3", lines[-1])
        self.assertLessEqual(len(lines), self.height)

    def test_status_message_replaces_position(self) -> None:
        self.controller.set_status_message("Copied 2 lines")
        self.assertIn("Copied 2 lines", self.frame()[-1])

    def test_search_overlay_lists_matches(self) -> None:
        self.controller.open_search()
        self.controller.set_search_query("log")
        lines = self.frame()

        self.assertTrue(any(line.startswith("╭") for line in lines))
        self.assertTrue(any("/log" in line for line in lines))
        self.assertTrue(any("▶ feature/login" in line for line in lines))

    def test_search_overlay_without_matches(self) -> None:
        self.controller.open_search()
        self.controller.set_search_query("zz")
        self.assertTrue(any(NO_MATCHES_TEXT in line for line in self.frame()))


class DiffViewFrameTests(FrameTestCase):
    def test_missing_metadata_shows_loading(self) -> None:
        self.state.view = View.DIFF
        self.assertEqual(self.frame()[0], LOADING_DIFF_TEXT)

    def test_header_and_cursor_row(self) -> None:
        self.open_diff()
        lines = self.frame()

        self.assertEqual(lines[0], "Commit: a1b2c3d")
        self.assertIn("Add parser", lines)
        self.assertIn("With details.", lines)
        self.assertIn("--- a/src/app.py", lines)
        self.assertIn("+++ b/src/app.py", lines)
        self.assertIn(_highlighted("@@ -1,9 +1,9 @@", self.width - 1), lines)
        self.assertIn(" line1", lines)
        self.assertIn("gitp diff 1/10", lines[-1])

    def test_visual_selection_replaces_cursor_highlight(self) -> None:
        self.open_diff()
        self.controller.move_cursor(2)
        self.controller.toggle_visual(VisualMode.LINE)
        self.controller.move_cursor(1)
        lines = self.frame()

        self.assertIn("VISUAL LINE MODE - Press 'y' to yank, Esc to exit", lines)
        self.assertIn(_highlighted(" line2", self.width - 1), lines)
        self.assertIn(_highlighted(" line3", self.width - 1), lines)
        self.assertIn(" line1", lines)

    def test_short_terminal_drops_header_first(self) -> None:
        self.open_diff()
        lines = self.frame(height=5)

        self.assertEqual(len(lines), 5)
        self.assertEqual(lines[0], _highlighted("@@ -1,9 +1,9 @@", self.width - 1))
        self.assertEqual(lines[1:4], [" line1", " line2", " line3"])


class WideDiffFrameTests(FrameTestCase):
    width = 120

    def test_split_rows_render_side_by_side(self) -> None:
        self.open_diff(file_index=2)
        lines = self.frame()
        # (120 - 3) // 2 gives two 58-column panels around " | "
        self.assertIn("a" + " " * 57 + " | d", lines)


class OddWidthDiffFrameTests(FrameTestCase):
    width = 101

    def test_panels_use_full_terminal_width(self) -> None:
        self.open_diff(file_index=2)
        lines = self.frame()
        # (101 - 3) // 2 gives 49-column panels; the right one is clipped to 48.
        self.assertIn("a" + " " * 48 + " | d", lines)


class FileViewFrameTests(FrameTestCase):
    def test_line_numbers_and_cursor(self) -> None:
        self.controller.open_selected()
        self.controller.open_selected()
        self.controller.toggle_file_view()
        lines = self.frame()

        self.assertIn("File: src/app.py", lines)
        self.assertIn(_highlighted("     1 | import os", self.width - 1), lines)
        self.assertIn("     2 | print('hi')", lines)

    def test_empty_file_placeholder(self) -> None:
        self.controller.open_selected()
        self.controller.open_selected()
        self.controller.jump_to(2)
        self.controller.toggle_file_view()
        self.assertIn(EMPTY_FILE_TEXT, self.frame())

    def test_colored_theme_highlights_source(self) -> None:
        self.controller.open_selected()
        self.controller.open_selected()
        self.controller.toggle_file_view()
        self.controller.move_cursor(1)
        lines = self.frame(theme=DEFAULT_THEME)

        plain = [ANSI_ESCAPE_RE.sub("", line) for line in lines]
        self.assertIn("     1 | import os", plain)
        self.assertTrue(any("\033[" in line and "import" in line for line in lines))


class WriteFrameTests(unittest.TestCase):
    def test_frame_is_written_in_one_call_with_clear_prefix(self) -> None:
        read_fd, write_fd = os.pipe()
        try:
            write_frame(["one", "two"], fd=write_fd)
            data = os.read(read_fd, 1024)
        finally:
            os.close(read_fd)
            os.close(write_fd)
        self.assertEqual(data, b"\x1b[H\x1b[Jone\r\ntwo")


if __name__ == "__main__":
    unittest.main()
