"""Tests for browser bootstrap wiring."""

from __future__ import annotations

import unittest
from pathlib import Path
from unittest import mock

from history_fakes import FakeHistory

from gitp.runtime import app
from gitp.runtime.state import View
from gitp.ui_theme import PLAIN_THEME


class BuildControllerTests(unittest.TestCase):
    def test_controller_starts_on_loaded_branches(self) -> None:
        with mock.patch("gitp.runtime.app.GitRepository", return_value=FakeHistory()) as repo:
            controller = app.build_controller(Path("/repo"), width=132, split_min_width=120)

        repo.assert_called_once_with(Path("/repo"))
        self.assertIs(controller.state.view, View.BRANCHES)
        self.assertEqual(controller.state.terminal_width, 132)
        self.assertEqual(controller.split_min_width, 120)
        self.assertEqual(controller.state.current_branch, "main")

    def test_split_threshold_defaults_to_config(self) -> None:
        with (
            mock.patch("gitp.runtime.app.GitRepository", return_value=FakeHistory()),
            mock.patch("gitp.runtime.app.load_split_min_width", return_value=150),
        ):
            controller = app.build_controller(Path("/repo"), width=80)
        self.assertEqual(controller.split_min_width, 150)


class RunBrowserTests(unittest.TestCase):
    def test_requires_interactive_terminal(self) -> None:
        with (
            mock.patch("gitp.runtime.app.os.isatty", return_value=False),
            mock.patch("gitp.runtime.app.sys.stdin") as stdin,
            mock.patch("gitp.runtime.app.run_main_loop") as loop,
        ):
            stdin.fileno.return_value = 0
            with self.assertRaises(SystemExit) as ctx:
                app.run_browser(Path("/repo"))
        self.assertIn("interactive terminal", str(ctx.exception))
        loop.assert_not_called()

    def test_no_color_selects_plain_theme(self) -> None:
        with (
            mock.patch("gitp.runtime.app.os.isatty", return_value=True),
            mock.patch("gitp.runtime.app.sys.stdin") as stdin,
            mock.patch("gitp.runtime.app.sys.stdout") as stdout,
            mock.patch("gitp.runtime.app.GitRepository", return_value=FakeHistory()),
            mock.patch("gitp.runtime.app.TerminalController") as terminal_cls,
            mock.patch("gitp.runtime.app.run_main_loop") as loop,
            mock.patch("gitp.runtime.app.load_style_name", return_value=None),
        ):
            stdin.fileno.return_value = 0
            stdout.fileno.return_value = 1
            app.run_browser(Path("/repo"), no_color=True, style="no-such-style")

        terminal_cls.assert_called_once_with(0, 1)
        controller, terminal, stdin_fd, theme = loop.call_args.args
        self.assertIs(terminal, terminal_cls.return_value)
        self.assertEqual(stdin_fd, 0)
        self.assertIs(theme, PLAIN_THEME)
        self.assertEqual(loop.call_args.kwargs["style"], "monokai")
        self.assertIs(controller.state.view, View.BRANCHES)


if __name__ == "__main__":
    unittest.main()
