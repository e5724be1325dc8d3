"""Tests for clipboard command selection and fallbacks."""

from __future__ import annotations

import subprocess
import unittest
from unittest import mock

from gitp import clipboard


def _completed(returncode: int) -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(["copy"], returncode)


class ClipboardCopyTests(unittest.TestCase):
    def test_empty_text_is_never_sent(self) -> None:
        with mock.patch("gitp.clipboard.subprocess.run") as run:
            self.assertFalse(clipboard.copy_text_to_clipboard(""))
        run.assert_not_called()

    def test_first_available_command_receives_text(self) -> None:
        commands = [["missing-copy"], ["xclip", "-selection", "clipboard"]]
        with (
            mock.patch("gitp.clipboard.clipboard_commands", return_value=commands),
            mock.patch("gitp.clipboard.shutil.which", side_effect=lambda name: None if name == "missing-copy" else name),
            mock.patch("gitp.clipboard.subprocess.run", return_value=_completed(0)) as run,
        ):
            self.assertTrue(clipboard.copy_text_to_clipboard("a\nb"))

        run.assert_called_once()
        self.assertEqual(run.call_args.args[0], ["xclip", "-selection", "clipboard"])
        self.assertEqual(run.call_args.kwargs["input"], "a\nb")

    def test_failing_command_falls_through_to_next(self) -> None:
        commands = [["wl-copy"], ["xsel", "--clipboard", "--input"]]
        with (
            mock.patch("gitp.clipboard.clipboard_commands", return_value=commands),
            mock.patch("gitp.clipboard.shutil.which", side_effect=lambda name: name),
            mock.patch("gitp.clipboard.subprocess.run", side_effect=[OSError("gone"), _completed(0)]) as run,
        ):
            self.assertTrue(clipboard.copy_text_to_clipboard("text"))
        self.assertEqual(run.call_count, 2)

    def test_no_command_available_reports_failure(self) -> None:
        with (
            mock.patch("gitp.clipboard.shutil.which", return_value=None),
            mock.patch("gitp.clipboard.subprocess.run") as run,
        ):
            self.assertFalse(clipboard.copy_text_to_clipboard("text"))
        run.assert_not_called()

    def test_non_zero_exit_reports_failure(self) -> None:
        with (
            mock.patch("gitp.clipboard.clipboard_commands", return_value=[["pbcopy"]]),
            mock.patch("gitp.clipboard.shutil.which", return_value="/usr/bin/pbcopy"),
            mock.patch("gitp.clipboard.subprocess.run", return_value=_completed(1)),
        ):
            self.assertFalse(clipboard.copy_text_to_clipboard("text"))

    def test_platform_command_lists(self) -> None:
        with mock.patch("gitp.clipboard.sys.platform", "darwin"):
            self.assertEqual(clipboard.clipboard_commands(), [["pbcopy"]])
        with mock.patch("gitp.clipboard.sys.platform", "linux"), mock.patch("gitp.clipboard.os.name", "posix"):
            self.assertEqual(clipboard.clipboard_commands()[0], ["wl-copy"])


if __name__ == "__main__":
    unittest.main()
