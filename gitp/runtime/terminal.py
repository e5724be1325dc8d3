"""Raw-mode and alternate-screen lifecycle for one browsing session."""

from __future__ import annotations

import contextlib
import os
import termios
import tty

ENTER_SCREEN = b"\x1b[?1049h\x1b[?25l"
LEAVE_SCREEN = b"\x1b[?25h\x1b[?1049l"


class TerminalController:
    """Switches the tty into raw mode and restores it afterwards.

    The tty attributes in effect at construction are restored on exit, even
    when the enclosed block raises.
    """

    def __init__(self, stdin_fd: int, stdout_fd: int) -> None:
        self.stdin_fd = stdin_fd
        self.stdout_fd = stdout_fd
        self._saved_attrs = termios.tcgetattr(stdin_fd)

    def enable_tui_mode(self) -> None:
        tty.setraw(self.stdin_fd, termios.TCSAFLUSH)
        os.write(self.stdout_fd, ENTER_SCREEN)

    def disable_tui_mode(self) -> None:
        os.write(self.stdout_fd, LEAVE_SCREEN)
        termios.tcsetattr(self.stdin_fd, termios.TCSAFLUSH, self._saved_attrs)

    @contextlib.contextmanager
    def raw_mode(self):
        """Run the enclosed block on the alternate screen with a hidden cursor."""
        self.enable_tui_mode()
        try:
            yield self
        finally:
            self.disable_tui_mode()
