"""Main interactive event loop for the terminal UI.

Each iteration applies the current terminal width, expires the status
message, paints when the state is dirty, then reads and dispatches one key.
Feature logic lives in ``BrowserController`` and the key handler.
"""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Callable
from dataclasses import dataclass

from ..input import KeyHandler, read_key
from ..render import render_frame, write_frame
from ..ui_theme import UITheme
from .browser import BrowserController
from .terminal import TerminalController

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeLoopTiming:
    """Timing constants controlling interactive loop behavior."""

    key_timeout_ms: int = 120


def run_main_loop(
    controller: BrowserController,
    terminal: TerminalController,
    stdin_fd: int,
    theme: UITheme,
    *,
    style: str,
    timing: RuntimeLoopTiming = RuntimeLoopTiming(),
    get_terminal_size: Callable[..., os.terminal_size] = shutil.get_terminal_size,
    read_key_fn: Callable[..., str] = read_key,
    write_frame_fn: Callable[[list[str]], None] = write_frame,
) -> None:
    """Run the TUI until a key handler requests quit."""
    state = controller.state
    key_handler = KeyHandler(controller)
    last_size: tuple[int, int] | None = None
    skip_next_lf = False

    with terminal.raw_mode():
        while True:
            term = get_terminal_size((80, 24))
            if (term.columns, term.lines) != last_size:
                if last_size is not None:
                    logger.debug("terminal resized to %dx%d", term.columns, term.lines)
                last_size = (term.columns, term.lines)
                controller.set_terminal_width(term.columns)
                state.dirty = True
            controller.expire_status_message()

            if state.dirty:
                write_frame_fn(render_frame(state, term.columns, term.lines, theme, style=style))
                state.dirty = False

            try:
                key = read_key_fn(stdin_fd, timeout_ms=timing.key_timeout_ms)
            except KeyboardInterrupt:
                continue
            if key == "":
                continue
            if skip_next_lf and key == "ENTER_LF":
                skip_next_lf = False
                continue
            skip_next_lf = key == "ENTER_CR"

            if key_handler.handle(key):
                break
