"""Browser bootstrap: wire repository, state, controller and terminal."""

from __future__ import annotations

import logging
import os
import shutil
import sys
from pathlib import Path

from ..clipboard import copy_text_to_clipboard
from ..git import GitRepository
from ..highlight import normalize_style
from ..ui_theme import resolve_theme
from .browser import BrowserController
from .config import load_no_color, load_split_min_width, load_style_name, load_theme_name
from .loop import run_main_loop
from .state import NavigationState
from .terminal import TerminalController

logger = logging.getLogger(__name__)


def build_controller(root: Path, *, width: int, split_min_width: int | None = None) -> BrowserController:
    """Create a controller for ``root`` with branches already loaded."""
    state = NavigationState(terminal_width=width)
    controller = BrowserController(
        state,
        GitRepository(root),
        copy_text_to_clipboard,
        split_min_width=load_split_min_width() if split_min_width is None else split_min_width,
    )
    controller.load_initial()
    return controller


def run_browser(
    root: Path,
    *,
    theme_name: str | None = None,
    style: str | None = None,
    no_color: bool = False,
) -> None:
    """Run the interactive browser on the repository at ``root``.

    CLI values win over the config file; the config file wins over defaults.
    """
    stdin_fd = sys.stdin.fileno()
    if not os.isatty(stdin_fd) or not os.isatty(sys.stdout.fileno()):
        raise SystemExit("gitp needs an interactive terminal.")

    theme = resolve_theme(theme_name or load_theme_name(), no_color=no_color or load_no_color())
    resolved_style = normalize_style(style or load_style_name() or "")
    term = shutil.get_terminal_size((80, 24))
    controller = build_controller(root, width=term.columns)
    logger.info("browsing %s (theme=%s, style=%s)", root, theme.name, resolved_style)

    terminal = TerminalController(stdin_fd, sys.stdout.fileno())
    run_main_loop(controller, terminal, stdin_fd, theme, style=resolved_style)
