"""Keyboard dispatch for the browsing views and the search overlay."""

from __future__ import annotations

from collections.abc import Callable

from ..runtime.browser import BrowserController
from ..runtime.state import VisualMode
from .key_registry import KeyComboBinding, KeyComboRegistry

ENTER_KEYS = ("ENTER_CR", "ENTER_LF")
QUIT_KEYS = ("q", "CTRL_C")


def build_browse_registry(controller: BrowserController) -> KeyComboRegistry:
    """Bindings active while the search overlay is closed."""

    def action(callback: Callable[..., None], *args: object) -> Callable[[], bool]:
        def run() -> bool:
            callback(*args)
            return False

        return run

    return KeyComboRegistry().register_bindings(
        KeyComboBinding(("j", "DOWN"), action(controller.move_cursor, 1)),
        KeyComboBinding(("k", "UP"), action(controller.move_cursor, -1)),
        KeyComboBinding(("CTRL_D", "PAGE_DOWN"), action(controller.page, 1)),
        KeyComboBinding(("CTRL_U", "PAGE_UP"), action(controller.page, -1)),
        KeyComboBinding(("g", "HOME"), action(controller.jump_to, 0)),
        KeyComboBinding(("G", "END"), action(controller.jump_to_end)),
        KeyComboBinding(ENTER_KEYS, action(controller.open_selected)),
        KeyComboBinding(("ESC",), controller.go_back),
        KeyComboBinding(QUIT_KEYS, lambda: True),
        KeyComboBinding(("f",), action(controller.toggle_file_view)),
        KeyComboBinding(("d",), action(controller.show_diff_from_file)),
        KeyComboBinding(("[",), action(controller.step_file, -1)),
        KeyComboBinding(("]",), action(controller.step_file, 1)),
        KeyComboBinding(("v",), action(controller.toggle_visual, VisualMode.CHARACTER)),
        KeyComboBinding(("V",), action(controller.toggle_visual, VisualMode.LINE)),
        KeyComboBinding(("y",), action(controller.yank)),
        KeyComboBinding(("/",), action(controller.open_search)),
    )


def handle_search_key(key: str, controller: BrowserController) -> bool:
    """Handle one key while the search overlay is open; never quits."""
    search = controller.state.search
    if key == "ESC":
        controller.close_search()
    elif key in ENTER_KEYS:
        controller.accept_search()
    elif key in ("j", "DOWN"):
        controller.move_search_selection(1)
    elif key in ("k", "UP"):
        controller.move_search_selection(-1)
    elif key == "BACKSPACE":
        controller.set_search_query(search.query[:-1])
    elif key == "CTRL_U":
        controller.set_search_query("")
    elif len(key) == 1 and key.isprintable():
        controller.set_search_query(search.query + key)
    return False


class KeyHandler:
    """Routes key tokens to the search overlay or the browse bindings."""

    def __init__(self, controller: BrowserController) -> None:
        self.controller = controller
        self.browse_bindings = build_browse_registry(controller)

    def handle(self, key: str) -> bool:
        """Handle one key token and return ``True`` when the app should quit."""
        if not key:
            return False
        if self.controller.state.search.open:
            return handle_search_key(key, self.controller)
        return bool(self.browse_bindings.dispatch(key))
