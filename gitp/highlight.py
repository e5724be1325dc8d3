"""Terminal-safe text and syntax highlighting for the file view.

Neutralizes control bytes so repository content cannot drive the terminal.
Highlighting uses Pygments and always preserves the input line count.
"""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import PurePosixPath

from pygments import highlight
from pygments.formatters import Terminal256Formatter
from pygments.lexers import TextLexer, get_lexer_for_filename
from pygments.styles import get_all_styles
from pygments.util import ClassNotFound

DEFAULT_STYLE = "monokai"

_CONTROL_RE = re.compile(r"[\x00-\x08\x0b\x0c\x0e-\x1f\x7f-\x9f]|\r(?!\n)")


def sanitize_terminal_text(source: str) -> str:
    """Escape terminal control bytes to avoid side effects (bell, cursor moves, etc.)."""
    if _CONTROL_RE.search(source) is None:
        return source

    out: list[str] = []
    for idx, ch in enumerate(source):
        code = ord(ch)
        if ch in {"\n", "\t"}:
            out.append(ch)
            continue
        # Only a CRLF pair keeps its \r; a lone one would rewind the cursor.
        if ch == "\r" and source[idx + 1 : idx + 2] == "\n":
            out.append(ch)
            continue
        # C0 controls + DEL + C1 controls.
        if code < 32 or code == 127 or 0x80 <= code <= 0x9F:
            out.append(f"\\x{code:02x}")
            continue
        out.append(ch)
    return "".join(out)


@lru_cache(maxsize=None)
def _available_styles() -> frozenset[str]:
    return frozenset(get_all_styles())


def normalize_style(style: str) -> str:
    """Return ``style`` when Pygments knows it, else the default style."""
    if style in _available_styles():
        return style
    return DEFAULT_STYLE


@lru_cache(maxsize=16)
def _formatter_for_style(style: str) -> Terminal256Formatter:
    return Terminal256Formatter(style=style)


def _lexer_for_path(path: str, source: str):
    try:
        return get_lexer_for_filename(PurePosixPath(path).name, source, stripnl=False, ensurenl=False)
    except ClassNotFound:
        return TextLexer(stripnl=False, ensurenl=False)


def colorize_lines(lines: list[str], path: str, style: str = DEFAULT_STYLE) -> list[str]:
    """Highlight ``lines`` as the file at ``path``.

    Falls back to the plain lines when the highlighted output does not keep a
    one-to-one line mapping.
    """
    if not lines:
        return lines
    source = "\n".join(lines)
    rendered = highlight(source, _lexer_for_path(path, source), _formatter_for_style(normalize_style(style)))
    rendered_lines = rendered.split("\n")
    if len(rendered_lines) == len(lines) + 1 and rendered_lines[-1] in {"", "\x1b[39m", "\x1b[0m"}:
        rendered_lines = rendered_lines[:-1]
    if len(rendered_lines) != len(lines):
        return lines
    return rendered_lines
