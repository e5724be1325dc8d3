"""UI theme definitions and selection helpers.

Themes are ANSI palettes for list/diff/file chrome. Syntax highlighting style
for the file view is a separate Pygments setting.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by renderers."""

    name: str
    reset: str
    reverse: str
    title: str
    heading: str
    hint: str
    muted: str
    list_selected: str
    commit_hash: str
    commit_text: str
    commit_message: str
    stats_heading: str
    file_header: str
    path_header: str
    hunk_header: str
    added: str
    removed: str
    context: str
    empty_cell: str
    divider: str
    cursor_row: str
    selected_row: str
    visual_banner: str
    search_border: str
    search_query: str
    error: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    reverse="\033[7m",
    title="\033[1;32m",
    heading="\033[34m",
    hint="\033[33m",
    muted="\033[90m",
    list_selected="\033[32m",
    commit_hash="\033[1;36m",
    commit_text="\033[37m",
    commit_message="\033[33m",
    stats_heading="\033[1;32m",
    file_header="\033[1;34m",
    path_header="\033[35m",
    hunk_header="\033[36m",
    added="\033[32m",
    removed="\033[31m",
    context="\033[37m",
    empty_cell="\033[90m",
    divider="\033[2m",
    cursor_row="\033[30;46m",
    selected_row="\033[30;43m",
    visual_banner="\033[1;36m",
    search_border="\033[36m",
    search_query="\033[1;38;5;81m",
    error="\033[31m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    reverse="\033[7m",
    title="\033[1;38;5;45m",
    heading="\033[38;5;117m",
    hint="\033[2;38;5;153m",
    muted="\033[2;38;5;110m",
    list_selected="\033[38;5;45m",
    commit_hash="\033[1;38;5;39m",
    commit_text="\033[38;5;252m",
    commit_message="\033[38;5;153m",
    stats_heading="\033[1;38;5;84m",
    file_header="\033[1;38;5;39m",
    path_header="\033[38;5;141m",
    hunk_header="\033[38;5;73m",
    added="\033[38;5;84m",
    removed="\033[38;5;203m",
    context="\033[38;5;252m",
    empty_cell="\033[2;38;5;24m",
    divider="\033[2;38;5;31m",
    cursor_row="\033[38;5;16;48;5;45m",
    selected_row="\033[38;5;16;48;5;229m",
    visual_banner="\033[1;38;5;45m",
    search_border="\033[38;5;39m",
    search_query="\033[1;38;5;45m",
    error="\033[38;5;203m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    reverse="",
    title="",
    heading="",
    hint="",
    muted="",
    list_selected="",
    commit_hash="",
    commit_text="",
    commit_message="",
    stats_heading="",
    file_header="",
    path_header="",
    hunk_header="",
    added="",
    removed="",
    context="",
    empty_cell="",
    divider="",
    cursor_row="",
    selected_row="",
    visual_banner="",
    search_border="",
    search_query="",
    error="",
)

_THEMES: dict[str, UITheme] = {
    DEFAULT_THEME.name: DEFAULT_THEME,
    OCEAN_THEME.name: OCEAN_THEME,
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable non-plain theme names."""
    return tuple(sorted(_THEMES.keys()))


def normalize_theme_name(name: str | None) -> str:
    """Return a valid theme name, falling back to default."""
    if not name:
        return DEFAULT_THEME.name
    candidate = str(name).strip().lower()
    if candidate in _THEMES:
        return candidate
    return DEFAULT_THEME.name


def resolve_theme(name: str | None, *, no_color: bool = False) -> UITheme:
    """Return concrete theme for requested name and color mode."""
    if no_color:
        return PLAIN_THEME
    return _THEMES[normalize_theme_name(name)]


__all__ = [
    "UITheme",
    "DEFAULT_THEME",
    "OCEAN_THEME",
    "PLAIN_THEME",
    "available_theme_names",
    "normalize_theme_name",
    "resolve_theme",
]
