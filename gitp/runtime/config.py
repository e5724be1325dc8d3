"""Read-only JSON preferences.

Holds the UI theme, pygments style, split-layout threshold and color
preference. The file is never written; malformed or missing config falls
back to defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from platformdirs import user_config_dir

from ..diff.rows import SPLIT_MIN_WIDTH

logger = logging.getLogger(__name__)

APP_NAME = "gitp"
CONFIG_FILENAME = "config.json"
CONFIG_PATH = Path(user_config_dir(APP_NAME, appauthor=False)) / CONFIG_FILENAME


def load_config() -> dict[str, object]:
    """Load the JSON config object.

    Returns an empty dict when the file is missing, unreadable, malformed, or
    does not decode to a top-level JSON object.
    """
    try:
        data = json.loads(CONFIG_PATH.read_text(encoding="utf-8"))
    except FileNotFoundError:
        return {}
    except (OSError, ValueError) as exc:
        logger.warning("ignoring unreadable config %s: %s", CONFIG_PATH, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _load_name(key: str) -> str | None:
    value = load_config().get(key)
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped if stripped else None


def load_theme_name() -> str | None:
    """Load the UI theme name, returning ``None`` when unset/invalid."""
    return _load_name("theme")


def load_style_name() -> str | None:
    """Load the pygments style name used for file content."""
    return _load_name("style")


def load_split_min_width() -> int:
    """Return the terminal width at which diffs switch to side-by-side.

    Booleans, non-integers and non-positive values fall back to the default.
    """
    value = load_config().get("split_min_width")
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        return SPLIT_MIN_WIDTH
    return value


def load_no_color() -> bool:
    value = load_config().get("no_color")
    return bool(value) if isinstance(value, bool) else False
