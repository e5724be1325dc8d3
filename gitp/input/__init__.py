"""Input-layer public API: raw key decoding and key dispatch."""

from .key_registry import KeyComboBinding, KeyComboRegistry
from .keys import KeyHandler, handle_search_key
from .reader import ESC_SEQUENCE_TIMEOUT_MS, read_key

__all__ = [
    "ESC_SEQUENCE_TIMEOUT_MS",
    "KeyComboBinding",
    "KeyComboRegistry",
    "KeyHandler",
    "handle_search_key",
    "read_key",
]
