"""Tests for the key-combo dispatch table."""

from __future__ import annotations

import unittest

from gitp.input import KeyComboBinding, KeyComboRegistry


class KeyComboRegistryTests(unittest.TestCase):
    def test_dispatch_runs_bound_handler(self) -> None:
        calls: list[str] = []
        registry = KeyComboRegistry().register_bindings(
            KeyComboBinding(("j", "DOWN"), lambda: calls.append("down")),
            KeyComboBinding(("q",), lambda: True),
        )

        self.assertFalse(registry.dispatch("DOWN"))
        self.assertTrue(registry.dispatch("q"))
        self.assertEqual(calls, ["down"])
        self.assertIn("j", registry)

    def test_unbound_key_returns_none(self) -> None:
        registry = KeyComboRegistry()
        self.assertIsNone(registry.dispatch("x"))
        self.assertNotIn("x", registry)

    def test_later_binding_wins(self) -> None:
        registry = KeyComboRegistry().register_bindings(
            KeyComboBinding(("g",), lambda: False),
            KeyComboBinding(("g",), lambda: True),
        )
        self.assertTrue(registry.dispatch("g"))


if __name__ == "__main__":
    unittest.main()
