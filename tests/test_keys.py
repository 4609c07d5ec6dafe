"""Tests for the key-combo registry and keymap overrides."""

from __future__ import annotations

import unittest

from gitstage.keys import (
    ACTION_QUIT,
    ACTION_STAGE,
    ACTION_UP,
    DEFAULT_KEYMAP,
    KeyComboBinding,
    KeyComboRegistry,
    build_keymap,
)


class KeyComboRegistryTests(unittest.TestCase):
    def test_dispatch_calls_bound_handler(self) -> None:
        calls: list[str] = []
        registry = KeyComboRegistry().register_bindings(
            KeyComboBinding(("j", "DOWN"), lambda: calls.append("down") or True),
        )

        self.assertTrue(registry.dispatch("DOWN"))
        self.assertTrue(registry.handles("j"))
        self.assertEqual(calls, ["down"])

    def test_dispatch_unknown_key_returns_none(self) -> None:
        registry = KeyComboRegistry()

        self.assertIsNone(registry.dispatch("x"))
        self.assertFalse(registry.handles("x"))

    def test_matching_is_exact_and_later_bindings_win(self) -> None:
        registry = KeyComboRegistry().register_bindings(
            KeyComboBinding(("q",), lambda: "first"),
            KeyComboBinding(("q",), lambda: "second"),
        )

        self.assertEqual(registry.dispatch("q"), "second")
        self.assertFalse(registry.handles("Q"))


class BuildKeymapTests(unittest.TestCase):
    def test_defaults_without_overrides(self) -> None:
        self.assertEqual(build_keymap(), DEFAULT_KEYMAP)

    def test_override_replaces_action_keys_and_ignores_unknown_actions(self) -> None:
        keymap = build_keymap({ACTION_STAGE: ("a",), "explode": ("x",), ACTION_UP: ()})

        self.assertEqual(keymap[ACTION_STAGE], ("a",))
        self.assertEqual(keymap[ACTION_UP], DEFAULT_KEYMAP[ACTION_UP])
        self.assertNotIn("explode", keymap)

    def test_quit_always_keeps_ctrl_c(self) -> None:
        keymap = build_keymap({ACTION_QUIT: ("x",)})

        self.assertEqual(keymap[ACTION_QUIT], ("x", "CTRL_C"))


if __name__ == "__main__":
    unittest.main()
