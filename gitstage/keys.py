"""Key-combo registry primitives and the default action keymap."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass

ACTION_QUIT = "quit"
ACTION_UP = "up"
ACTION_DOWN = "down"
ACTION_OPEN = "open"
ACTION_CLOSE = "close"
ACTION_STAGE = "stage"

DEFAULT_KEYMAP: dict[str, tuple[str, ...]] = {
    ACTION_QUIT: ("q", "CTRL_C"),
    ACTION_UP: ("k", "UP"),
    ACTION_DOWN: ("j", "DOWN"),
    ACTION_OPEN: ("ENTER", "l", "RIGHT"),
    ACTION_CLOSE: ("ESC", "h", "LEFT", "BACKSPACE"),
    ACTION_STAGE: ("=", "s"),
}


@dataclass(frozen=True)
class KeyComboBinding:
    """Mapping from one or more key tokens to a single action callback."""

    combos: tuple[str, ...]
    handler: Callable[[], bool | None]


class KeyComboRegistry:
    """Small exact-match key-dispatch table."""

    def __init__(self) -> None:
        self._handlers: dict[str, Callable[[], bool | None]] = {}

    def register_binding(self, binding: KeyComboBinding) -> KeyComboRegistry:
        """Register one binding, overwriting existing handlers for same combos."""
        for combo in binding.combos:
            self._handlers[combo] = binding.handler
        return self

    def register_bindings(self, *bindings: KeyComboBinding) -> KeyComboRegistry:
        """Register multiple bindings and return ``self`` for fluent usage."""
        for binding in bindings:
            self.register_binding(binding)
        return self

    def handles(self, key: str) -> bool:
        return key in self._handlers

    def dispatch(self, key: str) -> bool | None:
        """Invoke bound handler for ``key`` and return its handled result."""
        handler = self._handlers.get(key)
        if handler is None:
            return None
        return handler()


def build_keymap(overrides: Mapping[str, tuple[str, ...]] | None = None) -> dict[str, tuple[str, ...]]:
    """Return the default keymap with per-action overrides applied.

    Unknown action names and empty combo lists are ignored. The quit action
    always keeps ``CTRL_C`` so a misconfigured keymap cannot trap the user.
    """
    keymap = dict(DEFAULT_KEYMAP)
    for action, combos in (overrides or {}).items():
        if action in keymap and combos:
            keymap[action] = tuple(combos)
    if "CTRL_C" not in keymap[ACTION_QUIT]:
        keymap[ACTION_QUIT] = (*keymap[ACTION_QUIT], "CTRL_C")
    return keymap
