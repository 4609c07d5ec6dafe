"""Cursor over the fixed, ordered list of change entries."""

from __future__ import annotations

from collections.abc import Sequence

from .changes import ChangeEntry


class SelectionModel:
    """Ordered change entries plus one clamped cursor index.

    The entry sequence never changes after construction. With an empty list
    the cursor stays at ``0`` but is inactive: ``current()`` returns ``None``
    and moves are no-ops.
    """

    def __init__(self, entries: Sequence[ChangeEntry]) -> None:
        self.entries: tuple[ChangeEntry, ...] = tuple(entries)
        self.cursor = 0

    def __len__(self) -> int:
        return len(self.entries)

    def move_up(self) -> bool:
        """Move one row up; return ``False`` when already at the top."""
        if self.cursor <= 0:
            return False
        self.cursor -= 1
        return True

    def move_down(self) -> bool:
        """Move one row down; return ``False`` when already at the last row."""
        if self.cursor >= len(self.entries) - 1:
            return False
        self.cursor += 1
        return True

    def current(self) -> ChangeEntry | None:
        if not self.entries:
            return None
        return self.entries[self.cursor]
