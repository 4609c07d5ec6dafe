"""Tests for cursor movement over the fixed change list.

Covers clamping at both ends, full traversal, and empty-list safety.
"""

from __future__ import annotations

import unittest

from gitstage.changes import CHANGE_MODIFIED, CHANGE_NEW, ChangeEntry
from gitstage.selection import SelectionModel


def _entries(count: int) -> list[ChangeEntry]:
    return [ChangeEntry(path=f"file{idx}.txt", kind=CHANGE_NEW) for idx in range(count)]


class SelectionModelTests(unittest.TestCase):
    def test_move_up_at_top_keeps_cursor_at_zero(self) -> None:
        model = SelectionModel(_entries(3))

        self.assertFalse(model.move_up())
        self.assertEqual(model.cursor, 0)

    def test_move_down_at_last_index_is_noop(self) -> None:
        model = SelectionModel(_entries(2))
        model.move_down()

        self.assertFalse(model.move_down())
        self.assertEqual(model.cursor, 1)

    def test_len_minus_one_moves_reach_last_index(self) -> None:
        for count in (1, 2, 5, 17):
            model = SelectionModel(_entries(count))
            for _ in range(count - 1):
                self.assertTrue(model.move_down())
            self.assertEqual(model.cursor, count - 1)
            self.assertFalse(model.move_down())
            self.assertEqual(model.cursor, count - 1)

    def test_move_up_after_move_down_returns_to_previous_entry(self) -> None:
        model = SelectionModel(_entries(3))
        model.move_down()
        model.move_down()
        model.move_up()

        self.assertEqual(model.current(), ChangeEntry("file1.txt", CHANGE_NEW))

    def test_current_follows_cursor(self) -> None:
        entries = [ChangeEntry("a.txt", CHANGE_NEW), ChangeEntry("b.txt", CHANGE_MODIFIED)]
        model = SelectionModel(entries)

        self.assertEqual(model.current(), entries[0])
        model.move_down()
        self.assertEqual(model.current(), entries[1])

    def test_empty_list_operations_are_safe_noops(self) -> None:
        model = SelectionModel([])

        self.assertIsNone(model.current())
        self.assertFalse(model.move_up())
        self.assertFalse(model.move_down())
        self.assertEqual(model.cursor, 0)
        self.assertEqual(len(model), 0)

    def test_entries_are_frozen_in_insertion_order(self) -> None:
        source = _entries(3)
        model = SelectionModel(source)
        source.append(ChangeEntry("late.txt", CHANGE_NEW))

        self.assertEqual([entry.path for entry in model.entries], ["file0.txt", "file1.txt", "file2.txt"])


if __name__ == "__main__":
    unittest.main()
