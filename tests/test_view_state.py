"""Tests for the Listing/Viewing state machine."""

from __future__ import annotations

import unittest

from gitstage.changes import CHANGE_MODIFIED, ChangeEntry
from gitstage.errors import ReadError
from gitstage.view_state import LISTING, Listing, ViewState, Viewing

ENTRY = ChangeEntry("notes.txt", CHANGE_MODIFIED)


def _failing_reader(path: str) -> str:
    raise ReadError(path, "No such file or directory")


class ViewStateTests(unittest.TestCase):
    def test_initial_state_is_listing(self) -> None:
        view = ViewState()

        self.assertIsInstance(view.current, Listing)
        self.assertFalse(view.is_viewing)

    def test_open_stores_exact_content(self) -> None:
        content = "line one\r\nline two\n\ttabbed\x00\n"
        view = ViewState()

        view.open(ENTRY, lambda path: content)

        self.assertEqual(view.current, Viewing(entry=ENTRY, content=content))
        self.assertTrue(view.is_viewing)

    def test_open_failure_keeps_listing(self) -> None:
        view = ViewState()

        with self.assertRaises(ReadError):
            view.open(ENTRY, _failing_reader)

        self.assertIs(view.current, LISTING)

    def test_close_returns_to_listing_and_is_noop_when_listing(self) -> None:
        view = ViewState()
        self.assertFalse(view.close())

        view.open(ENTRY, lambda path: "x\n")
        self.assertTrue(view.close())
        self.assertIs(view.current, LISTING)

    def test_scroll_is_clamped_to_content(self) -> None:
        view = ViewState()
        view.open(ENTRY, lambda path: "a\nb\nc\n")

        self.assertFalse(view.scroll(-1))
        self.assertTrue(view.scroll(1))
        self.assertTrue(view.scroll(10))
        self.assertEqual(view.current.scroll, 2)
        self.assertFalse(view.scroll(1))

    def test_line_count_matches_rendered_rows_for_form_feeds(self) -> None:
        view = ViewState()
        view.open(ENTRY, lambda path: "one\x0ctwo\nthree\n")

        self.assertEqual(view.current.line_count, 2)
        self.assertTrue(view.scroll(5))
        self.assertEqual(view.current.scroll, 1)

    def test_scroll_is_noop_when_listing(self) -> None:
        view = ViewState()

        self.assertFalse(view.scroll(1))
        self.assertIs(view.current, LISTING)


if __name__ == "__main__":
    unittest.main()
