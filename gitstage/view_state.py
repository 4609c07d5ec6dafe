"""Listing/Viewing state machine for the main pane.

``open`` snapshots one file's content into ``Viewing``; ``close`` returns to
``Listing``. A failed read leaves the current state untouched.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace

from .changes import ChangeEntry
from .highlight import sanitize_terminal_text


@dataclass(frozen=True)
class Listing:
    """The change list is shown."""


@dataclass(frozen=True)
class Viewing:
    """One file's content is shown, starting at ``scroll`` (0-based line)."""

    entry: ChangeEntry
    content: str
    scroll: int = 0

    @property
    def line_count(self) -> int:
        return len(sanitize_terminal_text(self.content).splitlines())


LISTING = Listing()


class ViewState:
    def __init__(self) -> None:
        self.current: Listing | Viewing = LISTING

    @property
    def is_viewing(self) -> bool:
        return isinstance(self.current, Viewing)

    def open(self, entry: ChangeEntry, read_text: Callable[[str], str]) -> None:
        """Switch to ``Viewing`` with ``entry``'s content.

        ``read_text`` raises ``ReadError`` for unreadable paths; the exception
        propagates before any state is assigned.
        """
        content = read_text(entry.path)
        self.current = Viewing(entry=entry, content=content)

    def close(self) -> bool:
        if not self.is_viewing:
            return False
        self.current = LISTING
        return True

    def scroll(self, delta: int) -> bool:
        """Shift the viewing offset by ``delta`` lines, clamped to the content."""
        view = self.current
        if not isinstance(view, Viewing):
            return False
        max_scroll = max(0, view.line_count - 1)
        target = max(0, min(max_scroll, view.scroll + delta))
        if target == view.scroll:
            return False
        self.current = replace(view, scroll=target)
        return True
