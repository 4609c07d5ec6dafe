"""Frame composition for the change list and the file view.

``render`` is pure: it maps an ``AppState`` and a terminal size to a list of
ANSI rows. ``TerminalRenderer`` writes those rows to the output descriptor.
"""

from __future__ import annotations

import functools
import os
import shutil

from .ansi import clip_ansi_line, pad_ansi_line
from .changes import CHANGE_NEW
from .highlight import colorize_source, sanitize_terminal_text
from .state import AppState
from .ui_theme import DEFAULT_THEME, UITheme
from .view_state import Viewing

LISTING_HINT = "j/k move  Enter view  = stage  q quit"
VIEWING_HINT = "j/k scroll  Esc back  = stage  q quit"
EMPTY_LIST_TEXT = "no new or modified files"


def selected_with_ansi(text: str) -> str:
    """Apply selection styling without discarding existing ANSI colors."""
    if not text:
        return text

    # Keep reverse video active even when the text contains internal resets.
    return "\033[7m" + text.replace("\033[0m", "\033[0;7m") + "\033[0m"


def build_status_line(left_text: str, width: int, right_text: str) -> str:
    usable = max(1, width - 1)
    if usable <= len(right_text):
        return right_text[-usable:]
    left_limit = max(0, usable - len(right_text) - 1)
    left = left_text[:left_limit]
    gap = " " * (usable - len(left) - len(right_text))
    return f"{left}{gap}{right_text}"


def list_window_start(cursor: int, count: int, rows: int) -> int:
    """First visible list index so that ``cursor`` stays on screen."""
    if rows <= 0 or count <= rows:
        return 0
    start = max(0, cursor - rows + 1)
    return min(start, count - rows)


@functools.lru_cache(maxsize=8)
def view_display_lines(path: str, content: str, style: str | None) -> tuple[str, ...]:
    """Split viewed content into display rows, highlighted when ``style`` is set."""
    plain_lines = sanitize_terminal_text(content).splitlines()
    if style is None or not plain_lines:
        return tuple(plain_lines)
    colored_lines = colorize_source("\n".join(plain_lines) + "\n", path, style).splitlines()
    if len(colored_lines) != len(plain_lines):
        return tuple(plain_lines)
    return tuple(colored_lines)


def _list_rows(state: AppState, width: int, rows: int, theme: UITheme) -> list[str]:
    selection = state.selection
    if not selection.entries:
        return [f"{theme.dim}  {EMPTY_LIST_TEXT}{theme.reset}"]

    start = list_window_start(selection.cursor, len(selection.entries), rows)
    out: list[str] = []
    for idx in range(start, min(len(selection.entries), start + rows)):
        entry = selection.entries[idx]
        selected = idx == selection.cursor
        badge = "new" if entry.kind == CHANGE_NEW else "mod"
        marker = "> " if selected else "  "
        text = f"{marker}{theme.change_style(entry.kind)}{badge} {sanitize_terminal_text(entry.path)}{theme.reset}"
        if selected:
            out.append(selected_with_ansi(pad_ansi_line(text, width)))
        else:
            out.append(clip_ansi_line(text, width))
    return out


def _view_rows(view: Viewing, width: int, rows: int, style: str | None) -> list[str]:
    lines = view_display_lines(view.entry.path, view.content, style)
    return [clip_ansi_line(line, width) for line in lines[view.scroll : view.scroll + rows]]


def _title_row(state: AppState, width: int, rows: int, theme: UITheme) -> str:
    view = state.view.current
    if isinstance(view, Viewing):
        total = view.line_count
        first = min(total, view.scroll + 1)
        last = min(total, view.scroll + rows)
        title = f" {sanitize_terminal_text(view.entry.path)}  ({first}-{last}/{total})"
    else:
        count = len(state.selection.entries)
        noun = "change" if count == 1 else "changes"
        title = f" {state.title}  {count} {noun}"
    return f"{theme.title}{clip_ansi_line(title, width)}{theme.reset}"


def _status_row(state: AppState, width: int, theme: UITheme) -> str:
    hint = VIEWING_HINT if state.view.is_viewing else LISTING_HINT
    status = build_status_line(f" {state.status_message}", width, hint)
    style = theme.status_error if state.status_is_error else theme.status_info
    return f"{theme.reverse}{style}{status}{theme.reset}"


def render(
    state: AppState,
    width: int,
    height: int,
    theme: UITheme = DEFAULT_THEME,
    highlight_style: str | None = None,
) -> list[str]:
    """Build one frame of exactly ``max(height, 2)`` rows.

    Row 0 is the title, the last row is the status line, and the rows between
    show either the change list or the viewed file.
    """
    width = max(1, width)
    height = max(2, height)
    body_rows = height - 2

    view = state.view.current
    if isinstance(view, Viewing):
        body = _view_rows(view, width, body_rows, highlight_style)
    else:
        body = _list_rows(state, width, body_rows, theme)
    body = body[:body_rows]
    body.extend([""] * (body_rows - len(body)))

    return [_title_row(state, width, body_rows, theme), *body, _status_row(state, width, theme)]


class TerminalRenderer:
    """Write rendered frames to a terminal file descriptor."""

    def __init__(
        self,
        stdout_fd: int,
        theme: UITheme = DEFAULT_THEME,
        highlight_style: str | None = None,
    ) -> None:
        self.stdout_fd = stdout_fd
        self.theme = theme
        self.highlight_style = highlight_style

    def draw(self, state: AppState) -> None:
        term = shutil.get_terminal_size((80, 24))
        frame = render(state, term.columns, term.lines, self.theme, self.highlight_style)
        out: list[str] = ["\033[H\033[J"]
        for row_idx, row in enumerate(frame):
            out.append(row)
            if "\033" in row:
                out.append("\033[0m")
            if row_idx < len(frame) - 1:
                out.append("\r\n")
        os.write(self.stdout_fd, "".join(out).encode("utf-8", errors="replace"))

    def clear(self) -> None:
        os.write(self.stdout_fd, b"\033[H\033[2J")


def format_change_list(state: AppState, theme: UITheme) -> str:
    """Plain-text listing used when no interactive terminal is attached."""
    out: list[str] = []
    for entry in state.selection.entries:
        badge = "new" if entry.kind == CHANGE_NEW else "mod"
        out.append(f"{theme.change_style(entry.kind)}{badge} {sanitize_terminal_text(entry.path)}{theme.reset}\n")
    return "".join(out)


__all__ = [
    "TerminalRenderer",
    "build_status_line",
    "format_change_list",
    "list_window_start",
    "render",
    "view_display_lines",
]
