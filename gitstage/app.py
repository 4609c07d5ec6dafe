"""Session bootstrap: open the repository, collect changes, run the UI.

Startup failures raise ``StartupError`` before the terminal is touched.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from pathlib import Path

from .changes import ChangeSetCollector
from .dispatcher import InputDispatcher
from .git_repo import GitRepository
from .highlight import WorkingTreeReader
from .input import iter_keys
from .render import TerminalRenderer, format_change_list
from .selection import SelectionModel
from .state import AppState
from .terminal import TerminalController
from .ui_theme import PLAIN_THEME, resolve_theme

logger = logging.getLogger(__name__)


def build_session(path: Path) -> tuple[GitRepository, AppState]:
    """Open the repository at ``path`` and build the initial listing state."""
    repository = GitRepository.open(path)
    entries = ChangeSetCollector(repository).collect()
    state = AppState(selection=SelectionModel(entries), title=repository.root.name)
    logger.info("session started with %d entries", len(entries))
    return repository, state


def run_app(
    path: Path,
    *,
    theme_name: str | None = None,
    style: str | None = None,
    no_color: bool = False,
    list_only: bool = False,
    keymap: Mapping[str, tuple[str, ...]] | None = None,
) -> int:
    """Run one gitstage session and return the process exit code.

    Without an interactive terminal (or with ``list_only``) the change list is
    printed once instead. ``style=None`` disables syntax highlighting.
    """
    repository, state = build_session(path)
    theme = resolve_theme(theme_name, no_color=no_color)

    stdin_fd = sys.stdin.fileno()
    stdout_fd = sys.stdout.fileno()
    if list_only or not os.isatty(stdin_fd) or not os.isatty(stdout_fd):
        list_theme = theme if os.isatty(stdout_fd) else PLAIN_THEME
        sys.stdout.write(format_change_list(state, list_theme))
        return 0

    terminal = TerminalController(stdin_fd, stdout_fd)
    renderer = TerminalRenderer(stdout_fd, theme, highlight_style=None if no_color else style)
    reader = WorkingTreeReader(repository.root)
    dispatcher = InputDispatcher(state, repository, reader.read_text, renderer, keymap)
    with terminal.raw_mode():
        exit_code = dispatcher.run(iter_keys(stdin_fd))
    logger.info("session ended")
    return exit_code
