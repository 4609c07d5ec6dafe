"""Key-driven event loop for the change list.

One key is handled at a time: it is mapped to a cursor move, a view
transition, or a staging request, and any resulting change is redrawn
before the next key is read. Collaborator failures stop at the key that
caused them and are reported on the status line.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Mapping

from .errors import ReadError, StageError
from .keys import (
    ACTION_CLOSE,
    ACTION_DOWN,
    ACTION_OPEN,
    ACTION_QUIT,
    ACTION_STAGE,
    ACTION_UP,
    DEFAULT_KEYMAP,
    KeyComboBinding,
    KeyComboRegistry,
)
from .staging import StagingAction
from .state import AppState

logger = logging.getLogger(__name__)


class InputDispatcher:
    """Own the session state and the repository handle for one UI run.

    ``renderer`` needs ``draw(state)`` and ``clear()``; ``read_text`` maps a
    repository-relative path to file content and raises ``ReadError``.
    """

    def __init__(
        self,
        state: AppState,
        repository,
        read_text: Callable[[str], str],
        renderer,
        keymap: Mapping[str, tuple[str, ...]] | None = None,
    ) -> None:
        self.state = state
        self.repository = repository
        self.staging = StagingAction(repository)
        self.read_text = read_text
        self.renderer = renderer
        self.quit_requested = False

        keymap = keymap if keymap is not None else DEFAULT_KEYMAP
        handlers: dict[str, Callable[[], bool]] = {
            ACTION_QUIT: self.quit,
            ACTION_UP: self.move_up,
            ACTION_DOWN: self.move_down,
            ACTION_OPEN: self.open_current,
            ACTION_CLOSE: self.close_view,
            ACTION_STAGE: self.stage_current,
        }
        self._registry = KeyComboRegistry().register_bindings(
            *(
                KeyComboBinding(tuple(keymap.get(action, DEFAULT_KEYMAP[action])), handler)
                for action, handler in handlers.items()
            )
        )

    def quit(self) -> bool:
        self.quit_requested = True
        return False

    def move_up(self) -> bool:
        if self.state.view.is_viewing:
            return self.state.view.scroll(-1)
        return self.state.selection.move_up()

    def move_down(self) -> bool:
        if self.state.view.is_viewing:
            return self.state.view.scroll(1)
        return self.state.selection.move_down()

    def open_current(self) -> bool:
        if self.state.view.is_viewing:
            return False
        entry = self.state.selection.current()
        if entry is None:
            return False
        try:
            self.state.view.open(entry, self.read_text)
        except ReadError as exc:
            logger.info("open failed: %s", exc)
            self.state.set_status(str(exc), error=True)
        except OSError as exc:
            logger.info("open failed for %s: %s", entry.path, exc)
            self.state.set_status(str(ReadError(entry.path, exc.strerror or str(exc))), error=True)
        return True

    def close_view(self) -> bool:
        return self.state.view.close()

    def stage_current(self) -> bool:
        entry = self.state.selection.current()
        if entry is None:
            return False
        try:
            self.staging.stage(entry)
        except StageError as exc:
            self.state.set_status(str(exc), error=True)
            return True
        self.state.set_status(f"staged {entry.path}")
        return True

    def handle_key(self, key: str) -> bool:
        """Apply one key token; return ``True`` once the loop should stop.

        Unbound keys are ignored without touching the status line.
        """
        if not self._registry.handles(key):
            return False
        self.state.clear_status()
        if self._registry.dispatch(key):
            self.state.dirty = True
        return self.quit_requested

    def redraw(self) -> None:
        if not self.state.dirty:
            return
        self.renderer.draw(self.state)
        self.state.dirty = False

    def run(self, keys: Iterable[str]) -> int:
        """Draw, then handle ``keys`` until quit or end of input; return exit code."""
        self.redraw()
        try:
            for key in keys:
                if self.handle_key(key):
                    break
                self.redraw()
        except KeyboardInterrupt:
            logger.info("interrupted while waiting for input")
        self.renderer.clear()
        return 0
