from __future__ import annotations

from dataclasses import dataclass, field

from .selection import SelectionModel
from .view_state import ViewState


@dataclass
class AppState:
    selection: SelectionModel
    title: str = ""
    view: ViewState = field(default_factory=ViewState)
    status_message: str = ""
    status_is_error: bool = False
    dirty: bool = True

    def set_status(self, message: str, *, error: bool = False) -> None:
        self.status_message = message
        self.status_is_error = error
        self.dirty = True

    def clear_status(self) -> None:
        if not self.status_message:
            return
        self.status_message = ""
        self.status_is_error = False
        self.dirty = True
