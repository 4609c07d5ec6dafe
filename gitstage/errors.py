"""Error taxonomy for gitstage.

``StartupError`` is fatal and aborts before the UI starts.
``ReadError`` and ``StageError`` are recoverable inside one key-handling step.
"""

from __future__ import annotations


class GitStageError(Exception):
    """Base class for all errors raised by gitstage collaborators."""


class StartupError(GitStageError):
    """Repository could not be opened or its status could not be queried."""


class ReadError(GitStageError):
    """File content for a change entry could not be read."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"cannot read {path}: {reason}")
        self.path = path
        self.reason = reason


class StageError(GitStageError):
    """Adding a path to the staging index, or persisting it, failed."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"cannot stage {path}: {reason}")
        self.path = path
        self.reason = reason
