"""Change entries and the startup change-set collector.

The collector asks the repository for working-tree status once and keeps
only new and modified files, in the order git reports them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .git_repo import STATUS_MODIFIED, STATUS_NEW

logger = logging.getLogger(__name__)

CHANGE_NEW = STATUS_NEW
CHANGE_MODIFIED = STATUS_MODIFIED
CHANGE_KINDS = (CHANGE_NEW, CHANGE_MODIFIED)


@dataclass(frozen=True)
class ChangeEntry:
    """One working-tree change shown as a list row."""

    path: str
    kind: str

    def __post_init__(self) -> None:
        if not self.path:
            raise ValueError("change entry path must be non-empty")
        if self.kind not in CHANGE_KINDS:
            raise ValueError(f"unsupported change kind: {self.kind!r}")


class ChangeSetCollector:
    def __init__(self, repository) -> None:
        self.repository = repository

    def collect(self) -> tuple[ChangeEntry, ...]:
        """Return new/modified entries; repository errors propagate as ``StartupError``."""
        records = self.repository.query_status(include_untracked=True, include_ignored=True)
        entries = tuple(
            ChangeEntry(path=record.path, kind=record.status)
            for record in records
            if record.status in CHANGE_KINDS and record.path
        )
        logger.debug("collected %d change entries, dropped %d", len(entries), len(records) - len(entries))
        return entries
