"""Stage one change entry into the repository index."""

from __future__ import annotations

import logging

from .changes import ChangeEntry
from .errors import StageError

logger = logging.getLogger(__name__)


class StagingAction:
    """Add an entry's path to the staging index and persist it.

    Both steps go to the repository collaborator. A failure in either raises
    ``StageError``; nothing is retried or rolled back.
    """

    def __init__(self, repository) -> None:
        self.repository = repository

    def stage(self, entry: ChangeEntry) -> None:
        try:
            self.repository.add_path(entry.path)
            self.repository.persist()
        except StageError:
            logger.warning("staging %s failed", entry.path, exc_info=True)
            raise
        except OSError as exc:
            logger.warning("staging %s failed", entry.path, exc_info=True)
            raise StageError(entry.path, str(exc)) from exc
        logger.info("staged %s", entry.path)
