"""File-based logging for gitstage.

The terminal belongs to the UI while it runs, so records only go to a
rotating log file under the platform log directory.
"""

from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from pathlib import Path

from platformdirs import user_log_dir

from .config import APP_NAME, LOG_LEVEL_NAMES

LOG_DIR = Path(user_log_dir(APP_NAME, appauthor=False))
LOG_FILENAME = "gitstage.log"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_MAX_BYTES = 1024 * 1024
LOG_BACKUP_COUNT = 2
LOG_LEVEL_ENV = "GITSTAGE_LOG_LEVEL"


def resolve_log_level(cli_level: str | None, config_level: str) -> int:
    """Pick the level from the CLI, then ``GITSTAGE_LOG_LEVEL``, then config."""
    for candidate in (cli_level, os.environ.get(LOG_LEVEL_ENV), config_level):
        if candidate and candidate.upper() in LOG_LEVEL_NAMES:
            return getattr(logging, candidate.upper())
    return logging.WARNING


def setup_logging(level: int, log_dir: Path | None = None) -> Path | None:
    """Attach a rotating file handler to the ``gitstage`` logger.

    Returns the log file path, or ``None`` when the log directory cannot be
    created; logging then stays disabled instead of writing to the terminal.
    """
    package_logger = logging.getLogger(APP_NAME)
    package_logger.setLevel(level)
    package_logger.propagate = False
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    target_dir = log_dir if log_dir is not None else LOG_DIR
    try:
        target_dir.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            target_dir / LOG_FILENAME,
            maxBytes=LOG_MAX_BYTES,
            backupCount=LOG_BACKUP_COUNT,
            encoding="utf-8",
        )
    except OSError:
        package_logger.addHandler(logging.NullHandler())
        return None

    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    return target_dir / LOG_FILENAME
