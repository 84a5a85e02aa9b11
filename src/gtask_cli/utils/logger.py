"""Application logger.

Everything goes to a size-rotated file under platformdirs' user_log_dir;
nothing is written to the terminal, which belongs to command output.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from platformdirs import user_log_dir

LOGGER_NAME = "gtask_cli"
LOG_FILE_NAME = "gtask.log"
_MAX_BYTES = 1024 * 1024
_BACKUP_COUNT = 2
_FORMAT = "%(asctime)s %(levelname)-8s [%(name)s] %(message)s"
_DATE_FORMAT = "%Y-%m-%dT%H:%M:%S"

_logger: logging.Logger | None = None


def log_file_path() -> Path:
    """Path of the current log file."""
    return Path(user_log_dir(LOGGER_NAME)) / LOG_FILE_NAME


def _has_file_handler(logger: logging.Logger, path: Path) -> bool:
    # Other handlers (e.g. pytest's capture handlers) may already be attached
    return any(
        isinstance(handler, RotatingFileHandler) and Path(handler.baseFilename) == path
        for handler in logger.handlers
    )


def _file_handler(path: Path) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        path, maxBytes=_MAX_BYTES, backupCount=_BACKUP_COUNT, encoding="utf-8"
    )
    handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATE_FORMAT))
    return handler


def get_logger() -> logging.Logger:
    """Return the application logger, attaching the file handler on first use."""
    global _logger
    if _logger is not None:
        return _logger

    path = log_file_path().resolve()
    path.parent.mkdir(parents=True, exist_ok=True)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    if not _has_file_handler(logger, path):
        logger.addHandler(_file_handler(path))
    logger.propagate = False

    _logger = logger
    return _logger
