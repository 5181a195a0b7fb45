"""Per-run log file for the organizer."""
from __future__ import annotations

import logging
from pathlib import Path

LOGGER_NAME = "ep_organizer"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

# Without a log file, records stop here instead of reaching the last-resort stderr handler
logging.getLogger(LOGGER_NAME).addHandler(logging.NullHandler())

_previous_levels: dict[logging.Handler, int] = {}


def setup_file_logging(log_file: Path, verbose: bool = False) -> logging.FileHandler:
    """Attach a file handler to the package logger.
    
    Args:
        log_file: File to write to. Parent directories are created.
        verbose: Also record DEBUG messages.
    
    Returns:
        The installed handler, to pass to `teardown_file_logging`.
    """
    log_file.parent.mkdir(parents=True, exist_ok=True)
    
    handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    level = logging.DEBUG if verbose else logging.INFO
    handler.setLevel(level)
    
    logger = logging.getLogger(LOGGER_NAME)
    _previous_levels[handler] = logger.level
    logger.setLevel(level)
    logger.addHandler(handler)
    return handler


def teardown_file_logging(handler: logging.Handler) -> None:
    """Detach and close a handler from `setup_file_logging`.
    
    The package logger gets back the level it had before setup.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.removeHandler(handler)
    if handler in _previous_levels:
        logger.setLevel(_previous_levels.pop(handler))
    handler.close()
