"""Logging package with Rich-based progress reporting."""

from .rich_logger import RichProgressReporter, QuietProgressReporter
from .file_log import setup_file_logging, teardown_file_logging

__all__ = [
    "RichProgressReporter",
    "QuietProgressReporter",
    "setup_file_logging",
    "teardown_file_logging",
]
