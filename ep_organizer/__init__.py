"""Organize media files into numbered episode folders."""

__version__ = "1.0.0"

# Core exports
from .core.config import OrganizerConfig, SortMode
from .core.models import InputFile, Assignment, CopyAction, CopyOutcome, CopyStats
from .core.protocols import ProgressReporter
from .core.errors import (
    OrganizerError,
    ConfigError,
    NoInputError,
    NoNumberFound,
    DirectoryCreateError,
    CopyError,
)

# Service exports
from .services.scanner import DirectoryScanner
from .services.sorting import extract_key, sort_files
from .services.planner import assign, create_episode_dirs
from .services.copier import CopyEngine
from .services.organizer import EpisodeOrganizer, OrganizerDependencies

# Logging exports
from .logging.rich_logger import RichProgressReporter, QuietProgressReporter

__all__ = [
    # Core
    "OrganizerConfig",
    "SortMode",
    "InputFile",
    "Assignment",
    "CopyAction",
    "CopyOutcome",
    "CopyStats",
    "ProgressReporter",
    "OrganizerError",
    "ConfigError",
    "NoInputError",
    "NoNumberFound",
    "DirectoryCreateError",
    "CopyError",
    # Services
    "DirectoryScanner",
    "extract_key",
    "sort_files",
    "assign",
    "create_episode_dirs",
    "CopyEngine",
    "EpisodeOrganizer",
    "OrganizerDependencies",
    # Logging
    "RichProgressReporter",
    "QuietProgressReporter",
]
