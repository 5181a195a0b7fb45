"""Core domain models, errors and protocols."""
from .protocols import ProgressReporter
from .models import (
    InputFile,
    Assignment,
    CopyAction,
    CopyOutcome,
    CopyStats,
)
from .config import OrganizerConfig, SortMode
from .errors import (
    OrganizerError,
    ConfigError,
    NoInputError,
    NoNumberFound,
    DirectoryCreateError,
    CopyError,
)

__all__ = [
    # Protocols
    "ProgressReporter",
    # Models
    "InputFile",
    "Assignment",
    "CopyAction",
    "CopyOutcome",
    "CopyStats",
    # Config
    "OrganizerConfig",
    "SortMode",
    # Errors
    "OrganizerError",
    "ConfigError",
    "NoInputError",
    "NoNumberFound",
    "DirectoryCreateError",
    "CopyError",
]
