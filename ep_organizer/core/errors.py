"""Error taxonomy.

Everything except CopyError is fatal and raised before the first copy.
CopyError describes a single failed file and never aborts the batch.
"""
from __future__ import annotations

from pathlib import Path


class OrganizerError(Exception):
    """Base class for all organizer errors."""


class ConfigError(OrganizerError):
    """Missing or invalid configuration value."""


class NoInputError(OrganizerError):
    """Source directory missing or holds no matching files."""


class NoNumberFound(OrganizerError):
    """Numeric sorting requested but a filename contains no digits."""
    
    def __init__(self, filename: str):
        super().__init__(f"No numbers found in filename '{filename}'")
        self.filename = filename


class DirectoryCreateError(OrganizerError):
    """An episode folder could not be created."""
    
    def __init__(self, path: Path, cause: OSError):
        super().__init__(f"Cannot create directory {path}: {cause}")
        self.path = path
        self.cause = cause


class CopyError(OrganizerError):
    """A single file failed to copy."""
    
    def __init__(self, source: Path, target: Path, cause: OSError):
        super().__init__(f"Error copying {source} -> {target}: {cause}")
        self.source = source
        self.target = target
        self.cause = cause
