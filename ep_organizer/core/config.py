"""Configuration dataclasses with validation."""
from __future__ import annotations

from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Optional

from .errors import ConfigError


class SortMode(Enum):
    """How input files are ordered before numbering."""
    ALPHABETICAL = "alphabetical"  # digit_length == 0
    NUMERIC = "numeric"            # digit_length > 0


@dataclass(slots=True)
class OrganizerConfig:
    """Main configuration for a run.
    
    All fields are validated on construction.
    This is the only configuration object passed through the system.
    """
    # Required
    source_dir: Path
    dest_dir: Path
    new_name: str
    
    # Ordering
    digit_length: int = 0
    start_index: int = 1
    
    # Copy behaviour
    replace_existing: bool = False
    threads: int = 1
    extension: str = "mp4"
    
    # Execution
    log_file: Optional[Path] = None
    dry_run: bool = False
    
    def __post_init__(self) -> None:
        """Validate configuration."""
        if not self.source_dir or not str(self.source_dir):
            raise ConfigError("Source directory is required")
        
        if not self.dest_dir or not str(self.dest_dir):
            raise ConfigError("Destination directory is required")
        
        if not self.new_name:
            raise ConfigError("New name is required")
        
        if "/" in self.new_name or "\\" in self.new_name:
            raise ConfigError(f"New name must not contain a path separator: {self.new_name!r}")
        
        if self.digit_length < 0:
            raise ConfigError("Number length must be 0 or greater")
        
        if self.start_index < 0:
            raise ConfigError("Start index must be 0 or greater")
        
        if self.threads < 1:
            raise ConfigError("Threads must be a positive integer")
        
        # Accept both "mp4" and ".mp4"
        self.extension = self.extension.lstrip(".")
        if not self.extension:
            raise ConfigError("Extension must not be empty")
        
        self.source_dir = Path(self.source_dir)
        self.dest_dir = Path(self.dest_dir)
        if self.log_file is not None:
            self.log_file = Path(self.log_file)
    
    @property
    def sort_mode(self) -> SortMode:
        if self.digit_length > 0:
            return SortMode.NUMERIC
        return SortMode.ALPHABETICAL
    
    @property
    def parallel(self) -> bool:
        return self.threads > 1
    
    def with_overrides(self, **kwargs) -> "OrganizerConfig":
        """Create a new config with some values overridden."""
        current = {f.name: getattr(self, f.name) for f in fields(self)}
        current.update(kwargs)
        return OrganizerConfig(**current)
