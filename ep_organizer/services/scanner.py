"""Directory scanning service."""
from __future__ import annotations

import logging
from pathlib import Path

from ..core.errors import NoInputError
from ..core.models import InputFile


logger = logging.getLogger(__name__)


def matches_extension(path: Path, extension: str) -> bool:
    """Check a filename ending against an extension, ignoring case.
    
    Multi-part extensions such as `tar.gz` match as a whole. The name
    must have something before the extension.
    """
    suffix = "." + extension.lstrip(".").lower()
    name = path.name.lower()
    return name.endswith(suffix) and len(name) > len(suffix)


class DirectoryScanner:
    """Collects the input files of a single flat source directory.
    
    Only regular files are considered; symlinks and subdirectories
    are ignored.
    """
    
    def __init__(self, extension: str = "mp4"):
        """Initialize the scanner.
        
        Args:
            extension: File extension to match (case-insensitive).
        """
        self._extension = extension.lstrip(".")
    
    @property
    def extension(self) -> str:
        return self._extension
    
    def scan(self, source_dir: Path) -> list[InputFile]:
        """Scan the source directory for matching files.
        
        Args:
            source_dir: Directory holding the files to organize.
        
        Returns:
            Matching files in directory listing order.
        
        Raises:
            NoInputError: If the directory is missing or has no matches.
        """
        if not source_dir.is_dir():
            raise NoInputError(f"Source directory does not exist: {source_dir}")
        
        files = []
        for entry in source_dir.iterdir():
            if entry.is_symlink() or not entry.is_file():
                continue
            if matches_extension(entry, self._extension):
                files.append(InputFile(path=entry, matched_extension=self._extension))
        
        if not files:
            raise NoInputError(
                f"No .{self._extension} files found in source directory: {source_dir}"
            )
        
        logger.info("Collected %d .%s files from %s", len(files), self._extension, source_dir)
        return files
