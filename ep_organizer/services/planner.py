"""Episode folder assignment."""
from __future__ import annotations

import logging
from pathlib import Path

from ..core.errors import DirectoryCreateError
from ..core.models import Assignment, InputFile


logger = logging.getLogger(__name__)

EPISODE_PREFIX = "episode_"


def episode_dir_name(index: int) -> str:
    return f"{EPISODE_PREFIX}{index}"


def target_filename(new_name: str, source: InputFile) -> str:
    """Build the renamed filename, keeping the source extension as-is."""
    if not source.extension:
        return new_name
    return f"{new_name}.{source.extension}"


def assign(
    sorted_files: list[InputFile],
    dest_dir: Path,
    new_name: str,
    start_index: int = 1,
) -> list[Assignment]:
    """Map sorted files to consecutive episode folders.
    
    Args:
        sorted_files: Files in final order.
        dest_dir: Root of the episode folders.
        new_name: Filename (without extension) inside every episode folder.
        start_index: Index of the first episode folder.
    
    Returns:
        One assignment per file, indices `start_index .. start_index + N - 1`.
    """
    assignments = []
    for position, source in enumerate(sorted_files):
        index = start_index + position
        target = dest_dir / episode_dir_name(index) / target_filename(new_name, source)
        assignments.append(Assignment(source=source, index=index, target_path=target))
    return assignments


def create_episode_dirs(assignments: list[Assignment]) -> None:
    """Create every episode folder before any copy starts.
    
    Raises:
        DirectoryCreateError: The first folder that could not be created.
    """
    for assignment in assignments:
        path = assignment.episode_dir
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise DirectoryCreateError(path, e) from e
    logger.info("Prepared %d episode folders", len(assignments))
