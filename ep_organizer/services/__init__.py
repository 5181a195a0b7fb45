"""Service layer - collection, ordering, assignment and copying."""
from .scanner import DirectoryScanner
from .sorting import extract_key, sort_files
from .planner import assign, create_episode_dirs
from .copier import CopyEngine, OutcomeLog
from .organizer import EpisodeOrganizer, OrganizerDependencies

__all__ = [
    "DirectoryScanner",
    "extract_key",
    "sort_files",
    "assign",
    "create_episode_dirs",
    "CopyEngine",
    "OutcomeLog",
    "EpisodeOrganizer",
    "OrganizerDependencies",
]
