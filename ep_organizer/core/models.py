"""Domain models - immutable data classes."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class CopyAction(Enum):
    """What happened to a single assignment."""
    COPIED = "copied"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class InputFile:
    """A collected source file."""
    path: Path
    matched_extension: Optional[str] = None
    
    @property
    def name(self) -> str:
        return self.path.name
    
    @property
    def extension(self) -> str:
        """Original extension without the dot, case preserved.
        
        When the file was collected for a multi-part extension such as
        `tar.gz`, the whole matched ending is returned.
        """
        if self.matched_extension:
            return self.name[-len(self.matched_extension):]
        return self.path.suffix[1:]


@dataclass(frozen=True, slots=True)
class Assignment:
    """One source file mapped to its episode folder."""
    source: InputFile
    index: int
    target_path: Path
    
    @property
    def episode_dir(self) -> Path:
        return self.target_path.parent


@dataclass(frozen=True, slots=True)
class CopyOutcome:
    """Result of processing one assignment."""
    assignment: Assignment
    action: CopyAction
    reason: Optional[str] = None
    
    @property
    def is_success(self) -> bool:
        return self.action != CopyAction.FAILED


@dataclass(slots=True)
class CopyStats:
    """Mutable tally for a run."""
    total: int = 0
    copied: int = 0
    skipped: int = 0
    failed: int = 0
    elapsed_seconds: float = 0.0
    
    @property
    def processed(self) -> int:
        return self.copied + self.skipped + self.failed
    
    def record(self, outcome: CopyOutcome) -> None:
        """Record a single outcome."""
        match outcome.action:
            case CopyAction.COPIED:
                self.copied += 1
            case CopyAction.SKIPPED:
                self.skipped += 1
            case CopyAction.FAILED:
                self.failed += 1
    
    @classmethod
    def from_outcomes(cls, outcomes: list[CopyOutcome]) -> "CopyStats":
        stats = cls(total=len(outcomes))
        for outcome in outcomes:
            stats.record(outcome)
        return stats
    
    def summary(self) -> dict[str, int]:
        return {
            "total": self.total,
            "copied": self.copied,
            "skipped": self.skipped,
            "failed": self.failed,
        }
