"""Main organizer - orchestrates the pre-flight and copy passes."""
from __future__ import annotations

import logging
from dataclasses import dataclass

from ..core.config import OrganizerConfig
from ..core.models import Assignment, CopyAction, CopyOutcome, CopyStats
from ..core.protocols import ProgressReporter
from .copier import CopyEngine
from .planner import assign, create_episode_dirs
from .scanner import DirectoryScanner
from .sorting import sort_files


logger = logging.getLogger(__name__)


@dataclass
class OrganizerDependencies:
    """All dependencies needed by the organizer.
    
    This is explicitly passed in - no globals or singletons.
    """
    scanner: DirectoryScanner
    copy_engine: CopyEngine
    progress: ProgressReporter
    
    @classmethod
    def from_config(
        cls,
        config: OrganizerConfig,
        progress: ProgressReporter,
    ) -> "OrganizerDependencies":
        return cls(
            scanner=DirectoryScanner(extension=config.extension),
            copy_engine=CopyEngine(
                replace_existing=config.replace_existing,
                threads=config.threads,
                progress=progress,
            ),
            progress=progress,
        )


class EpisodeOrganizer:
    """Organizes source files into numbered episode folders.
    
    Uses two passes:
    1. Pre-flight: collect, sort, assign and create every episode folder.
       Any error here aborts the run before a single byte is copied.
    2. Copy: copy (or skip) each file. Failures are isolated per file.
    """
    
    def __init__(self, config: OrganizerConfig, deps: OrganizerDependencies):
        """Initialize organizer with config and dependencies.
        
        Args:
            config: Run configuration.
            deps: All required dependencies.
        """
        self._config = config
        self._deps = deps
    
    def plan(self) -> list[Assignment]:
        """Collect, sort and assign without touching the destination.
        
        Raises:
            NoInputError: Nothing to organize.
            NoNumberFound: A filename lacks digits in numeric mode.
        """
        progress = self._deps.progress
        
        files = self._deps.scanner.scan(self._config.source_dir)
        progress.info(f"Found {len(files)} .{self._deps.scanner.extension} files")
        
        ordered = sort_files(files, self._config.digit_length)
        progress.debug(f"Sorted {len(ordered)} files ({self._config.sort_mode.value})")
        
        assignments = assign(
            ordered,
            dest_dir=self._config.dest_dir,
            new_name=self._config.new_name,
            start_index=self._config.start_index,
        )
        for assignment in assignments:
            logger.debug(
                "Assigned %s -> episode_%d",
                assignment.source.name, assignment.index,
            )
        return assignments
    
    def run(self) -> CopyStats:
        """Run the full pipeline.
        
        Returns:
            Final tally of copied, skipped and failed files.
        """
        assignments = self.plan()
        
        if self._config.dry_run:
            return self._dry_run(assignments)
        
        create_episode_dirs(assignments)
        
        stats = self._deps.copy_engine.run(assignments)
        
        if stats.failed:
            self._deps.progress.warning(f"{stats.failed} files failed to copy")
        else:
            self._deps.progress.success("All files have been organized into episode folders.")
        return stats
    
    def _dry_run(self, assignments: list[Assignment]) -> CopyStats:
        """Report what would happen without touching the filesystem."""
        engine = self._deps.copy_engine
        outcomes = []
        for assignment in assignments:
            outcome = engine.decide(assignment)
            if outcome is None:
                outcome = CopyOutcome(assignment=assignment, action=CopyAction.COPIED)
                self._deps.progress.print_assignment(assignment, "would copy")
            else:
                self._deps.progress.print_assignment(assignment, "would skip")
            outcomes.append(outcome)
        
        self._deps.progress.info("Dry run - no files were copied")
        return CopyStats.from_outcomes(outcomes)
