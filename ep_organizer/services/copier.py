"""Copy engine - skip/copy decisions and sequential or pooled copying.

The skip-or-copy decision for every assignment is made on the calling
thread before anything is dispatched. Worker threads only copy bytes and
report outcomes into a shared OutcomeLog.
"""
from __future__ import annotations

import logging
import shutil
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor, wait
from typing import Optional

from ..core.errors import ConfigError, CopyError
from ..core.models import Assignment, CopyAction, CopyOutcome, CopyStats
from ..core.protocols import ProgressReporter


logger = logging.getLogger(__name__)

SKIP_REASON = "already exists"


class OutcomeLog:
    """Append-only, thread-safe collection of copy outcomes."""
    
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._outcomes: list[CopyOutcome] = []
    
    def append(self, outcome: CopyOutcome) -> None:
        with self._lock:
            self._outcomes.append(outcome)
    
    def snapshot(self) -> list[CopyOutcome]:
        """Copy of all outcomes recorded so far."""
        with self._lock:
            return list(self._outcomes)
    
    def __len__(self) -> int:
        with self._lock:
            return len(self._outcomes)


class CopyEngine:
    """Copies assignments to their episode folders.
    
    With one thread assignments are copied in order. With more, copies
    run on a ThreadPoolExecutor and at most `threads` are in flight at
    any time; submission blocks until a slot frees up.
    """
    
    def __init__(
        self,
        replace_existing: bool = False,
        threads: int = 1,
        progress: Optional[ProgressReporter] = None,
    ):
        """Initialize the engine.
        
        Args:
            replace_existing: Overwrite files already present at the target.
            threads: Maximum number of concurrent copies (>= 1).
            progress: Optional reporter for progress and per-file messages.
        """
        if threads < 1:
            raise ConfigError("Threads must be a positive integer")
        self._replace_existing = replace_existing
        self._threads = threads
        self._progress = progress
    
    @property
    def threads(self) -> int:
        return self._threads
    
    @property
    def replace_existing(self) -> bool:
        return self._replace_existing
    
    def decide(self, assignment: Assignment) -> Optional[CopyOutcome]:
        """Return a skip outcome if the target must be left alone.
        
        Returns:
            A SKIPPED outcome, or None when the file has to be copied.
        """
        if assignment.target_path.is_file() and not self._replace_existing:
            return CopyOutcome(
                assignment=assignment,
                action=CopyAction.SKIPPED,
                reason=SKIP_REASON,
            )
        return None
    
    def copy_one(self, assignment: Assignment) -> CopyOutcome:
        """Copy a single file, overwriting the target if present.
        
        I/O errors are turned into a FAILED outcome, never raised.
        """
        source = assignment.source.path
        target = assignment.target_path
        try:
            shutil.copyfile(source, target)
        except OSError as e:
            err = CopyError(source, target, e)
            return CopyOutcome(assignment=assignment, action=CopyAction.FAILED, reason=str(err))
        return CopyOutcome(assignment=assignment, action=CopyAction.COPIED)
    
    def run(self, assignments: list[Assignment]) -> CopyStats:
        """Process every assignment and tally the outcomes.
        
        Args:
            assignments: Assignments in episode order.
        
        Returns:
            Exact counts of copied, skipped and failed files.
        """
        start = time.monotonic()
        log = OutcomeLog()
        
        self._start_phase(len(assignments))
        try:
            if self._threads == 1:
                self._run_sequential(assignments, log)
            else:
                self._run_parallel(assignments, log)
        finally:
            self._end_phase()
        
        stats = CopyStats.from_outcomes(log.snapshot())
        stats.elapsed_seconds = time.monotonic() - start
        logger.info(
            "Copy finished: %d copied, %d skipped, %d failed",
            stats.copied, stats.skipped, stats.failed,
        )
        return stats
    
    def _run_sequential(self, assignments: list[Assignment], log: OutcomeLog) -> None:
        total = len(assignments)
        for current, assignment in enumerate(assignments, start=1):
            outcome = self.decide(assignment) or self.copy_one(assignment)
            self._record(outcome, log)
            self._update_phase(current, f"Copying {current}/{total}")
    
    def _run_parallel(self, assignments: list[Assignment], log: OutcomeLog) -> None:
        # Decisions first, on this thread
        to_copy: list[Assignment] = []
        for assignment in assignments:
            outcome = self.decide(assignment)
            if outcome is not None:
                self._record(outcome, log)
            else:
                to_copy.append(assignment)
        
        skipped = len(assignments) - len(to_copy)
        self._update_phase(skipped)
        
        slots = threading.BoundedSemaphore(self._threads)
        futures: dict[Future, Assignment] = {}
        
        def release(_future: Future) -> None:
            slots.release()
        
        with ThreadPoolExecutor(
            max_workers=self._threads,
            thread_name_prefix="ep-copy",
        ) as executor:
            for dispatched, assignment in enumerate(to_copy, start=1):
                slots.acquire()
                future = executor.submit(self._copy_and_record, assignment, log)
                future.add_done_callback(release)
                futures[future] = assignment
                # Dispatched, not completed
                self._update_phase(skipped + dispatched)
            
            done, _ = wait(futures)
        
        for future in done:
            error = future.exception()
            if error is not None:
                self._record(
                    CopyOutcome(
                        assignment=futures[future],
                        action=CopyAction.FAILED,
                        reason=str(error),
                    ),
                    log,
                )
    
    def _copy_and_record(self, assignment: Assignment, log: OutcomeLog) -> None:
        self._record(self.copy_one(assignment), log)
    
    def _record(self, outcome: CopyOutcome, log: OutcomeLog) -> None:
        source = outcome.assignment.source.path
        target = outcome.assignment.target_path
        
        if outcome.action == CopyAction.COPIED:
            logger.info("Copied %s to %s", source, target)
            if self._progress:
                self._progress.debug(f"Copied {source.name} -> {target}")
        elif outcome.action == CopyAction.SKIPPED:
            logger.warning("%s already exists in %s, skipping", target.name, target.parent)
            if self._progress:
                self._progress.warning(
                    f"{target.name} already exists in {target.parent}, skipping"
                )
        else:
            logger.error("Failed to copy %s: %s", source, outcome.reason)
            if self._progress:
                self._progress.error(f"Failed to copy {source.name}: {outcome.reason}")
        
        # After reporting: one outcome per file even if the reporter raises
        log.append(outcome)
    
    def _start_phase(self, total: int) -> None:
        if self._progress:
            self._progress.start_phase("Copying", total)
    
    def _update_phase(self, completed: int, description: Optional[str] = None) -> None:
        if self._progress:
            self._progress.update_phase(completed, description)
    
    def _end_phase(self) -> None:
        if self._progress:
            self._progress.end_phase()
