"""Tests for the copy engine."""
import threading
import time
import pytest
from pathlib import Path
from unittest.mock import MagicMock, call

from ep_organizer.core.errors import ConfigError
from ep_organizer.core.models import CopyAction, CopyOutcome, InputFile
from ep_organizer.services.copier import CopyEngine, OutcomeLog, SKIP_REASON
from ep_organizer.services.planner import assign, create_episode_dirs


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """Create five source files with distinct content."""
    src = tmp_path / "src"
    src.mkdir()
    for i in range(1, 6):
        (src / f"clip_{i}.mp4").write_bytes(f"content {i}".encode() * 100)
    return src


@pytest.fixture
def assignments(source_dir: Path, tmp_path: Path):
    """Assignments for the source files with folders created."""
    files = [InputFile(path=p) for p in sorted(source_dir.iterdir())]
    planned = assign(files, tmp_path / "dest", "episode")
    create_episode_dirs(planned)
    return planned


class TrackingCopyEngine(CopyEngine):
    """Copy engine that records how many copies overlap."""
    
    def __init__(self, *args, delay: float = 0.02, **kwargs):
        super().__init__(*args, **kwargs)
        self._delay = delay
        self._lock = threading.Lock()
        self.in_flight = 0
        self.max_in_flight = 0
    
    def copy_one(self, assignment):
        with self._lock:
            self.in_flight += 1
            self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            time.sleep(self._delay)
            return super().copy_one(assignment)
        finally:
            with self._lock:
                self.in_flight -= 1


class TestOutcomeLog:
    """Tests for OutcomeLog."""
    
    def test_concurrent_appends(self, assignments):
        """Test no appends are lost across threads."""
        log = OutcomeLog()
        outcome = CopyOutcome(assignment=assignments[0], action=CopyAction.COPIED)
        
        def worker():
            for _ in range(500):
                log.append(outcome)
        
        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        
        assert len(log) == 4000
        assert len(log.snapshot()) == 4000
    
    def test_snapshot_is_a_copy(self, assignments):
        log = OutcomeLog()
        snapshot = log.snapshot()
        log.append(CopyOutcome(assignment=assignments[0], action=CopyAction.COPIED))
        
        assert snapshot == []


class TestDecide:
    """Tests for the skip/copy decision."""
    
    def test_missing_target_needs_copy(self, assignments):
        engine = CopyEngine()
        
        assert engine.decide(assignments[0]) is None
    
    def test_existing_target_skipped(self, assignments):
        """Test an existing file is skipped without replace."""
        assignments[0].target_path.write_bytes(b"old")
        engine = CopyEngine(replace_existing=False)
        
        outcome = engine.decide(assignments[0])
        
        assert outcome.action == CopyAction.SKIPPED
        assert outcome.reason == SKIP_REASON
    
    def test_existing_target_replaced(self, assignments):
        """Test replace mode never skips."""
        assignments[0].target_path.write_bytes(b"old")
        engine = CopyEngine(replace_existing=True)
        
        assert engine.decide(assignments[0]) is None


class TestCopyOne:
    """Tests for copying a single assignment."""
    
    def test_copies_content(self, assignments):
        assignment = assignments[0]
        
        outcome = CopyEngine().copy_one(assignment)
        
        assert outcome.action == CopyAction.COPIED
        assert assignment.target_path.read_bytes() == assignment.source.path.read_bytes()
    
    def test_missing_source_fails(self, assignments):
        """Test I/O errors become FAILED outcomes."""
        assignment = assignments[0]
        assignment.source.path.unlink()
        
        outcome = CopyEngine().copy_one(assignment)
        
        assert outcome.action == CopyAction.FAILED
        assert not outcome.is_success
        assert str(assignment.source.path) in outcome.reason
    
    def test_directory_at_target_fails(self, assignments):
        """Test a folder occupying the target path fails cleanly."""
        assignment = assignments[0]
        assignment.target_path.mkdir()
        
        outcome = CopyEngine(replace_existing=True).copy_one(assignment)
        
        assert outcome.action == CopyAction.FAILED


class TestRun:
    """Tests for running whole batches."""
    
    def test_invalid_threads(self):
        with pytest.raises(ConfigError, match="positive integer"):
            CopyEngine(threads=0)
    
    @pytest.mark.parametrize("threads", [1, 3])
    def test_copies_everything(self, assignments, threads):
        stats = CopyEngine(threads=threads).run(assignments)
        
        assert stats.summary() == {"total": 5, "copied": 5, "skipped": 0, "failed": 0}
        for a in assignments:
            assert a.target_path.read_bytes() == a.source.path.read_bytes()
    
    @pytest.mark.parametrize("threads", [1, 4])
    def test_skip_law(self, assignments, threads):
        """Test existing targets are untouched and sources never read."""
        target = assignments[1].target_path
        target.write_bytes(b"keep me")
        # A missing source proves it was never opened
        assignments[1].source.path.unlink()
        
        stats = CopyEngine(replace_existing=False, threads=threads).run(assignments)
        
        assert target.read_bytes() == b"keep me"
        assert stats.skipped == 1
        assert stats.copied == 4
        assert stats.failed == 0
    
    @pytest.mark.parametrize("threads", [1, 4])
    def test_replace_law(self, assignments, threads):
        """Test existing targets end up identical to the source."""
        for a in assignments:
            a.target_path.write_bytes(b"stale content that is longer than the source" * 50)
        
        stats = CopyEngine(replace_existing=True, threads=threads).run(assignments)
        
        assert stats.copied == 5
        for a in assignments:
            assert a.target_path.read_bytes() == a.source.path.read_bytes()
    
    @pytest.mark.parametrize("threads", [1, 4])
    def test_failures_are_isolated(self, assignments, threads):
        """Test one failed copy does not stop the others."""
        assignments[2].source.path.unlink()
        
        stats = CopyEngine(threads=threads).run(assignments)
        
        assert stats.failed == 1
        assert stats.copied == 4
        assert not assignments[2].target_path.exists()
        for i in (0, 1, 3, 4):
            assert assignments[i].target_path.exists()
    
    def test_parallel_bound(self, tmp_path: Path):
        """Test no more than `threads` copies run at once."""
        src = tmp_path / "src"
        src.mkdir()
        files = []
        for i in range(20):
            path = src / f"clip_{i}.mp4"
            path.write_bytes(b"x" * 10)
            files.append(InputFile(path=path))
        planned = assign(files, tmp_path / "dest", "ep")
        create_episode_dirs(planned)
        
        engine = TrackingCopyEngine(threads=3)
        stats = engine.run(planned)
        
        assert stats.copied == 20
        assert 1 <= engine.max_in_flight <= 3
        assert engine.in_flight == 0
    
    def test_sequential_progress(self, assignments):
        """Test sequential mode reports current/total after each file."""
        progress = MagicMock()
        
        CopyEngine(threads=1, progress=progress).run(assignments)
        
        progress.start_phase.assert_called_once_with("Copying", 5)
        assert progress.update_phase.call_args_list == [
            call(i, f"Copying {i}/5") for i in range(1, 6)
        ]
        progress.end_phase.assert_called_once()
    
    def test_parallel_progress_counts_dispatch(self, assignments):
        """Test parallel mode reports dispatched operations."""
        assignments[0].target_path.write_bytes(b"existing")
        progress = MagicMock()
        
        CopyEngine(threads=2, progress=progress).run(assignments)
        
        reported = [c.args[0] for c in progress.update_phase.call_args_list]
        assert reported == [1, 2, 3, 4, 5]
        progress.warning.assert_called_once()
        progress.end_phase.assert_called_once()
    
    def test_failure_reported(self, assignments):
        progress = MagicMock()
        assignments[0].source.path.unlink()
        
        CopyEngine(progress=progress).run(assignments)
        
        progress.error.assert_called_once()
    
    def test_empty_batch(self):
        stats = CopyEngine(threads=4).run([])
        
        assert stats.summary() == {"total": 0, "copied": 0, "skipped": 0, "failed": 0}
    
    def test_reporter_error_counted_once(self, assignments):
        """Test a reporter raising in a worker still yields one outcome per file."""
        progress = MagicMock()
        progress.debug.side_effect = RuntimeError("display gone")
        
        stats = CopyEngine(threads=2, progress=progress).run(assignments)
        
        assert stats.total == 5
        assert stats.processed == 5
        assert stats.summary() == {"total": 5, "copied": 0, "skipped": 0, "failed": 5}
