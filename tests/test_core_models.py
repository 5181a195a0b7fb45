"""Tests for core domain models."""
import pytest
from pathlib import Path

from ep_organizer.core.models import (
    Assignment,
    CopyAction,
    CopyOutcome,
    CopyStats,
    InputFile,
)


@pytest.fixture
def assignment() -> Assignment:
    return Assignment(
        source=InputFile(path=Path("/src/Clip_01.MKV")),
        index=3,
        target_path=Path("/dest/episode_3/ep.MKV"),
    )


class TestInputFile:
    
    def test_properties(self):
        item = InputFile(path=Path("/src/Clip_01.MKV"))
        
        assert item.name == "Clip_01.MKV"
        assert item.extension == "MKV"
    
    def test_matched_extension(self):
        item = InputFile(path=Path("/src/ep1.Tar.GZ"), matched_extension="tar.gz")
        
        assert item.extension == "Tar.GZ"
    
    def test_no_extension(self):
        assert InputFile(path=Path("/src/README")).extension == ""
    
    def test_frozen(self):
        item = InputFile(path=Path("/src/a.mp4"))
        
        with pytest.raises(AttributeError):
            item.path = Path("/src/b.mp4")


class TestAssignment:
    
    def test_episode_dir(self, assignment):
        assert assignment.episode_dir == Path("/dest/episode_3")
    
    def test_frozen(self, assignment):
        with pytest.raises(AttributeError):
            assignment.index = 4


class TestCopyOutcome:
    
    def test_success_flags(self, assignment):
        assert CopyOutcome(assignment, CopyAction.COPIED).is_success
        assert CopyOutcome(assignment, CopyAction.SKIPPED, "already exists").is_success
        assert not CopyOutcome(assignment, CopyAction.FAILED, "boom").is_success


class TestCopyStats:
    """Tests for CopyStats."""
    
    def test_record(self, assignment):
        stats = CopyStats(total=3)
        
        stats.record(CopyOutcome(assignment, CopyAction.COPIED))
        stats.record(CopyOutcome(assignment, CopyAction.SKIPPED))
        stats.record(CopyOutcome(assignment, CopyAction.FAILED))
        
        assert stats.copied == 1
        assert stats.skipped == 1
        assert stats.failed == 1
        assert stats.processed == 3
    
    def test_from_outcomes(self, assignment):
        outcomes = [
            CopyOutcome(assignment, CopyAction.COPIED),
            CopyOutcome(assignment, CopyAction.COPIED),
            CopyOutcome(assignment, CopyAction.SKIPPED),
        ]
        
        stats = CopyStats.from_outcomes(outcomes)
        
        assert stats.summary() == {"total": 3, "copied": 2, "skipped": 1, "failed": 0}
