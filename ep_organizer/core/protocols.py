"""Protocol definitions (interfaces) for dependency injection."""
from __future__ import annotations

from abc import abstractmethod
from typing import Optional, Protocol

from .models import Assignment, CopyStats


class ProgressReporter(Protocol):
    """Interface for progress reporting."""
    
    @abstractmethod
    def start_phase(self, name: str, total: int) -> None:
        """Start a new processing phase."""
        ...
    
    @abstractmethod
    def update_phase(self, completed: int, description: Optional[str] = None) -> None:
        """Update progress."""
        ...
    
    @abstractmethod
    def advance_phase(self, amount: int = 1) -> None:
        """Advance the current phase by an amount."""
        ...
    
    @abstractmethod
    def end_phase(self) -> None:
        """End the current phase."""
        ...
    
    @abstractmethod
    def info(self, message: str) -> None:
        ...
    
    @abstractmethod
    def success(self, message: str) -> None:
        ...
    
    @abstractmethod
    def warning(self, message: str) -> None:
        ...
    
    @abstractmethod
    def error(self, message: str) -> None:
        ...
    
    @abstractmethod
    def debug(self, message: str) -> None:
        ...
    
    @abstractmethod
    def print_header(self, title: str) -> None:
        ...
    
    @abstractmethod
    def print_config(self, config_items: dict) -> None:
        ...
    
    @abstractmethod
    def print_assignment(self, assignment: Assignment, action: str) -> None:
        """Show a planned assignment (dry run)."""
        ...
    
    @abstractmethod
    def print_stats(self, stats: CopyStats) -> None:
        """Show the final tally."""
        ...
