# src/task_tracker/errors.py

"""
Error hierarchy for the task tracker.

Every failure surfaced to the user derives from TaskTrackerError, so the CLI
entrypoint can print a single "Error: ..." line and exit 1.
"""

from __future__ import annotations

from pathlib import Path


class TaskTrackerError(Exception):
    """Base exception for all task tracker errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class UsageError(TaskTrackerError):
    """Raised for an unknown command, wrong operand count, bad id or bad status."""


class PersistenceError(TaskTrackerError):
    """Raised when the task file cannot be read (other than absence) or written."""

    def __init__(self, message: str, path: str | Path) -> None:
        """
        Args:
            message: Error message
            path: Task file the failed I/O targeted
        """
        super().__init__(message)
        self.path = Path(path)


class CorruptDataError(TaskTrackerError):
    """Raised when the task file exists but does not hold a valid task list."""

    def __init__(self, message: str, path: str | Path) -> None:
        super().__init__(message)
        self.path = Path(path)
