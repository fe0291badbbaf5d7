# src/task_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the command layer.

Commands depend on this Protocol instead of the JSON store, so the storage
backend is swappable and the dispatcher can be tested with an in-memory fake.
"""

from typing import Protocol

from ..tasks.task_models import Task


class TaskRepo(Protocol):
    def add(self, description: str) -> Task: ...
    def update(self, task_id: int, description: str) -> None: ...
    def delete(self, task_id: int) -> None: ...
    def mark_in_progress(self, task_id: int) -> None: ...
    def mark_done(self, task_id: int) -> None: ...

    # Empty filter -> all tasks.
    def list(self, status_filter: str = "") -> list[Task]: ...
