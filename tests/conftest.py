# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from task_tracker.config import Settings
from task_tracker.tasks.task_store import JsonTaskStore

from .fakes import FakeClock, FakeTaskRepo


@pytest.fixture()
def tasks_file(tmp_path: Path) -> Path:
    return tmp_path / "tasks.json"


@pytest.fixture()
def settings(tasks_file: Path) -> Settings:
    """Settings pointed at a per-test file; no log file."""
    return Settings(tasks_file=tasks_file, log_level="WARNING", log_dir=None)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(tasks_file: Path, clock: FakeClock) -> JsonTaskStore:
    return JsonTaskStore(tasks_file, clock=clock)


@pytest.fixture()
def fake_repo() -> FakeTaskRepo:
    return FakeTaskRepo()
