# src/task_tracker/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

from ..errors import CorruptDataError, PersistenceError
from .task_models import Task, TaskStatus, format_timestamp, parse_timestamp, utcnow

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class JsonTaskStore:
    """
    JSON file task store.

    The whole task list lives in memory and the file is rewritten on every
    mutation, including mutations that matched no task:
    - missing file -> created with an empty list
    - unreadable file -> PersistenceError
    - file that is not a task list -> CorruptDataError

    Ids are assigned as len(tasks) + 1, so an add after a delete can reuse an
    id that is still taken.
    """

    def __init__(self, path: str | Path = "tasks.json", *, clock: Clock = utcnow) -> None:
        self._path = Path(path)
        self._clock = clock
        self._tasks: list[Task] = []
        self._load()
        logger.debug("JsonTaskStore ready path=%s total=%s", self._path, self.count())

    @property
    def path(self) -> Path:
        return self._path

    # ---- low-level helpers ----

    def _load(self) -> None:
        try:
            raw = self._path.read_text("utf-8")
        except FileNotFoundError:
            logger.info("Task file %s not found, creating an empty one.", self._path)
            self._tasks = []
            self._save()
            return
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"failed to read {self._path}: {e}", self._path) from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptDataError(f"corrupt task file {self._path}: {e}", self._path) from e

        # "null" is what some writers of this format emit for an empty list.
        if data is None:
            data = []
        if not isinstance(data, list):
            raise CorruptDataError(
                f"corrupt task file {self._path}: expected a list of tasks", self._path
            )

        tasks: list[Task] = []
        for index, item in enumerate(data):
            try:
                tasks.append(self._json_to_task(item))
            except (KeyError, TypeError, ValueError) as e:
                raise CorruptDataError(
                    f"corrupt task file {self._path}: task #{index}: {e}", self._path
                ) from e
        self._tasks = tasks

    def _save(self) -> None:
        payload = json.dumps(
            [self._task_to_json(t) for t in self._tasks], ensure_ascii=False, indent=2
        )
        # Write through a symlinked task file to its target.
        target = self._path.resolve()
        tmp = target.with_name(target.name + ".tmp")
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_text(payload + "\n", "utf-8")
            os.replace(tmp, target)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise PersistenceError(f"failed to write {self._path}: {e}", self._path) from e
        logger.debug("Saved %d tasks to %s", self.count(), self._path)

    @staticmethod
    def _task_to_json(task: Task) -> dict[str, Any]:
        return {
            "id": task.id,
            "description": task.description,
            "status": task.status.value,
            "createdAt": format_timestamp(task.created_at),
            "updatedAt": format_timestamp(task.updated_at),
        }

    @staticmethod
    def _json_to_task(item: Any) -> Task:
        if not isinstance(item, dict):
            raise TypeError("expected an object")

        task_id = item["id"]
        if isinstance(task_id, bool) or not isinstance(task_id, int):
            raise TypeError(f"id must be an integer, got {task_id!r}")

        description = item["description"]
        if not isinstance(description, str):
            raise TypeError(f"description must be a string, got {description!r}")

        status = item["status"]
        if status not in TaskStatus.values():
            raise ValueError(f"unknown status {status!r}")

        created_raw, updated_raw = item["createdAt"], item["updatedAt"]
        if not isinstance(created_raw, str) or not isinstance(updated_raw, str):
            raise TypeError("timestamps must be strings")

        created_at = parse_timestamp(created_raw)
        updated_at = parse_timestamp(updated_raw)
        if updated_at < created_at:
            raise ValueError("updatedAt is earlier than createdAt")

        return Task(
            id=task_id,
            description=description,
            status=TaskStatus(status),
            created_at=created_at,
            updated_at=updated_at,
        )

    def _touch_matching(self, task_id: int, apply: Callable[[Task], None]) -> int:
        now = self._clock()
        matched = 0
        for task in self._tasks:
            if task.id == task_id:
                apply(task)
                # A clock that moved backwards must not put updatedAt before createdAt.
                task.updated_at = max(now, task.created_at)
                matched += 1
        if not matched:
            logger.debug("No task with id=%s; nothing changed.", task_id)
        return matched

    # ---- public API ----

    def count(self) -> int:
        return len(self._tasks)

    def add(self, description: str) -> Task:
        """
        Append a new todo task and persist.

        If the write fails, PersistenceError is raised and the task stays in
        memory (no rollback).
        """
        now = self._clock()
        task = Task(
            id=self.count() + 1,
            description=description,
            status=TaskStatus.TODO,
            created_at=now,
            updated_at=now,
        )
        self._tasks.append(task)
        logger.debug("Task added id=%s", task.id)
        self._save()
        return task

    def update(self, task_id: int, description: str) -> None:
        def _apply(task: Task) -> None:
            task.description = description

        self._touch_matching(task_id, _apply)
        self._save()

    def delete(self, task_id: int) -> None:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                del self._tasks[i]
                logger.debug("Task deleted id=%s", task_id)
                break
        else:
            logger.debug("No task with id=%s; nothing deleted.", task_id)
        self._save()

    def mark_in_progress(self, task_id: int) -> None:
        self._set_status(task_id, TaskStatus.IN_PROGRESS)

    def mark_done(self, task_id: int) -> None:
        self._set_status(task_id, TaskStatus.DONE)

    def _set_status(self, task_id: int, new_status: TaskStatus) -> None:
        def _apply(task: Task) -> None:
            task.status = new_status

        self._touch_matching(task_id, _apply)
        self._save()

    def list(self, status_filter: str = "") -> list[Task]:
        """All tasks when status_filter is empty, else those with that status, in order."""
        if not status_filter:
            return list(self._tasks)
        return [t for t in self._tasks if t.status == status_filter]
