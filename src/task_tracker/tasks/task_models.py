# src/task_tracker/tasks/task_models.py

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import StrEnum

# Fractional seconds of any length, normalized to microseconds before parsing.
_FRACTION_RE = re.compile(r"\.(\d+)")


class TaskStatus(StrEnum):
    """Task lifecycle status. Values are the exact strings stored on disk."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    @classmethod
    def values(cls) -> tuple[str, ...]:
        return tuple(s.value for s in cls)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(ts: datetime) -> str:
    """ISO-8601 UTC with microseconds and a trailing Z."""
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    ts = ts.astimezone(timezone.utc)
    # isoformat pads the year to four digits; strftime("%Y") does not on every platform.
    return ts.isoformat(timespec="microseconds").replace("+00:00", "Z")


def parse_timestamp(raw: str) -> datetime:
    """
    Parse an ISO-8601 timestamp into an aware UTC datetime.

    Accepts a "Z" suffix, numeric offsets and fractions longer than
    microseconds (extra digits are truncated). Naive values are taken as UTC.
    Raises ValueError on anything else.
    """
    text = raw.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION_RE.sub(lambda m: "." + m.group(1)[:6].ljust(6, "0"), text, count=1)
    ts = datetime.fromisoformat(text)
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc)


@dataclass(slots=True)
class Task:
    id: int
    description: str
    status: TaskStatus
    created_at: datetime
    updated_at: datetime
