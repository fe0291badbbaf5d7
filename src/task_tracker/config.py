# src/task_tracker/config.py

"""Settings loaded from environment variables (+ optional .env).

With nothing set, the defaults reproduce the plain CLI behavior: tasks live in
./tasks.json and only warnings reach the console.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

ENV_PREFIX = "TASK_TRACKER"

DEFAULT_TASKS_FILE = Path("tasks.json")
DEFAULT_LOG_LEVEL = "WARNING"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_optional_path(name: str) -> Optional[Path]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- Storage ----
    tasks_file: Path

    # ---- Logging ----
    log_level: str
    log_dir: Optional[Path]

    @staticmethod
    def from_env() -> "Settings":
        tasks_file = _env_path(_k("FILE"), DEFAULT_TASKS_FILE)
        log_level = _env(_k("LOG_LEVEL"), DEFAULT_LOG_LEVEL).strip().upper() or DEFAULT_LOG_LEVEL
        log_dir = _env_optional_path(_k("LOG_DIR"))

        return Settings(
            tasks_file=tasks_file,
            log_level=log_level,
            log_dir=log_dir,
        )


_SETTINGS: Settings | None = None


def get_settings(*, reload: bool = False) -> Settings:
    """
    Return the process-wide Settings, reading .env and the environment once.

    The .env is looked up from the working directory upwards and never
    overrides variables already set in the environment.
    """
    global _SETTINGS
    if _SETTINGS is None or reload:
        load_dotenv(find_dotenv(usecwd=True), override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS
