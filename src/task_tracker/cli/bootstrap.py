# src/task_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root": it turns Settings into concrete
objects (logging, the JSON task store) for one invocation.
"""

from __future__ import annotations

import logging

from ..config import Settings, get_settings
from ..core.ports import TaskRepo
from ..logging_setup import resolve_level, setup_logging
from ..tasks.task_store import JsonTaskStore

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    setup_logging(
        console_level=resolve_level(settings.log_level),
        log_dir=settings.log_dir,
    )


def create_task_store(*, settings: Settings | None = None) -> TaskRepo:
    """
    Build the file-backed repository for the configured path.

    Keeping settings injectable lets tests point the store at a temp file.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()
    logger.debug("Opening task file %s", settings.tasks_file)
    return JsonTaskStore(settings.tasks_file)
