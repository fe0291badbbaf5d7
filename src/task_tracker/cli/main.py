# src/task_tracker/cli/main.py

"""
CLI entrypoint.

Each invocation is one stateless cycle: parse -> validate -> execute ->
report -> exit. Command output goes to stdout; errors go to stderr as
"Error: <message>" with exit status 1.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from functools import partial
from typing import TextIO

from ..cli.bootstrap import configure_logging, create_task_store
from ..cli.commands import CommandEmitter, CommandRegistry, RepoFactory, registry
from ..config import Settings, get_settings
from ..errors import TaskTrackerError

logger = logging.getLogger(__name__)


def _writer(stream: TextIO) -> CommandEmitter:
    def _emit(text: str) -> None:
        print(text, file=stream)

    return _emit


def run(
    args: Sequence[str],
    *,
    settings: Settings | None = None,
    repo_factory: RepoFactory | None = None,
    commands: CommandRegistry = registry,
    stdout: TextIO | None = None,
    stderr: TextIO | None = None,
) -> int:
    """Run one command (argv without the program name) and return the exit status."""
    out = stdout if stdout is not None else sys.stdout
    err = stderr if stderr is not None else sys.stderr

    if repo_factory is None:
        resolved = settings if settings is not None else get_settings()
        repo_factory = partial(create_task_store, settings=resolved)

    try:
        return commands.dispatch(args, repo_factory, _writer(out))
    except TaskTrackerError as e:
        logger.debug("Command failed: %s", e, exc_info=True)
        print(f"Error: {e}", file=err)
        return 1
    except Exception as e:
        logger.exception("Unexpected failure running %s", list(args))
        print(f"Error: {e}", file=err)
        return 1


def main() -> None:
    settings = get_settings()
    configure_logging(settings)
    sys.exit(run(sys.argv[1:], settings=settings))


if __name__ == "__main__":
    main()
