# src/task_tracker/cli/commands.py

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from ..core.ports import TaskRepo
from ..errors import UsageError
from ..tasks.task_models import TaskStatus

PROG = "task-tracker"

CommandEmitter = Callable[[str], None]
Operands = tuple[Any, ...]
OperandParser = Callable[[list[str]], Operands]
CommandHandler = Callable[[TaskRepo, Operands, CommandEmitter], None]
RepoFactory = Callable[[], TaskRepo]

# Optional sign followed by ASCII digits.
_ID_RE = re.compile(r"[+-]?[0-9]+")

# Ids are signed 64-bit integers.
ID_MIN = -(2**63)
ID_MAX = 2**63 - 1

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Command:
    name: str
    synopsis: str
    parse: OperandParser
    handler: CommandHandler


class CommandRegistry:
    """
    Command registry for the task-tracker CLI.

    Dispatch is split in two phases: operands are parsed and validated first,
    and the repository is only requested from the factory once they are valid.
    A usage error therefore never touches the task file.
    """

    def __init__(self) -> None:
        self._commands: dict[str, Command] = {}

    def register(
        self,
        name: str,
        parse: OperandParser,
        handler: CommandHandler,
        synopsis: str,
    ) -> None:
        self._commands[name] = Command(name=name, synopsis=synopsis, parse=parse, handler=handler)

    def get(self, name: str) -> Command | None:
        return self._commands.get(name)

    def build_usage(self) -> str:
        lines = [f"Usage: {PROG} <command> [args]", "Commands:"]
        for cmd in self._commands.values():
            lines.append(f"  {cmd.synopsis}")
        return "\n".join(lines)

    def dispatch(
        self,
        args: Sequence[str],
        repo_factory: RepoFactory,
        emit: CommandEmitter,
    ) -> int:
        """
        Run one command given argv without the program name.

        Unknown or missing command -> usage text through emit, returns 1.
        Validation and repository errors propagate as TaskTrackerError.
        Returns 0 on success.
        """
        if not args:
            emit(self.build_usage())
            return 1

        name, operands = args[0], list(args[1:])
        cmd = self.get(name)
        if cmd is None:
            logger.debug("Unknown command %r", name)
            emit(self.build_usage())
            return 1

        parsed = cmd.parse(operands)
        repo = repo_factory()
        logger.debug("Running %s with %r", name, parsed)
        cmd.handler(repo, parsed, emit)
        return 0


registry = CommandRegistry()


# ---- operand parsing ----


def parse_id(raw: str) -> int:
    if not _ID_RE.fullmatch(raw):
        raise UsageError("invalid id")
    try:
        value = int(raw)
    except ValueError:
        # More digits than int() will convert.
        raise UsageError("invalid id") from None
    if not ID_MIN <= value <= ID_MAX:
        raise UsageError("invalid id")
    return value


def _expect(operands: list[str], count: int, help_line: str) -> None:
    if len(operands) != count:
        raise UsageError(f"help: {help_line}")


def parse_add(operands: list[str]) -> Operands:
    _expect(operands, 1, f'{PROG} add "task description"')
    return (operands[0],)


def parse_update(operands: list[str]) -> Operands:
    _expect(operands, 2, f'{PROG} update 1 "new task description"')
    return (parse_id(operands[0]), operands[1])


def _id_only(command: str) -> OperandParser:
    def _parse(operands: list[str]) -> Operands:
        _expect(operands, 1, f"{PROG} {command} 1")
        return (parse_id(operands[0]),)

    return _parse


def parse_list(operands: list[str]) -> Operands:
    if not operands:
        return ("",)
    if len(operands) == 1:
        if operands[0] not in TaskStatus.values():
            raise UsageError("invalid status")
        return (operands[0],)
    raise UsageError(
        f"help: {PROG} list\n"
        f"{PROG} list done\n"
        f"{PROG} list todo\n"
        f"{PROG} list in-progress"
    )


# ---- handlers ----


def cmd_add(repo: TaskRepo, operands: Operands, emit: CommandEmitter) -> None:
    (description,) = operands
    task = repo.add(description)
    emit(f"task added successfully (ID: {task.id})")


def cmd_update(repo: TaskRepo, operands: Operands, emit: CommandEmitter) -> None:
    task_id, description = operands
    repo.update(task_id, description)


def cmd_delete(repo: TaskRepo, operands: Operands, emit: CommandEmitter) -> None:
    (task_id,) = operands
    repo.delete(task_id)


def cmd_mark_in_progress(repo: TaskRepo, operands: Operands, emit: CommandEmitter) -> None:
    (task_id,) = operands
    repo.mark_in_progress(task_id)


def cmd_mark_done(repo: TaskRepo, operands: Operands, emit: CommandEmitter) -> None:
    (task_id,) = operands
    repo.mark_done(task_id)


def cmd_list(repo: TaskRepo, operands: Operands, emit: CommandEmitter) -> None:
    (status_filter,) = operands
    for task in repo.list(status_filter):
        emit(f"{task.id} {task.description} {task.status}")


registry.register("add", parse_add, cmd_add, synopsis="add <description>")
registry.register("update", parse_update, cmd_update, synopsis="update <id> <description>")
registry.register("delete", _id_only("delete"), cmd_delete, synopsis="delete <id>")
registry.register(
    "mark-in-progress",
    _id_only("mark-in-progress"),
    cmd_mark_in_progress,
    synopsis="mark-in-progress <id>",
)
registry.register("mark-done", _id_only("mark-done"), cmd_mark_done, synopsis="mark-done <id>")
registry.register("list", parse_list, cmd_list, synopsis="list [status]")
