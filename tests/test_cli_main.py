# tests/test_cli_main.py

from __future__ import annotations

import io
import json
from pathlib import Path

import pytest

from task_tracker.cli import main as cli_main
from task_tracker.config import Settings
from task_tracker.errors import PersistenceError

from .fakes import FakeTaskRepo


def _run(settings: Settings, *args: str) -> tuple[int, str, str]:
    out, err = io.StringIO(), io.StringIO()
    code = cli_main.run(list(args), settings=settings, stdout=out, stderr=err)
    return code, out.getvalue(), err.getvalue()


def test_end_to_end_add_mark_done_list(settings: Settings, tasks_file: Path) -> None:
    code, out, err = _run(settings, "add", "buy milk")
    assert (code, err) == (0, "")
    assert "task added successfully (ID: 1)" in out

    data = json.loads(tasks_file.read_text("utf-8"))
    assert len(data) == 1
    assert data[0]["status"] == "todo"
    assert data[0]["description"] == "buy milk"

    assert _run(settings, "mark-done", "1") == (0, "", "")
    assert _run(settings, "list", "done") == (0, "1 buy milk done\n", "")


def test_state_survives_between_invocations(settings: Settings) -> None:
    _run(settings, "add", "one")
    _run(settings, "add", "two")
    _run(settings, "add", "three")
    _run(settings, "update", "2", "TWO")
    _run(settings, "mark-in-progress", "3")
    _run(settings, "delete", "1")

    code, out, _ = _run(settings, "list")
    assert code == 0
    assert out.splitlines() == ["2 TWO todo", "3 three in-progress"]

    # Count-based ids: the next add reuses id 3.
    _, out, _ = _run(settings, "add", "four")
    assert out == "task added successfully (ID: 3)\n"


def test_invalid_status_reports_error_without_touching_file(
    settings: Settings, tasks_file: Path
) -> None:
    code, out, err = _run(settings, "list", "bogus")
    assert code == 1
    assert out == ""
    assert err == "Error: invalid status\n"
    assert not tasks_file.exists()


def test_add_arity_error_goes_to_stderr(settings: Settings, tasks_file: Path) -> None:
    code, out, err = _run(settings, "add")
    assert code == 1
    assert out == ""
    assert err == 'Error: help: task-tracker add "task description"\n'

    code, _, err = _run(settings, "add", "a", "b")
    assert code == 1
    assert "task-tracker add" in err
    assert not tasks_file.exists()


def test_unknown_command_prints_usage_to_stdout(settings: Settings, tasks_file: Path) -> None:
    code, out, err = _run(settings, "frobnicate")
    assert code == 1
    assert out.startswith("Usage: task-tracker <command> [args]\n")
    assert err == ""
    assert not tasks_file.exists()


def test_missing_id_is_silent_success(settings: Settings) -> None:
    _run(settings, "add", "only")
    assert _run(settings, "mark-done", "99") == (0, "", "")
    assert _run(settings, "list") == (0, "1 only todo\n", "")


def test_corrupt_file_fails_before_running_command(settings: Settings, tasks_file: Path) -> None:
    tasks_file.write_text("{oops", "utf-8")
    code, out, err = _run(settings, "list")
    assert code == 1
    assert out == ""
    assert err.startswith("Error: corrupt task file")
    assert tasks_file.read_text("utf-8") == "{oops"


def test_persistence_error_is_reported() -> None:
    class _BrokenRepo(FakeTaskRepo):
        def add(self, description: str):
            raise PersistenceError("failed to write tasks.json: read-only", "tasks.json")

    out, err = io.StringIO(), io.StringIO()
    code = cli_main.run(["add", "x"], repo_factory=_BrokenRepo, stdout=out, stderr=err)
    assert code == 1
    assert out.getvalue() == ""
    assert err.getvalue() == "Error: failed to write tasks.json: read-only\n"


def test_unexpected_exception_exits_1() -> None:
    def _factory():
        raise RuntimeError("boom")

    err = io.StringIO()
    code = cli_main.run(["list"], repo_factory=_factory, stdout=io.StringIO(), stderr=err)
    assert code == 1
    assert err.getvalue() == "Error: boom\n"


def test_main_exits_with_status(
    monkeypatch: pytest.MonkeyPatch, settings: Settings, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(cli_main, "get_settings", lambda: settings)
    monkeypatch.setattr(cli_main, "configure_logging", lambda s: None)
    monkeypatch.setattr("sys.argv", ["task-tracker", "add", "from main"])

    with pytest.raises(SystemExit) as exc:
        cli_main.main()

    assert exc.value.code == 0
    assert capsys.readouterr().out == "task added successfully (ID: 1)\n"
