from __future__ import annotations

import json
from pathlib import Path

import pytest

from taskboard.cli import main


@pytest.fixture()
def store_args(tmp_path: Path) -> list[str]:
    return ["--store", f"file://{tmp_path}"]


def _ids(tmp_path: Path) -> dict[str, int]:
    data = json.loads((tmp_path / "tasks.json").read_text())
    return {r["title"]: r["id"] for r in data}


def test_add_and_list(store_args: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    main([*store_args, "add", "Buy milk", "2%", "--priority", "Medium"])
    main([*store_args, "add", "Pay rent", "rent", "--priority", "High"])
    capsys.readouterr()

    main([*store_args, "list"])
    out = capsys.readouterr().out
    lines = [line for line in out.splitlines() if line.startswith("[")]
    assert "Pay rent (High)" in lines[0]
    assert "Buy milk (Medium)" in lines[1]


def test_list_json(store_args: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    main([*store_args, "add", "a", "b"])
    capsys.readouterr()
    main([*store_args, "list", "--json"])
    data = json.loads(capsys.readouterr().out)
    assert data[0]["title"] == "a"
    assert data[0]["priority"] == "Low"


def test_empty_list(store_args: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    main(store_args)
    assert "No tasks." in capsys.readouterr().out


def test_edit_toggle_delete(
    store_args: list[str], tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    main([*store_args, "add", "Buy milk", "2%", "--priority", "Medium"])
    tid = _ids(tmp_path)["Buy milk"]

    main([*store_args, "edit", str(tid), "--priority", "Low"])
    main([*store_args, "toggle", str(tid)])
    record = json.loads((tmp_path / "tasks.json").read_text())[0]
    assert record["priority"] == "Low"
    assert record["completed"] is True
    assert record["title"] == "Buy milk"

    main([*store_args, "add", "Pay rent", "rent"])
    main([*store_args, "delete", str(tid)])
    main([*store_args, "delete", str(tid)])
    out = capsys.readouterr().out
    assert f"Task {tid} deleted." in out
    assert "nothing to delete" in out
    assert list(_ids(tmp_path)) == ["Pay rent"]


def test_deleting_last_task_is_not_persisted(
    store_args: list[str], tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    main([*store_args, "add", "Only", "one"])
    tid = _ids(tmp_path)["Only"]
    main([*store_args, "delete", str(tid)])
    capsys.readouterr()

    # An empty collection is never written, so the next run still sees the task
    main([*store_args, "list"])
    assert "Only (Low)" in capsys.readouterr().out


def test_validation_error_exits_1(
    store_args: list[str], capsys: pytest.CaptureFixture[str]
) -> None:
    with pytest.raises(SystemExit) as ei:
        main([*store_args, "add", "   ", "x"])
    assert ei.value.code == 1
    assert "error: title must be non-empty" in capsys.readouterr().err


def test_unknown_id_exits_1(store_args: list[str], capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit) as ei:
        main([*store_args, "toggle", "12345"])
    assert ei.value.code == 1
    assert "not found" in capsys.readouterr().err


def test_bad_priority_rejected_by_parser(store_args: list[str]) -> None:
    with pytest.raises(SystemExit) as ei:
        main([*store_args, "add", "a", "b", "--priority", "Urgent"])
    assert ei.value.code == 2


def test_store_write_failure_is_a_warning(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    blocker = tmp_path / "file"
    blocker.write_text("x")
    main(["--store", f"file://{blocker}", "add", "a", "b"])
    captured = capsys.readouterr()
    assert "Added" in captured.out
    assert "warning: tasks not saved" in captured.err
