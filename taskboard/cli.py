from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from taskboard.binding import TaskBoard
from taskboard.config import TaskboardConfig, build_board, load_config
from taskboard.errors import TaskboardError
from taskboard.models.task import Priority, Task

PRIORITY_CHOICES = [p.value for p in Priority]


def format_task(task: Task) -> str:
    mark = "x" if task.completed else " "
    return f"[{mark}] {task.id}  {task.title} ({task.priority.value}) - {task.description}"


def _print_tasks(board: TaskBoard, as_json: bool) -> None:
    tasks = board.tasks()
    if as_json:
        print(json.dumps([t.model_dump(mode="json") for t in tasks], indent=2))
        return
    if not tasks:
        print("No tasks.")
        return
    for task in tasks:
        print(format_task(task))


def _flush_warnings(board: TaskBoard) -> None:
    for warning in board.take_warnings():
        sys.stderr.write(f"warning: {warning}\n")


def _cmd_add(board: TaskBoard, args: Any) -> None:
    board.set_title(args.title)
    board.set_description(args.description)
    board.set_priority(args.priority)
    task = board.add_or_save()
    print(f"Added {format_task(task)}")


def _cmd_edit(board: TaskBoard, args: Any) -> None:
    board.begin_edit(args.id)
    if args.title is not None:
        board.set_title(args.title)
    if args.description is not None:
        board.set_description(args.description)
    if args.priority is not None:
        board.set_priority(args.priority)
    task = board.add_or_save()
    print(f"Saved {format_task(task)}")


def _cmd_toggle(board: TaskBoard, args: Any) -> None:
    task = board.toggle_complete(args.id)
    state = "completed" if task.completed else "reopened"
    print(f"Task {task.id} {state}.")


def _cmd_delete(board: TaskBoard, args: Any) -> None:
    if board.delete_task(args.id):
        print(f"Task {args.id} deleted.")
    else:
        print(f"Task {args.id} not present; nothing to delete.")


def _cmd_serve(config: TaskboardConfig, args: Any) -> None:
    # Defer import to keep the CLI lightweight for one-shot commands
    import uvicorn

    from taskboard.gateway.app import create_app

    host = args.host or config.host
    port = args.port or config.port
    uvicorn.run(create_app(build_board(config)), host=host, port=port, log_config=None)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser("taskboard")
    parser.add_argument("--store", help="Store URL (overrides TASKBOARD_STORE_URL)")
    parser.add_argument("--slot", help="Store slot name (overrides TASKBOARD_SLOT)")
    sub = parser.add_subparsers(dest="cmd")

    p_list = sub.add_parser("list", help="Show tasks, highest priority first")
    p_list.add_argument("--json", action="store_true")

    p_add = sub.add_parser("add", help="Add a task")
    p_add.add_argument("title")
    p_add.add_argument("description")
    p_add.add_argument("--priority", choices=PRIORITY_CHOICES, default=Priority.LOW.value)

    p_edit = sub.add_parser("edit", help="Edit a task's title, description or priority")
    p_edit.add_argument("id", type=int)
    p_edit.add_argument("--title")
    p_edit.add_argument("--description")
    p_edit.add_argument("--priority", choices=PRIORITY_CHOICES)

    p_toggle = sub.add_parser("toggle", help="Flip a task between done and not done")
    p_toggle.add_argument("id", type=int)

    p_delete = sub.add_parser("delete", help="Delete a task (no-op when absent)")
    p_delete.add_argument("id", type=int)

    p_serve = sub.add_parser("serve", help="Serve the HTTP API")
    p_serve.add_argument("--host")
    p_serve.add_argument("--port", type=int)
    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    overrides: dict[str, str] = {}
    if args.store:
        overrides["TASKBOARD_STORE_URL"] = args.store
    if args.slot:
        overrides["TASKBOARD_SLOT"] = args.slot
    config = load_config(overrides)
    cmd = str(getattr(args, "cmd", None) or "list")

    if cmd == "serve":
        _cmd_serve(config, args)
        return

    handlers = {
        "add": _cmd_add,
        "edit": _cmd_edit,
        "toggle": _cmd_toggle,
        "delete": _cmd_delete,
    }
    board = build_board(config)
    try:
        if cmd == "list":
            _print_tasks(board, bool(getattr(args, "json", False)))
        else:
            handlers[cmd](board, args)
    except TaskboardError as exc:
        sys.stderr.write(f"error: {exc}\n")
        raise SystemExit(1) from exc
    finally:
        _flush_warnings(board)
        board.close()


if __name__ == "__main__":
    main()
