from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any

from taskboard.binding import TaskBoard
from taskboard.repository import TaskRepository
from taskboard.store import DEFAULT_SLOT, TaskStoreAdapter, open_store

DEFAULT_STORE_URL = "file://.taskboard"
DEFAULT_PORT = 8000


@dataclass(slots=True)
class TaskboardConfig:
    store_url: str
    slot: str
    key_prefix: str
    host: str
    port: int


def _read_port(raw: str | None) -> int:
    value = (raw or "").strip()
    try:
        port = int(value) if value else DEFAULT_PORT
    except ValueError:
        return DEFAULT_PORT
    return port if 0 < port < 65536 else DEFAULT_PORT


def load_config(env: dict[str, str] | None = None) -> TaskboardConfig:
    e: dict[str, Any] = dict(os.environ)
    if env:
        e.update(env)
    return TaskboardConfig(
        store_url=(e.get("TASKBOARD_STORE_URL") or "").strip() or DEFAULT_STORE_URL,
        slot=(e.get("TASKBOARD_SLOT") or "").strip() or DEFAULT_SLOT,
        key_prefix=(e.get("TASKBOARD_KEY_PREFIX") or "").strip() or "taskboard",
        host=(e.get("TASKBOARD_HOST") or "").strip() or "127.0.0.1",
        port=_read_port(e.get("TASKBOARD_PORT")),
    )


def build_board(config: TaskboardConfig | None = None) -> TaskBoard:
    cfg = config or load_config()
    store = open_store(cfg.store_url, key_prefix=cfg.key_prefix)
    adapter = TaskStoreAdapter(store, slot=cfg.slot)
    return TaskBoard(TaskRepository(adapter))


__all__ = ["DEFAULT_PORT", "DEFAULT_STORE_URL", "TaskboardConfig", "build_board", "load_config"]
