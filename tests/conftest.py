from __future__ import annotations

import os
from collections.abc import Callable, Generator

import pytest

# Quiet the taskboard loggers before any of them is created
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LOG_FORMAT", "json")

from taskboard.binding import TaskBoard  # noqa: E402
from taskboard.observability import get_json_logger, reset_metrics  # noqa: E402
from taskboard.repository import TaskRepository  # noqa: E402
from taskboard.store import InMemoryKeyValueStore, TaskStoreAdapter  # noqa: E402

from tests.helpers.clock import Clock  # noqa: E402
from tests.helpers.store import FlakyStore  # noqa: E402

for _name in ("taskboard.store", "taskboard.repository", "taskboard.gateway"):
    get_json_logger(_name)


def _redis_ping(url: str) -> bool:
    try:
        import redis

        return bool(redis.Redis.from_url(url).ping())
    except Exception:
        return False


@pytest.fixture()
def redis_url() -> str:
    url = os.getenv("REDIS_URL", "redis://localhost:6379/0")
    if not _redis_ping(url):
        pytest.skip("Redis not available; set REDIS_URL or start local Redis")
    return url


@pytest.fixture(autouse=True)
def _fresh_metrics() -> Generator[None, None, None]:
    reset_metrics()
    yield
    reset_metrics()


@pytest.fixture()
def clock() -> Clock:
    return Clock()


@pytest.fixture()
def kv() -> InMemoryKeyValueStore:
    return InMemoryKeyValueStore()


@pytest.fixture()
def adapter(kv: InMemoryKeyValueStore) -> TaskStoreAdapter:
    return TaskStoreAdapter(kv)


@pytest.fixture()
def repo(adapter: TaskStoreAdapter, clock: Clock) -> TaskRepository:
    return TaskRepository(adapter, clock=clock).open()


@pytest.fixture()
def flaky() -> FlakyStore:
    return FlakyStore()


@pytest.fixture()
def board(repo: TaskRepository) -> TaskBoard:
    return TaskBoard(repo)


@pytest.fixture()
def reopen(kv: InMemoryKeyValueStore) -> Callable[[], TaskRepository]:
    """Build a second repository over the same store, as after a restart."""

    def _reopen() -> TaskRepository:
        return TaskRepository(TaskStoreAdapter(kv)).open()

    return _reopen
