from __future__ import annotations

from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from taskboard.binding import TaskBoard
from taskboard.errors import InvalidStateError, NotFoundError, TaskboardError, ValidationError
from taskboard.models.task import Priority, Task
from taskboard.observability import configure_uvicorn_logging, get_json_logger, get_metrics


class DraftRequest(BaseModel):
    title: str | None = None
    description: str | None = None
    priority: Priority | None = None


def _status_for(exc: TaskboardError) -> int:
    if isinstance(exc, ValidationError):
        return 422
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, InvalidStateError):
        return 409
    return 500


def _serialize_task(task: Task) -> dict[str, Any]:
    return task.model_dump(mode="json")


def create_app(board: TaskBoard) -> FastAPI:
    app = FastAPI(title="taskboard")
    configure_uvicorn_logging()
    logger = get_json_logger("taskboard.gateway")
    metrics = get_metrics()

    @app.on_event("shutdown")
    async def _on_shutdown() -> None:
        board.close()
        logger.info("gateway shutdown", extra={"event": "gateway_shutdown", "service": "gateway"})

    @app.exception_handler(TaskboardError)
    async def _taskboard_error(request: Request, exc: TaskboardError) -> JSONResponse:
        status = _status_for(exc)
        body: dict[str, Any] = {"detail": str(exc), "error": type(exc).__name__}
        field = getattr(exc, "field", None)
        if field:
            body["field"] = field
        logger.info(
            "request rejected",
            extra={
                "event": "gateway_error",
                "service": "gateway",
                "path": request.url.path,
                "status_code": status,
                "metadata": body,
            },
        )
        metrics.increment("gateway_errors", {"error": body["error"]})
        return JSONResponse(status_code=status, content=body)

    def _with_warnings(payload: dict[str, Any]) -> dict[str, Any]:
        warnings = board.take_warnings()
        if warnings:
            payload["warnings"] = warnings
        return payload

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.get("/tasks")
    async def list_tasks() -> dict[str, Any]:
        return {"tasks": [_serialize_task(t) for t in board.tasks()]}

    @app.get("/board")
    async def snapshot() -> dict[str, Any]:
        return board.snapshot().model_dump(mode="json")

    @app.put("/draft")
    async def update_draft(draft: DraftRequest) -> dict[str, Any]:
        if draft.title is not None:
            board.set_title(draft.title)
        if draft.description is not None:
            board.set_description(draft.description)
        if draft.priority is not None:
            board.set_priority(draft.priority)
        return board.snapshot().model_dump(mode="json")

    @app.post("/tasks/save")
    async def add_or_save() -> dict[str, Any]:
        mode = "save" if board.session.is_editing else "add"
        task = board.add_or_save()
        metrics.increment("gateway_saves", {"mode": mode})
        return _with_warnings({"task": _serialize_task(task), "mode": mode})

    @app.post("/tasks/{task_id}/edit")
    async def begin_edit(task_id: int) -> dict[str, Any]:
        board.begin_edit(task_id)
        return board.snapshot().model_dump(mode="json")

    @app.post("/tasks/{task_id}/toggle")
    async def toggle(task_id: int) -> dict[str, Any]:
        task = board.toggle_complete(task_id)
        return _with_warnings({"task": _serialize_task(task)})

    @app.delete("/tasks/{task_id}")
    async def delete(task_id: int) -> dict[str, Any]:
        ok = board.delete_task(task_id)
        return _with_warnings({"ok": ok})

    return app


__all__ = ["create_app"]
