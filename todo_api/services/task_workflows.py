"""Task Workflows — create, update, delete, get-by-id, get-all, paginate, search.

Invariants:
    - Same decode-first discipline as user workflows
    - Search params reject created_from > created_to before any query runs
    - assignee_id must be well-formed; whether that user exists is not checked
"""

import logging
from typing import Any

from todo_api.core.domain_types import TaskId, new_task_id, utc_now
from todo_api.core.errors import QueryError, TaskNotFoundError, TaskValidationError
from todo_api.core.pagination import Page
from todo_api.core.repository_protocols import TaskRepository
from todo_api.core.task import Task, TaskPageOptions, TaskSearchParams
from todo_api.schemas.task import CreateTaskDto, TaskIdDto, UpdateTaskDto
from todo_api.services.decode import decode

logger = logging.getLogger(__name__)


class TaskWorkflow:
    """Application operations on tasks."""

    def __init__(self, repo: TaskRepository):
        self.repo = repo

    async def create_task(self, payload: Any) -> Task:
        dto = decode(
            CreateTaskDto, payload, TaskValidationError, "Invalid create task input",
        )
        now = utc_now()
        task = Task.create({
            **dto.model_dump(),
            "id": new_task_id(),
            "created_at": now,
            "updated_at": now,
        })
        created = await self.repo.add(task)
        logger.info(
            "Task created",
            extra={
                "entity": "Task", "entity_id": created.id,
                "actor_id": _actor_id(payload),
            },
        )
        return created

    async def update_task(self, payload: Any) -> Task:
        dto = decode(
            UpdateTaskDto, payload, TaskValidationError, "Invalid update task input",
        )
        existing = await self._require(dto.id)
        changes = dto.model_dump(exclude_unset=True, exclude={"id"})
        updated = Task.create({
            **existing.serialize(), **changes, "updated_at": utc_now(),
        })
        saved = await self.repo.update(updated)
        logger.info(
            "Task updated",
            extra={
                "entity": "Task", "entity_id": saved.id, "operation": "update",
                "actor_id": _actor_id(payload),
            },
        )
        return saved

    async def delete_task_by_id(self, payload: Any) -> Task:
        dto = decode(TaskIdDto, payload, TaskValidationError, "Invalid task id")
        removed = await self.repo.delete_by_id(dto.id)
        logger.info(
            "Task removed",
            extra={
                "entity": "Task", "entity_id": removed.id, "operation": "remove",
                "actor_id": _actor_id(payload),
            },
        )
        return removed

    async def get_task_by_id(self, payload: Any) -> Task:
        dto = decode(TaskIdDto, payload, TaskValidationError, "Invalid task id")
        return await self._require(dto.id)

    async def get_all_tasks(self) -> list[Task]:
        return await self.repo.fetch_all()

    async def get_tasks_paginated(self, payload: Any) -> Page[Task]:
        options = decode(
            TaskPageOptions, payload, TaskValidationError, "Invalid pagination params",
        )
        return await self.repo.fetch_paginated(options)

    async def search_tasks(self, payload: Any) -> Page[Task]:
        params = decode(
            TaskSearchParams, payload, TaskValidationError, "Invalid search params",
        )
        return await self.repo.search(params)

    async def _require(self, task_id: TaskId) -> Task:
        try:
            task = await self.repo.fetch_by_id(task_id)
        except QueryError as e:
            raise TaskNotFoundError(task_id) from e
        if task is None:
            raise TaskNotFoundError(task_id)
        return task


def _actor_id(payload: Any) -> str | None:
    return payload.get("actor_id") if isinstance(payload, dict) else None
