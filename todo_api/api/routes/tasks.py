"""Task Procedures — RPC-style endpoints under /api/v1/task, all bearer-authenticated.

Invariants:
    - The actor is attached to every payload (actor_id, actor_role)
    - No ownership rule: any authenticated actor may act on any task
"""

from typing import Any

from fastapi import APIRouter, Body, Depends

from todo_api.api.auth import Actor, get_actor, with_actor
from todo_api.api.dependencies import get_task_workflow
from todo_api.core.pagination import Page
from todo_api.core.task import Task
from todo_api.schemas.common import RemoveResponse
from todo_api.schemas.task import (
    TaskListResponse, TaskPageResponse, TaskResponse, TaskView,
)
from todo_api.services.task_workflows import TaskWorkflow

router = APIRouter(prefix="/api/v1/task", tags=["task"])


def _page_response(page: Page[Task]) -> TaskPageResponse:
    return TaskPageResponse(
        data=[TaskView.model_validate(t) for t in page.data],
        pagination=page.pagination,
    )


@router.post("/create", response_model=TaskResponse)
async def create_task(
    payload: Any = Body(default=None),
    actor: Actor = Depends(get_actor),
    workflow: TaskWorkflow = Depends(get_task_workflow),
):
    task = await workflow.create_task(with_actor(payload, actor))
    return TaskResponse(data=TaskView.model_validate(task))


@router.post("/update", response_model=TaskResponse)
async def update_task(
    payload: Any = Body(default=None),
    actor: Actor = Depends(get_actor),
    workflow: TaskWorkflow = Depends(get_task_workflow),
):
    task = await workflow.update_task(with_actor(payload, actor))
    return TaskResponse(data=TaskView.model_validate(task))


@router.post("/remove", response_model=RemoveResponse)
async def remove_task(
    payload: Any = Body(default=None),
    actor: Actor = Depends(get_actor),
    workflow: TaskWorkflow = Depends(get_task_workflow),
):
    task = await workflow.delete_task_by_id(with_actor(payload, actor))
    return RemoveResponse(id=task.id)


@router.post("/fetch", response_model=TaskPageResponse)
async def fetch_tasks(
    payload: Any = Body(default=None),
    actor: Actor = Depends(get_actor),
    workflow: TaskWorkflow = Depends(get_task_workflow),
):
    """One page of tasks, newest first unless sort options say otherwise."""
    page = await workflow.get_tasks_paginated(with_actor(payload or {}, actor))
    return _page_response(page)


@router.post("/get-by-id", response_model=TaskResponse)
async def get_task_by_id(
    payload: Any = Body(default=None),
    actor: Actor = Depends(get_actor),
    workflow: TaskWorkflow = Depends(get_task_workflow),
):
    task = await workflow.get_task_by_id(with_actor(payload, actor))
    return TaskResponse(data=TaskView.model_validate(task))


@router.post("/get-all", response_model=TaskListResponse)
async def get_all_tasks(
    actor: Actor = Depends(get_actor),
    workflow: TaskWorkflow = Depends(get_task_workflow),
):
    tasks = await workflow.get_all_tasks()
    return TaskListResponse(data=[TaskView.model_validate(t) for t in tasks])


@router.post("/search", response_model=TaskPageResponse)
async def search_tasks(
    payload: Any = Body(default=None),
    actor: Actor = Depends(get_actor),
    workflow: TaskWorkflow = Depends(get_task_workflow),
):
    """Filtered page of tasks: text, status, assignee, creation-date range."""
    page = await workflow.search_tasks(with_actor(payload or {}, actor))
    return _page_response(page)
