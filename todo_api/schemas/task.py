"""Task Schemas — request DTOs and response envelopes for task procedures.

Invariants:
    - CreateTaskDto: title and assignee_id required; description optional;
      status defaults to TODO
    - UpdateTaskDto: id required, every other field optional
    - Every task field is safe to expose: TaskView mirrors the entity
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from todo_api.core.domain_types import TaskStatus
from todo_api.core.field_rules import (
    DescriptionField, TaskIdField, TitleField, UserIdField,
)
from todo_api.core.pagination import PaginationMeta


class _Dto(BaseModel):
    model_config = ConfigDict(extra="ignore")


class CreateTaskDto(_Dto):
    title: TitleField
    description: DescriptionField | None = None
    status: TaskStatus = TaskStatus.TODO
    assignee_id: UserIdField


class UpdateTaskDto(_Dto):
    id: TaskIdField
    title: TitleField | None = None
    description: DescriptionField | None = None
    status: TaskStatus | None = None
    assignee_id: UserIdField | None = None


class TaskIdDto(_Dto):
    id: TaskIdField


class TaskView(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str | None
    status: TaskStatus
    assignee_id: str
    created_at: datetime
    updated_at: datetime


class TaskResponse(BaseModel):
    success: bool = True
    data: TaskView


class TaskListResponse(BaseModel):
    success: bool = True
    data: list[TaskView]


class TaskPageResponse(BaseModel):
    data: list[TaskView]
    pagination: PaginationMeta
