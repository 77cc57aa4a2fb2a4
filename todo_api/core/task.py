"""Task Entity — a unit of work with a status and exactly one assignee.

Invariants:
    - title: 1-255 chars; description: absent (None) or 50-1000 chars
    - status is one of TODO / IN_PROGRESS / DONE, any transition allowed
    - assignee_id is a well-formed UserId; existence of that user is NOT checked
    - Search bounds: created_from <= created_to whenever both are present

Design Decisions:
    - description None is a legal state distinct from a validation failure:
      update_description(None) clears it
    - TaskSearchParams accepts a single status or a list; both become a filter set
"""

from pydantic import ValidationInfo, field_validator

from todo_api.core.domain_types import TaskStatus, TaskSortField, UserId
from todo_api.core.entity import Entity
from todo_api.core.errors import TaskValidationError
from todo_api.core.field_rules import (
    DescriptionField, TaskIdField, TimestampField, TitleField, UserIdField,
)
from todo_api.core.pagination import PaginationOptions


class Task(Entity):
    """Task entity."""

    kind = "Task"
    validation_error = TaskValidationError

    id: TaskIdField
    title: TitleField
    description: DescriptionField | None = None
    status: TaskStatus
    assignee_id: UserIdField

    def update_title(self, title: str) -> "Task":
        return self._with_field("title", title)

    def update_description(self, description: str | None) -> "Task":
        return self._with_field("description", description)

    def update_status(self, status: TaskStatus | str) -> "Task":
        return self._with_field("status", status)

    def update_assignee(self, assignee_id: UserId | str) -> "Task":
        return self._with_field("assignee_id", assignee_id)

    def is_assigned_to(self, user_id: UserId) -> bool:
        return self.assignee_id == user_id.lower()

    def is_completed(self) -> bool:
        return self.status == TaskStatus.DONE


class TaskPageOptions(PaginationOptions):
    sort_by: TaskSortField | None = None


class TaskSearchParams(TaskPageOptions):
    """Paginated search: every present filter is AND-combined."""

    status: TaskStatus | list[TaskStatus] | None = None
    assignee_id: UserIdField | None = None
    text: str | None = None
    created_from: TimestampField | None = None
    created_to: TimestampField | None = None

    @field_validator("created_to")
    @classmethod
    def _check_date_range(cls, created_to, info: ValidationInfo):
        # created_from is absent from info.data when it failed its own rules
        created_from = info.data.get("created_from")
        if (
            created_from is not None
            and created_to is not None
            and created_from > created_to
        ):
            raise ValueError("created_to must not be earlier than created_from")
        return created_to

    def statuses(self) -> list[TaskStatus]:
        """Status filter as a list; empty means unconstrained."""
        if self.status is None:
            return []
        if isinstance(self.status, list):
            return self.status
        return [self.status]
