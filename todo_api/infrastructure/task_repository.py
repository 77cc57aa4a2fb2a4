"""Task Repository — SQLAlchemy implementation of core.repository_protocols.TaskRepository.

Invariants:
    - search ANDs every present filter: text (title OR description), status set,
      assignee, inclusive creation-date range
    - Absent filters add no constraint; no filters at all behaves like fetch_paginated

Design Decisions:
    - Filters built by infrastructure/query_builders.py; this module only picks columns
"""

from todo_api.core.errors import TaskMutationError, TaskNotFoundError
from todo_api.core.pagination import Page
from todo_api.core.task import Task, TaskSearchParams
from todo_api.infrastructure.query_builders import (
    build_date_range_filter, build_equals_filter, build_in_filter,
    build_text_search_filter, flatten_conditions,
)
from todo_api.infrastructure.sql_repository import SqlRepository
from todo_api.models.task import TaskModel


class SqlTaskRepository(SqlRepository[Task]):
    model = TaskModel
    entity_cls = Task
    not_found_error = TaskNotFoundError
    mutation_error = TaskMutationError

    async def search(self, params: TaskSearchParams) -> Page[Task]:
        condition = flatten_conditions(
            build_text_search_filter(
                [TaskModel.title, TaskModel.description], params.text,
            ),
            build_in_filter(
                TaskModel.status, [s.value for s in params.statuses()],
            ),
            build_equals_filter(TaskModel.assignee_id, params.assignee_id),
            build_date_range_filter(
                TaskModel.created_at, params.created_from, params.created_to,
            ),
        )
        return await self._paginate(condition, params)
