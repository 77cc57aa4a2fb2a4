"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection
    - fetch_by_id returns None for "no such row"; it raises only on operational failure
    - update and delete_by_id raise NotFoundError for a missing id, never write

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO;
      workflows await them, entities never do
"""

from typing import Protocol

from todo_api.core.domain_types import TaskId, UserId
from todo_api.core.pagination import Page
from todo_api.core.task import Task, TaskPageOptions, TaskSearchParams
from todo_api.core.user import User, UserPageOptions


class UserRepository(Protocol):
    """Contract for user persistence — implemented by shell."""
    async def add(self, user: User) -> User: ...
    async def update(self, user: User) -> User: ...
    async def fetch_by_id(self, user_id: UserId) -> User | None: ...
    async def fetch_all(self) -> list[User]: ...
    async def delete_by_id(self, user_id: UserId) -> User: ...
    async def fetch_paginated(self, options: UserPageOptions) -> Page[User]: ...


class TaskRepository(Protocol):
    """Contract for task persistence — implemented by shell."""
    async def add(self, task: Task) -> Task: ...
    async def update(self, task: Task) -> Task: ...
    async def fetch_by_id(self, task_id: TaskId) -> Task | None: ...
    async def fetch_all(self) -> list[Task]: ...
    async def delete_by_id(self, task_id: TaskId) -> Task: ...
    async def fetch_paginated(self, options: TaskPageOptions) -> Page[Task]: ...
    async def search(self, params: TaskSearchParams) -> Page[Task]: ...
