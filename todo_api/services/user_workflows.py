"""User Workflows — create, update, delete, get-by-id, get-all, paginate.

Invariants:
    - Every workflow decodes its raw input first; nothing reaches the repository
      without passing a DTO and the User entity schema
    - create mints id and both timestamps; the client never supplies them
    - update is fetch → serialize → merge provided fields → refresh updated_at
      → full User.create → repo.update
    - "Not there" and "lookup failed" both surface as UserNotFoundError on
      update and get-by-id

Design Decisions:
    - Workflow class holds the repository: constructed once in the composition
      root (main.py lifespan), no container
    - Passwords never logged: log lines carry ids only
"""

import logging
from typing import Any

from todo_api.core.domain_types import UserId, new_user_id, utc_now
from todo_api.core.errors import QueryError, UserNotFoundError, UserValidationError
from todo_api.core.pagination import Page
from todo_api.core.repository_protocols import UserRepository
from todo_api.core.user import User, UserPageOptions
from todo_api.schemas.user import CreateUserDto, UpdateUserDto, UserIdDto
from todo_api.services.decode import decode

logger = logging.getLogger(__name__)


class UserWorkflow:
    """Application operations on users."""

    def __init__(self, repo: UserRepository):
        self.repo = repo

    async def create_user(self, payload: Any) -> User:
        dto = decode(
            CreateUserDto, payload, UserValidationError, "Invalid create user input",
        )
        now = utc_now()
        user = User.create({
            **dto.model_dump(),
            "id": new_user_id(),
            "created_at": now,
            "updated_at": now,
        })
        created = await self.repo.add(user)
        logger.info(
            "User created", extra={"entity": "User", "entity_id": created.id},
        )
        return created

    async def update_user(self, payload: Any) -> User:
        dto = decode(
            UpdateUserDto, payload, UserValidationError, "Invalid update user input",
        )
        existing = await self._require(dto.id)
        changes = dto.model_dump(exclude_unset=True, exclude={"id"})
        updated = User.create({
            **existing.serialize(), **changes, "updated_at": utc_now(),
        })
        saved = await self.repo.update(updated)
        logger.info(
            "User updated",
            extra={"entity": "User", "entity_id": saved.id, "operation": "update"},
        )
        return saved

    async def delete_user_by_id(self, payload: Any) -> User:
        dto = decode(UserIdDto, payload, UserValidationError, "Invalid user id")
        removed = await self.repo.delete_by_id(dto.id)
        logger.info(
            "User removed",
            extra={"entity": "User", "entity_id": removed.id, "operation": "remove"},
        )
        return removed

    async def get_user_by_id(self, payload: Any) -> User:
        dto = decode(UserIdDto, payload, UserValidationError, "Invalid user id")
        return await self._require(dto.id)

    async def get_all_users(self) -> list[User]:
        return await self.repo.fetch_all()

    async def get_users_paginated(self, payload: Any) -> Page[User]:
        options = decode(
            UserPageOptions, payload, UserValidationError, "Invalid pagination params",
        )
        return await self.repo.fetch_paginated(options)

    async def _require(self, user_id: UserId) -> User:
        try:
            user = await self.repo.fetch_by_id(user_id)
        except QueryError as e:
            raise UserNotFoundError(user_id) from e
        if user is None:
            raise UserNotFoundError(user_id)
        return user
