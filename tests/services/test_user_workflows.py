"""User Workflows — decode, stamp, persist; update merge semantics; not-found mapping.

Tests:
    - create mints id and timestamps, ignoring client-sent ones
    - update-then-fetch reflects the change; explicit null is rejected
    - delete-then-fetch and double delete → UserNotFoundError
    - QueryError during lookup surfaces as UserNotFoundError
"""

from uuid import uuid4

import pytest

from todo_api.core.errors import QueryError, UserNotFoundError, UserValidationError
from todo_api.services.user_workflows import UserWorkflow

NEW_USER = {"name": "Ada", "email": "ada@example.com", "password": "pw"}


async def test_create_user_mints_identity(user_workflow):
    user = await user_workflow.create_user(
        {**NEW_USER, "id": "client-chosen", "actor_id": "someone"},
    )
    assert user.id != "client-chosen"
    assert user.created_at == user.updated_at
    assert user.name == "Ada"


async def test_create_user_rejects_bad_email(user_workflow):
    with pytest.raises(UserValidationError) as exc_info:
        await user_workflow.create_user({**NEW_USER, "email": "nope"})
    assert exc_info.value.field == "email"


async def test_create_user_rejects_non_object(user_workflow):
    with pytest.raises(UserValidationError):
        await user_workflow.create_user("just a string")


async def test_update_then_fetch(user_workflow):
    user = await user_workflow.create_user(NEW_USER)
    updated = await user_workflow.update_user({"id": user.id, "name": "Ada K."})
    fetched = await user_workflow.get_user_by_id({"id": user.id})
    assert fetched == updated
    assert fetched.name == "Ada K."
    assert fetched.email == "ada@example.com"
    assert fetched.updated_at > user.updated_at


async def test_update_explicit_null_is_rejected(user_workflow):
    user = await user_workflow.create_user(NEW_USER)
    with pytest.raises(UserValidationError):
        await user_workflow.update_user({"id": user.id, "name": None})


async def test_update_unknown_user_not_found(user_workflow):
    with pytest.raises(UserNotFoundError):
        await user_workflow.update_user({"id": str(uuid4()), "name": "X"})


async def test_update_requires_id(user_workflow):
    with pytest.raises(UserValidationError) as exc_info:
        await user_workflow.update_user({"name": "X"})
    assert exc_info.value.field == "id"


async def test_delete_then_fetch_and_double_delete(user_workflow):
    user = await user_workflow.create_user(NEW_USER)
    removed = await user_workflow.delete_user_by_id({"id": user.id})
    assert removed.id == user.id
    with pytest.raises(UserNotFoundError):
        await user_workflow.get_user_by_id({"id": user.id})
    with pytest.raises(UserNotFoundError):
        await user_workflow.delete_user_by_id({"id": user.id})


async def test_get_users_paginated_defaults(user_workflow):
    for i in range(3):
        await user_workflow.create_user({**NEW_USER, "name": f"User {i}"})
    page = await user_workflow.get_users_paginated({})
    assert page.pagination.page == 1
    assert page.pagination.limit == 10
    assert len(page.data) == 3


async def test_get_users_paginated_rejects_limit_over_max(user_workflow):
    with pytest.raises(UserValidationError):
        await user_workflow.get_users_paginated({"limit": 500})


class _FailingRepo:
    async def fetch_by_id(self, user_id):
        raise QueryError("connection lost")


async def test_query_error_on_lookup_becomes_not_found():
    workflow = UserWorkflow(_FailingRepo())
    with pytest.raises(UserNotFoundError) as exc_info:
        await workflow.get_user_by_id({"id": str(uuid4())})
    assert isinstance(exc_info.value.__cause__, QueryError)


async def test_get_all_users(user_workflow):
    for i in range(2):
        await user_workflow.create_user({**NEW_USER, "name": f"User {i}"})
    users = await user_workflow.get_all_users()
    assert {u.name for u in users} == {"User 0", "User 1"}
