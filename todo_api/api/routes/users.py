"""User Procedures — RPC-style endpoints under /api/v1/user.

Invariants:
    - create is public and returns an unsigned bearer token for the new user
    - Every other procedure requires a bearer token; the actor is attached to the
      payload before the workflow decodes it
    - Responses are built from UserView: password never leaves the server

Design Decisions:
    - POST for every procedure, body passed through raw: the workflow owns
      decoding so DTO failures surface as UserValidationError (400)
"""

from typing import Any

from fastapi import APIRouter, Body, Depends

from todo_api.api.auth import Actor, generate_token, get_actor, with_actor
from todo_api.api.dependencies import get_user_workflow
from todo_api.schemas.common import RemoveResponse
from todo_api.schemas.user import (
    UserListResponse, UserPageResponse, UserResponse, UserView,
)
from todo_api.services.user_workflows import UserWorkflow

router = APIRouter(prefix="/api/v1/user", tags=["user"])


@router.post("/create", response_model=UserResponse)
async def create_user(
    payload: Any = Body(default=None),
    workflow: UserWorkflow = Depends(get_user_workflow),
):
    """Register a user and issue their token."""
    user = await workflow.create_user(payload)
    return UserResponse(
        data=UserView.model_validate(user),
        token=generate_token(user.id, user.email),
    )


@router.post("/update", response_model=UserResponse, response_model_exclude_none=True)
async def update_user(
    payload: Any = Body(default=None),
    actor: Actor = Depends(get_actor),
    workflow: UserWorkflow = Depends(get_user_workflow),
):
    user = await workflow.update_user(with_actor(payload, actor))
    return UserResponse(data=UserView.model_validate(user))


@router.post("/fetch", response_model=UserPageResponse)
async def fetch_users(
    payload: Any = Body(default=None),
    actor: Actor = Depends(get_actor),
    workflow: UserWorkflow = Depends(get_user_workflow),
):
    """One page of users."""
    page = await workflow.get_users_paginated(with_actor(payload or {}, actor))
    return UserPageResponse(
        data=[UserView.model_validate(u) for u in page.data],
        pagination=page.pagination,
    )


@router.post("/get-by-id", response_model=UserResponse, response_model_exclude_none=True)
async def get_user_by_id(
    payload: Any = Body(default=None),
    actor: Actor = Depends(get_actor),
    workflow: UserWorkflow = Depends(get_user_workflow),
):
    user = await workflow.get_user_by_id(with_actor(payload, actor))
    return UserResponse(data=UserView.model_validate(user))


@router.post("/get-all", response_model=UserListResponse)
async def get_all_users(
    actor: Actor = Depends(get_actor),
    workflow: UserWorkflow = Depends(get_user_workflow),
):
    users = await workflow.get_all_users()
    return UserListResponse(data=[UserView.model_validate(u) for u in users])


@router.post("/remove", response_model=RemoveResponse)
async def remove_user(
    payload: Any = Body(default=None),
    actor: Actor = Depends(get_actor),
    workflow: UserWorkflow = Depends(get_user_workflow),
):
    user = await workflow.delete_user_by_id(with_actor(payload, actor))
    return RemoveResponse(id=user.id)
