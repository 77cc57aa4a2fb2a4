"""User Schemas — request DTOs and redacted response views for user procedures.

Invariants:
    - CreateUserDto: name, email, password, all required
    - UpdateUserDto: id required; name/email/password optional, and an explicit
      null counts as provided (the entity then rejects it)
    - UserView omits password

Design Decisions:
    - Field rules reused from core/field_rules.py: DTO and entity reject the same
      inputs with the same messages
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict

from todo_api.core.field_rules import (
    EmailField, NameField, PasswordField, UserIdField,
)
from todo_api.core.pagination import PaginationMeta


class _Dto(BaseModel):
    model_config = ConfigDict(extra="ignore")


class CreateUserDto(_Dto):
    name: NameField
    email: EmailField
    password: PasswordField


class UpdateUserDto(_Dto):
    id: UserIdField
    name: NameField | None = None
    email: EmailField | None = None
    password: PasswordField | None = None


class UserIdDto(_Dto):
    id: UserIdField


class UserView(BaseModel):
    """Public projection of a User."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    email: str
    created_at: datetime
    updated_at: datetime


class UserResponse(BaseModel):
    success: bool = True
    data: UserView
    token: str | None = None


class UserPageResponse(BaseModel):
    data: list[UserView]
    pagination: PaginationMeta


class UserListResponse(BaseModel):
    success: bool = True
    data: list[UserView]
