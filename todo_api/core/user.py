"""User Entity — a registered person who can own and be assigned tasks.

Invariants:
    - name, email, password: 1-255 chars; email also matches local@domain.tld
    - Email uniqueness is NOT enforced here (nor in the repository)
    - password is part of the record; redaction is the caller's job

Design Decisions:
    - Pagination options for users live here: sort fields are entity-specific
"""

from todo_api.core.domain_types import UserId, UserSortField
from todo_api.core.entity import Entity
from todo_api.core.errors import UserValidationError
from todo_api.core.field_rules import (
    EmailField, NameField, PasswordField, UserIdField,
)
from todo_api.core.pagination import PaginationOptions


class User(Entity):
    """User entity."""

    kind = "User"
    validation_error = UserValidationError

    id: UserIdField
    name: NameField
    email: EmailField
    password: PasswordField

    def update_name(self, name: str) -> "User":
        return self._with_field("name", name)

    def update_email(self, email: str) -> "User":
        return self._with_field("email", email)

    def update_password(self, password: str) -> "User":
        return self._with_field("password", password)

    def has_id(self, user_id: UserId) -> bool:
        return self.id == user_id

    def has_email(self, email: str) -> bool:
        """Case-insensitive email comparison."""
        return self.email.lower() == email.lower()


class UserPageOptions(PaginationOptions):
    sort_by: UserSortField | None = None
