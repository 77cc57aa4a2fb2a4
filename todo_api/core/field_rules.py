"""Field Rules — declarative per-field validation shared by entities and DTOs.

Invariants:
    - Each rule is defined ONCE here; entity schemas and DTO schemas compose them
    - Identifier rules normalize to lowercase (storage returns lowercase UUIDs)
    - Timestamp rule accepts datetime, ISO-8601 string or epoch number and yields tz-aware UTC
    - make_* functions are the UNTRUSTED constructors: they raise ValidationError
      naming the field and keeping the rejected input

Design Decisions:
    - pydantic Annotated types over hand-written checks: decode (model_validate) and
      encode (model_dump) come for free and stay symmetric
    - Length bounds are inclusive on both ends (1..255, 50..1000)
    - TypeAdapters built once at import: validation on hot paths does not rebuild schemas
"""

from datetime import datetime
from typing import Annotated, Any

from pydantic import AfterValidator, StringConstraints, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from todo_api.core.domain_types import (
    EMAIL_PATTERN, UUID_PATTERN, Email, TaskId, Timestamp, UserId, as_utc,
)
from todo_api.core.errors import ValidationError


NAME_MAX_LENGTH = 255
DESCRIPTION_MIN_LENGTH = 50
DESCRIPTION_MAX_LENGTH = 1000


# ─── Identifiers ─────────────────────────────────────────────────

UserIdField = Annotated[
    UserId,
    StringConstraints(pattern=UUID_PATTERN.pattern, to_lower=True),
]
TaskIdField = Annotated[
    TaskId,
    StringConstraints(pattern=UUID_PATTERN.pattern, to_lower=True),
]


# ─── Scalars ─────────────────────────────────────────────────────

def _bounded(max_length: int, min_length: int = 1) -> StringConstraints:
    return StringConstraints(min_length=min_length, max_length=max_length)


NameField = Annotated[str, _bounded(NAME_MAX_LENGTH)]
PasswordField = Annotated[str, _bounded(NAME_MAX_LENGTH)]
TitleField = Annotated[str, _bounded(NAME_MAX_LENGTH)]
DescriptionField = Annotated[
    str, _bounded(DESCRIPTION_MAX_LENGTH, DESCRIPTION_MIN_LENGTH),
]
EmailField = Annotated[
    Email,
    StringConstraints(
        min_length=1, max_length=NAME_MAX_LENGTH, pattern=EMAIL_PATTERN.pattern,
    ),
]
TimestampField = Annotated[datetime, AfterValidator(as_utc)]


# ─── Untrusted Constructors ──────────────────────────────────────

_USER_ID = TypeAdapter(UserIdField)
_TASK_ID = TypeAdapter(TaskIdField)
_EMAIL = TypeAdapter(EmailField)
_TIMESTAMP = TypeAdapter(TimestampField)


def _make(adapter: TypeAdapter, value: Any, field: str, message: str) -> Any:
    try:
        return adapter.validate_python(value)
    except PydanticValidationError as e:
        error = ValidationError.from_pydantic(message, e, value)
        error.field = field
        raise error from e


def make_user_id(value: Any) -> UserId:
    """Validate untrusted input as a UserId."""
    return _make(_USER_ID, value, "id", f"Expected valid UUID, got: {value!r}")


def make_task_id(value: Any) -> TaskId:
    """Validate untrusted input as a TaskId."""
    return _make(_TASK_ID, value, "id", f"Expected valid UUID, got: {value!r}")


def make_email(value: Any) -> Email:
    return _make(_EMAIL, value, "email", f"Expected valid email, got: {value!r}")


def make_timestamp(value: Any) -> Timestamp:
    """Validate an ISO string, epoch seconds or datetime as a UTC Timestamp."""
    return Timestamp(
        _make(_TIMESTAMP, value, "timestamp", f"Expected valid date, got: {value!r}"),
    )
