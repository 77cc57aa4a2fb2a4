"""Domain Types — nominal types that replace bare primitives across the codebase.

Invariants:
    - UserId, TaskId wrap UUID-shaped strings: a UserId is never accepted where a TaskId is expected
    - Email wraps a pattern-checked address string
    - Timestamp is always timezone-aware UTC
    - Calling a NewType (UserId("...")) is the TRUSTED constructor: no validation
    - Validated (untrusted) constructors live in core/field_rules.py
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - UUIDs kept as lowercase str, not uuid.UUID: matches the wire and storage shape 1:1
    - str Enums: serialize to JSON without custom encoders
"""

import re
from datetime import datetime, timezone
from enum import Enum
from typing import NewType
from uuid import uuid4


# Character classes spell out both cases: the pattern string is reused by
# pydantic, which would drop re flags.
UUID_PATTERN = re.compile(
    r"^[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}"
    r"-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}$",
)
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)
TaskId = NewType("TaskId", str)


# ─── Value Types ─────────────────────────────────────────────────

Email = NewType("Email", str)
Timestamp = NewType("Timestamp", datetime)   # tz-aware, UTC


# ─── Trusted Constructors ────────────────────────────────────────

def is_valid_uuid(value: object) -> bool:
    """True if value is a UUID-shaped string (8-4-4-4-12 hex, any case)."""
    return isinstance(value, str) and UUID_PATTERN.match(value) is not None


def new_user_id() -> UserId:
    return UserId(str(uuid4()))


def new_task_id() -> TaskId:
    return TaskId(str(uuid4()))


def utc_now() -> Timestamp:
    return Timestamp(datetime.now(timezone.utc))


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are read as UTC; aware ones are converted to UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


# ─── Enums ───────────────────────────────────────────────────────

class TaskStatus(str, Enum):
    """Task states. No transition graph: any state may move to any other."""
    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class UserSortField(str, Enum):
    """Columns a user listing may be ordered by."""
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    NAME = "name"
    EMAIL = "email"


class TaskSortField(str, Enum):
    """Columns a task listing or search may be ordered by."""
    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    TITLE = "title"
    STATUS = "status"


class ActorRole(str, Enum):
    """Roles carried by the bearer token of the calling actor."""
    ASSIGNEE = "assignee"
    ADMIN = "admin"


class MutationOperation(str, Enum):
    """Write operations a repository can fail on."""
    ADD = "add"
    UPDATE = "update"
    REMOVE = "remove"
