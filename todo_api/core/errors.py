"""Error Hierarchy — typed, categorized exceptions for all Todo API failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are recoverable; infrastructure errors (500-level) are critical
    - ValidationError always names the offending field and keeps the rejected value
    - to_response() produces the REST envelope and never echoes rejected values
      (they may be passwords)
    - No internal details leaked in user-facing messages

Design Decisions:
    - Single hierarchy with TodoError base: FastAPI global handler catches all
    - NotFoundError is NOT a QueryError: "resource absent" and "query failed" map
      to different status codes
    - QueryError / MutationError / (De)SerializationError share DatabaseError so a
      caller can treat every persistence failure uniformly
    - Entity-specific subclasses only override code: the entity kind travels in the
      error itself, handlers never branch on type name
"""

from collections.abc import Collection, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone

from pydantic import ValidationError as PydanticValidationError

from todo_api.core.domain_types import MutationOperation


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    DATABASE = "database"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    actor_id: str | None = None
    entity: str | None = None
    entity_id: str | None = None
    debug_info: dict[str, Any] | None = None


class TodoError(Exception):
    """Base exception for all Todo API errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "entity": self.context.entity,
                    "entity_id": self.context.entity_id,
                },
            }
        }


def error_details(
    errors: Iterable[Any], fields: Collection[str] | None = None,
) -> list[dict]:
    """Pydantic error dicts as {field, message, type}; rejected input is not copied."""
    return [
        {
            "field": _field_path(e["loc"], fields),
            "message": e["msg"],
            "type": e["type"],
        }
        for e in errors
    ]


def _field_path(loc: tuple, fields: Collection[str] | None) -> str:
    # loc[0] is the top-level input key, even when it is not a declared field
    head, rest = loc[:1], loc[1:]
    if fields is not None:
        rest = tuple(
            part for part in rest if isinstance(part, int) or part in fields
        )
    return ".".join(str(part) for part in (*head, *rest))


# ─── Domain Errors (400-level) ──────────────────────────────────

class ValidationError(TodoError):
    """Input or reconstructed record failed schema rules."""
    code = "VALIDATION_ERROR"
    entity: str | None = None

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        details: list[dict] | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.entity = ctx.entity or self.entity
        super().__init__(
            message, self.code, ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, ctx, 400,
        )
        self.field = field
        self.value = value
        self.details = details or []

    @classmethod
    def from_pydantic(
        cls, message: str, exc: PydanticValidationError, value: Any,
        fields: Collection[str] | None = None,
    ) -> "ValidationError":
        """Build from a pydantic failure; the first error names the field.

        When the model's field names are given, pydantic's union member tags
        (e.g. "str-enum[TaskStatus]") are dropped from each error location.
        """
        details = error_details(exc.errors(), fields)
        field_name = details[0]["field"] if details else None
        return cls(message, field=field_name or None, value=value, details=details)

    def to_response(self) -> dict:
        response = super().to_response()
        response["error"]["field"] = self.field
        response["error"]["details"] = self.details
        return response


class UserValidationError(ValidationError):
    code = "USER_VALIDATION_ERROR"
    entity = "User"


class TaskValidationError(ValidationError):
    code = "TASK_VALIDATION_ERROR"
    entity = "Task"


class NotFoundError(TodoError):
    """Operation targets an identifier with no matching row."""
    code = "NOT_FOUND"
    entity = "Resource"

    def __init__(self, entity_id: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.entity = self.entity
        ctx.entity_id = str(entity_id)
        super().__init__(
            f"{self.entity} '{entity_id}' not found",
            self.code, ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, ctx, 404,
        )
        self.entity_id = str(entity_id)


class UserNotFoundError(NotFoundError):
    code = "USER_NOT_FOUND"
    entity = "User"


class TaskNotFoundError(NotFoundError):
    code = "TASK_NOT_FOUND"
    entity = "Task"


class AuthenticationError(TodoError):
    """Request carries no usable bearer token."""
    def __init__(
        self, message: str = "Unauthorized", context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "UNAUTHORIZED", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.WARNING, context, 401,
        )


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(TodoError):
    """Database operation failed."""
    def __init__(
        self,
        message: str,
        operation: str,
        code: str = "DATABASE_ERROR",
        context: ErrorContext | None = None,
        http_status: int = 503,
    ):
        super().__init__(
            message, code, ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, http_status,
        )
        self.operation = operation


class QueryError(DatabaseError):
    """Read path failed for an operational reason (store unreachable, bad query)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(message, "query", "QUERY_ERROR", context)


class MutationError(DatabaseError):
    """A write failed after passing validation."""
    code = "MUTATION_ERROR"
    entity = "Resource"

    def __init__(
        self,
        operation: MutationOperation | str,
        message: str | None = None,
        entity_id: str | None = None,
        context: ErrorContext | None = None,
    ):
        op = MutationOperation(operation)
        ctx = context or ErrorContext()
        ctx.entity = self.entity
        ctx.entity_id = str(entity_id) if entity_id is not None else None
        super().__init__(
            message or f"{op.value.capitalize()} error",
            op.value, self.code, ctx,
        )
        self.entity_id = ctx.entity_id


class UserMutationError(MutationError):
    code = "USER_MUTATION_ERROR"
    entity = "User"


class TaskMutationError(MutationError):
    code = "TASK_MUTATION_ERROR"
    entity = "Task"


class SerializationError(DatabaseError):
    """In-memory entity could not be converted to its storage row."""
    def __init__(
        self, message: str, entity: str, entity_id: str | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.entity = entity
        ctx.entity_id = entity_id
        super().__init__(
            message, "serialize", "SERIALIZATION_ERROR", ctx, 500,
        )
        self.entity = entity
        self.entity_id = entity_id


class DeserializationError(DatabaseError):
    """Stored row drifted from the entity schema."""
    def __init__(
        self, message: str, entity: str, row_data: dict | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.entity = entity
        if row_data and row_data.get("id") is not None:
            ctx.entity_id = str(row_data["id"])
        super().__init__(
            message, "deserialize", "DESERIALIZATION_ERROR", ctx, 500,
        )
        self.entity = entity
        self.row_data = row_data
