"""Entity Base — immutable, validated domain records with identity and audit timestamps.

Invariants:
    - Entities are frozen: no attribute can be reassigned after construction
    - create(record) is the ONLY supported way in and it runs the full schema
    - serialize() is the exact inverse of create(): create(e.serialize()) == e
    - Every single-field update re-validates the WHOLE record and returns a new
      instance with a refreshed updated_at; the original is never touched
    - Unknown keys in a record are rejected (a drifted row must not load silently)

Design Decisions:
    - pydantic BaseModel(frozen=True) over dataclasses: decode/encode symmetry and
      per-field errors without extra code
    - Full re-validation on update over delta validation: catches cross-field
      invariants introduced indirectly, at the cost of redundant work
    - use_enum_values: records carry plain strings, so rows map 1:1 to columns
"""

from collections.abc import Mapping
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from todo_api.core.domain_types import utc_now
from todo_api.core.errors import ValidationError
from todo_api.core.field_rules import TimestampField


class Entity(BaseModel):
    """Base for User and Task. Subclasses declare `id` and their own fields."""

    model_config = ConfigDict(
        frozen=True, extra="forbid", use_enum_values=True,
    )

    kind: ClassVar[str] = "Entity"
    validation_error: ClassVar[type[ValidationError]] = ValidationError

    created_at: TimestampField
    updated_at: TimestampField

    @classmethod
    def create(cls, record: Mapping[str, Any]) -> Self:
        """Validate a serialized record and build the entity."""
        try:
            return cls.model_validate(record)
        except PydanticValidationError as e:
            raise cls.validation_error.from_pydantic(
                f"Failed to create {cls.kind} entity", e, record,
                fields=cls.model_fields,
            ) from e

    def serialize(self) -> dict[str, Any]:
        """Plain record with the storage shape (one key per column)."""
        return self.model_dump()

    def _with_field(self, name: str, value: Any) -> Self:
        """Splice one field into the serialized record and rebuild."""
        record = {**self.serialize(), name: value, "updated_at": utc_now()}
        try:
            return type(self).create(record)
        except ValidationError as e:
            raise self.validation_error(
                f"Failed to update {self.kind.lower()} {name}",
                field=name, value=value, details=e.details,
            ) from e
