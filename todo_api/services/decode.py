"""Input Decoding — untrusted payloads to typed DTOs, failures to entity validation errors.

Invariants:
    - decode never returns a partially-valid DTO
    - The raised error carries the offending field and the pydantic details
    - Error locations name DTO fields only (union member tags stripped)
"""

from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from todo_api.core.errors import ValidationError

M = TypeVar("M", bound=BaseModel)


def decode(
    schema: type[M], payload: Any, error_cls: type[ValidationError], message: str,
) -> M:
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as e:
        raise error_cls.from_pydantic(
            message, e, payload, fields=schema.model_fields,
        ) from e
