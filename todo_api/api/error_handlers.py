"""Error Handlers — TodoError, request validation and catch-all responses for the Todo API.

Invariants:
    - TodoError → its own to_response() envelope at its http_status
    - RequestValidationError → 400 with the same {field, message, type} details
      the workflows produce (core.errors.error_details)
    - Exception (catch-all) → 500 INTERNAL_ERROR, never leaks internal details
    - Rejected input values are never echoed (they may be passwords)

Design Decisions:
    - Three-layer handler: domain (TodoError), validation (Pydantic), catch-all (Exception)
    - 4xx logged at warning, 5xx at error: client mistakes are not incidents
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from todo_api.core.errors import (
    ErrorCategory, ErrorSeverity, TodoError, error_details,
)

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    app.add_exception_handler(TodoError, todo_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


async def todo_error_handler(request: Request, exc: TodoError) -> JSONResponse:
    log = logger.warning if exc.http_status < 500 else logger.error
    log(
        f"{type(exc).__name__}: {exc.message}",
        extra={
            "error_code": exc.code,
            "path": request.url.path,
            "entity": exc.context.entity,
            "entity_id": exc.context.entity_id,
        },
    )
    return JSONResponse(status_code=exc.http_status, content=exc.to_response())


async def request_validation_handler(
    request: Request, exc: RequestValidationError,
) -> JSONResponse:
    """Body/header shapes FastAPI rejects before a workflow sees the payload."""
    logger.warning(
        f"Request validation failed on {request.url.path}",
        extra={"error_code": "VALIDATION_ERROR", "path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_envelope(
            "VALIDATION_ERROR", "Invalid request data",
            ErrorCategory.VALIDATION, ErrorSeverity.ERROR,
            details=error_details(exc.errors()),
        ),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=True,
        extra={"path": request.url.path},
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_envelope(
            "INTERNAL_ERROR", "An unexpected error occurred",
            ErrorCategory.INTERNAL, ErrorSeverity.CRITICAL,
        ),
    )


def _envelope(
    code: str, message: str, category: ErrorCategory, severity: ErrorSeverity,
    details: list[dict] | None = None,
) -> dict:
    error = {
        "code": code,
        "message": message,
        "category": category.value,
        "severity": severity.value,
    }
    if details is not None:
        error["details"] = details
    return {"error": error}
