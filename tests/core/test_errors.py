"""Error Hierarchy — status codes, envelopes, and the not-found / query split.

Tests:
    - Each family maps to its HTTP status
    - to_response never echoes the rejected value
    - NotFoundError is not a DatabaseError; persistence errors share DatabaseError
    - Error locations drop pydantic union member tags but keep list indexes
"""

from todo_api.core.domain_types import MutationOperation
from todo_api.core.errors import (
    AuthenticationError, DatabaseError, DeserializationError, MutationError,
    NotFoundError, QueryError, TaskMutationError, TaskNotFoundError,
    UserValidationError, error_details,
)


def test_validation_error_response_omits_value():
    error = UserValidationError("Bad input", field="password", value="s3cret")
    body = error.to_response()["error"]
    assert error.http_status == 400
    assert body["code"] == "USER_VALIDATION_ERROR"
    assert body["field"] == "password"
    assert body["context"]["entity"] == "User"
    assert "s3cret" not in str(body)


def test_not_found_carries_entity_and_id():
    error = TaskNotFoundError("abc")
    assert error.http_status == 404
    assert error.message == "Task 'abc' not found"
    assert error.to_response()["error"]["context"] == {
        "entity": "Task", "entity_id": "abc",
    }


def test_not_found_is_not_a_database_error():
    assert not issubclass(NotFoundError, DatabaseError)
    assert not issubclass(NotFoundError, QueryError)


def test_persistence_errors_share_database_error():
    for cls in (QueryError, MutationError, DeserializationError):
        assert issubclass(cls, DatabaseError)


def test_mutation_error_records_operation():
    error = TaskMutationError(MutationOperation.REMOVE, entity_id="t-1")
    assert error.operation == "remove"
    assert error.code == "TASK_MUTATION_ERROR"
    assert error.entity_id == "t-1"
    assert error.message == "Remove error"


def test_query_error_operation_is_query():
    assert QueryError("boom").operation == "query"


def test_authentication_error_is_401():
    error = AuthenticationError()
    assert error.http_status == 401
    assert error.to_response()["error"]["code"] == "UNAUTHORIZED"


def test_error_details_drop_union_member_tags():
    errors = [
        {"loc": ("status", "str-enum[TaskStatus]"), "msg": "bad", "type": "enum"},
        {"loc": ("status", "list[str-enum[TaskStatus]]", 1), "msg": "bad", "type": "enum"},
        {"loc": ("surprise",), "msg": "extra", "type": "extra_forbidden"},
    ]
    details = error_details(errors, fields={"status", "title"})
    assert [d["field"] for d in details] == ["status", "status.1", "surprise"]


def test_error_details_without_fields_keep_full_location():
    errors = [{"loc": ("body", "status"), "msg": "bad", "type": "enum"}]
    assert error_details(errors)[0]["field"] == "body.status"
