"""Query Builders — absent filters vanish, present ones compose, ordering tiebreaks on id."""

from datetime import datetime, timezone

from sqlalchemy.sql.elements import True_

from todo_api.core.domain_types import SortOrder
from todo_api.infrastructure.query_builders import (
    build_date_range_filter, build_equals_filter, build_in_filter,
    build_order_by, build_text_search_filter, flatten_conditions,
)
from todo_api.models.task import TaskModel


def _sql(expr) -> str:
    return str(expr.compile(compile_kwargs={"literal_binds": False}))


def test_absent_filters_return_none():
    assert build_text_search_filter([TaskModel.title], "") is None
    assert build_text_search_filter([TaskModel.title], None) is None
    assert build_equals_filter(TaskModel.assignee_id, None) is None
    assert build_in_filter(TaskModel.status, []) is None
    assert build_date_range_filter(TaskModel.created_at) is None


def test_flatten_with_nothing_is_unconstrained():
    assert isinstance(flatten_conditions(None, None), True_)


def test_in_filter_single_value_is_equality():
    assert "IN" not in _sql(build_in_filter(TaskModel.status, ["DONE"]))
    assert "IN" in _sql(build_in_filter(TaskModel.status, ["DONE", "TODO"]))


def test_text_filter_ors_columns():
    sql = _sql(build_text_search_filter([TaskModel.title, TaskModel.description], "x"))
    assert "tasks.title" in sql
    assert "tasks.description" in sql
    assert " OR " in sql


def test_date_range_uses_inclusive_bounds():
    start = datetime(2024, 1, 1, tzinfo=timezone.utc)
    end = datetime(2024, 2, 1, tzinfo=timezone.utc)
    sql = _sql(build_date_range_filter(TaskModel.created_at, start, end))
    assert ">=" in sql
    assert "<=" in sql


def test_order_by_defaults_to_desc_with_id_tiebreak():
    clauses = [_sql(c) for c in build_order_by(TaskModel.created_at, TaskModel.id, None)]
    assert clauses == ["tasks.created_at DESC", "tasks.id DESC"]


def test_order_by_ascending():
    clauses = [
        _sql(c) for c in build_order_by(TaskModel.title, TaskModel.id, SortOrder.ASC)
    ]
    assert clauses == ["tasks.title ASC", "tasks.id ASC"]
