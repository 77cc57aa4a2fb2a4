"""Query Builders — translate page options and search params into SQLAlchemy expressions.

Invariants:
    - Every builder returns None for "no constraint"; flatten_conditions drops Nones
    - Text search is a case-insensitive substring match; %, _ and the escape
      character in user text match literally
    - Date ranges are inclusive on both ends; either end may be open
    - Ordering always ends with the primary key in the same direction, so pages
      are stable when the sort column has ties

Design Decisions:
    - Builders take columns, not models: one set of helpers for both tables
    - No SQL strings: expressions are composed and bound by SQLAlchemy
"""

from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Any

from sqlalchemy import ColumnElement, and_, or_, true

from todo_api.core.domain_types import SortOrder


def build_text_search_filter(
    columns: Sequence[Any], text: str | None,
) -> ColumnElement[bool] | None:
    """OR of icontains over columns; None when text is empty."""
    if not text:
        return None
    return or_(*(col.icontains(text, autoescape=True) for col in columns))


def build_equals_filter(column: Any, value: Any) -> ColumnElement[bool] | None:
    if value is None:
        return None
    return column == value


def build_in_filter(
    column: Any, values: Iterable[Any] | None,
) -> ColumnElement[bool] | None:
    values = list(values or [])
    if not values:
        return None
    if len(values) == 1:
        return column == values[0]
    return column.in_(values)


def build_date_range_filter(
    column: Any, start: datetime | None = None, end: datetime | None = None,
) -> ColumnElement[bool] | None:
    conditions = []
    if start is not None:
        conditions.append(column >= start)
    if end is not None:
        conditions.append(column <= end)
    if not conditions:
        return None
    return and_(*conditions)


def flatten_conditions(
    *conditions: ColumnElement[bool] | None,
) -> ColumnElement[bool]:
    """AND of the present conditions; a true() literal when all are absent."""
    present = [c for c in conditions if c is not None]
    if not present:
        return true()
    return and_(*present)


def build_order_by(
    sort_column: Any, id_column: Any, sort_order: SortOrder | str | None,
) -> list[Any]:
    """Sort column then id, both in sort_order (default desc)."""
    order = SortOrder(sort_order) if sort_order else SortOrder.DESC
    if order is SortOrder.ASC:
        return [sort_column.asc(), id_column.asc()]
    return [sort_column.desc(), id_column.desc()]
