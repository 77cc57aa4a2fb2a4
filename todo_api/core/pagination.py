"""Pagination — page options, page metadata, and the arithmetic between them.

Invariants:
    - 1 <= page <= MAX_PAGE, 1 <= limit <= 100 (checked at decode)
    - The largest offset, (MAX_PAGE - 1) * MAX_LIMIT, fits a signed 64-bit integer
    - offset = (page - 1) * limit
    - total_pages = ceil(total / limit); 0 rows → total_pages == 0
    - has_next = page < total_pages; has_prev = page > 1
    - Pure functions: no IO, no SQL; query construction lives in infrastructure

Design Decisions:
    - sort_by is declared by the entity-specific subclass (UserPageOptions,
      TaskPageOptions): the base does not know which columns exist
    - Page is a plain generic dataclass, not a pydantic model: it carries
      entities, which the route layer re-projects into views
"""

import math
from dataclasses import dataclass
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from todo_api.core.domain_types import SortOrder


DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
MAX_PAGE = (2**63 - 1) // MAX_LIMIT

T = TypeVar("T")


class PaginationOptions(BaseModel):
    """Decoded page request. Unknown keys (actor fields) are ignored."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    page: int = Field(default=DEFAULT_PAGE, ge=1, le=MAX_PAGE)
    limit: int = Field(default=DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)
    sort_order: SortOrder | None = None


class PaginationMeta(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


@dataclass(frozen=True)
class Page(Generic[T]):
    """One page of entities plus its metadata."""
    data: list[T]
    pagination: PaginationMeta


def calculate_offset(page: int, limit: int) -> int:
    return (page - 1) * limit


def calculate_total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if total > 0 else 0


def build_pagination_meta(page: int, limit: int, total: int) -> PaginationMeta:
    total_pages = calculate_total_pages(total, limit)
    return PaginationMeta(
        page=page,
        limit=limit,
        total=total,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_prev=page > 1,
    )
