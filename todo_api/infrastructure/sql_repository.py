"""SQL Repository — shared SQLAlchemy implementation of the entity repository contract.

Invariants:
    - One AsyncSession per operation, opened from the injected session factory
    - Rows become entities ONLY through Entity.create; entities become rows ONLY
      through Entity.serialize (no hand-mapped columns)
    - A row that fails entity validation raises DeserializationError, never a
      partially-built entity
    - Read failures raise QueryError; write failures raise the entity's
      MutationError subclass tagged with the operation (add/update/remove)
    - Missing ids on update/delete raise the entity's NotFoundError, with no write
    - fetch_by_id with a malformed id returns None without touching the database
    - Count and data queries of a page run as two statements (no shared snapshot)

Design Decisions:
    - Generic base + thin per-entity subclasses: the six operations are identical
      across tables; only the model, entity and error classes differ
    - session_factory is any zero-arg callable returning an async context manager
      of AsyncSession (async_sessionmaker or DatabaseSessionManager.session)
"""

import logging
from collections.abc import Callable
from contextlib import AbstractAsyncContextManager
from typing import Any, ClassVar, Generic, TypeVar

from sqlalchemy import ColumnElement, func, select, true
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from todo_api.core.domain_types import MutationOperation, is_valid_uuid
from todo_api.core.entity import Entity
from todo_api.core.errors import (
    DeserializationError, MutationError, NotFoundError, QueryError,
    SerializationError, ValidationError,
)
from todo_api.core.pagination import (
    Page, PaginationOptions, build_pagination_meta, calculate_offset,
)
from todo_api.db.base import Base
from todo_api.infrastructure.query_builders import build_order_by

logger = logging.getLogger(__name__)

SessionFactory = Callable[[], AbstractAsyncContextManager[AsyncSession]]

E = TypeVar("E", bound=Entity)

DEFAULT_SORT_FIELD = "created_at"


class SqlRepository(Generic[E]):
    """CRUD + pagination over one table. Subclasses set the class attributes."""

    model: ClassVar[type[Base]]
    entity_cls: ClassVar[type[Entity]]
    not_found_error: ClassVar[type[NotFoundError]] = NotFoundError
    mutation_error: ClassVar[type[MutationError]] = MutationError

    def __init__(self, session_factory: SessionFactory):
        self._session_factory = session_factory

    # ─── Row mapping ─────────────────────────────────────────────

    def _from_row(self, row: Any) -> E:
        record = {
            column.key: getattr(row, column.key)
            for column in self.model.__table__.columns
        }
        try:
            return self.entity_cls.create(record)
        except ValidationError as e:
            logger.error(
                f"Stored {self.entity_cls.kind} row failed validation: {e.message}",
                extra={"entity": self.entity_cls.kind, "entity_id": record.get("id")},
            )
            raise DeserializationError(
                f"Stored {self.entity_cls.kind} data is invalid",
                self.entity_cls.kind, record,
            ) from e

    def _to_row(self, entity: E) -> Base:
        try:
            return self.model(**entity.serialize())
        except (TypeError, ValueError) as e:
            raise SerializationError(
                f"{self.entity_cls.kind} could not be serialized",
                self.entity_cls.kind, entity.id,
            ) from e

    def _sort_column(self, options: PaginationOptions) -> Any:
        sort_by = getattr(options, "sort_by", None)
        name = sort_by.value if sort_by is not None else DEFAULT_SORT_FIELD
        return getattr(self.model, name)

    def _query_failed(self, operation: str, exc: Exception) -> QueryError:
        logger.error(
            f"{self.entity_cls.kind} {operation} failed: {exc}",
            extra={"entity": self.entity_cls.kind, "operation": "query"},
        )
        return QueryError(f"Failed to {operation} {self.entity_cls.kind.lower()}s")

    def _mutation_failed(
        self, operation: MutationOperation, entity_id: str, exc: Exception,
    ) -> MutationError:
        logger.error(
            f"{self.entity_cls.kind} {operation.value} failed: {exc}",
            extra={
                "entity": self.entity_cls.kind, "entity_id": entity_id,
                "operation": operation.value,
            },
        )
        return self.mutation_error(operation, entity_id=entity_id)

    # ─── Writes ──────────────────────────────────────────────────

    async def add(self, entity: E) -> E:
        row = self._to_row(entity)
        try:
            async with self._session_factory() as db:
                db.add(row)
                await db.flush()
                stored = self._from_row(row)
                await db.commit()
                return stored
        except SQLAlchemyError as e:
            raise self._mutation_failed(MutationOperation.ADD, entity.id, e) from e

    async def update(self, entity: E) -> E:
        values = entity.serialize()
        try:
            async with self._session_factory() as db:
                row = await db.get(self.model, entity.id)
                if row is None:
                    raise self.not_found_error(entity.id)
                for key, value in values.items():
                    setattr(row, key, value)
                await db.flush()
                stored = self._from_row(row)
                await db.commit()
                return stored
        except SQLAlchemyError as e:
            raise self._mutation_failed(
                MutationOperation.UPDATE, entity.id, e,
            ) from e

    async def delete_by_id(self, entity_id: str) -> E:
        if not is_valid_uuid(entity_id):
            raise self.not_found_error(entity_id)
        entity_id = entity_id.lower()
        try:
            async with self._session_factory() as db:
                row = await db.get(self.model, entity_id)
                if row is None:
                    raise self.not_found_error(entity_id)
                removed = self._from_row(row)
                await db.delete(row)
                await db.commit()
                return removed
        except SQLAlchemyError as e:
            raise self._mutation_failed(
                MutationOperation.REMOVE, entity_id, e,
            ) from e

    # ─── Reads ───────────────────────────────────────────────────

    async def fetch_by_id(self, entity_id: str) -> E | None:
        if not is_valid_uuid(entity_id):
            return None
        try:
            async with self._session_factory() as db:
                row = await db.get(self.model, entity_id.lower())
        except SQLAlchemyError as e:
            raise self._query_failed("fetch", e) from e
        return self._from_row(row) if row is not None else None

    async def fetch_all(self) -> list[E]:
        stmt = select(self.model).order_by(
            *build_order_by(self.model.created_at, self.model.id, None),
        )
        try:
            async with self._session_factory() as db:
                rows = (await db.scalars(stmt)).all()
        except SQLAlchemyError as e:
            raise self._query_failed("fetch", e) from e
        return [self._from_row(row) for row in rows]

    async def fetch_paginated(self, options: PaginationOptions) -> Page[E]:
        return await self._paginate(true(), options)

    async def _paginate(
        self, condition: ColumnElement[bool], options: PaginationOptions,
    ) -> Page[E]:
        count_stmt = (
            select(func.count()).select_from(self.model).where(condition)
        )
        data_stmt = (
            select(self.model)
            .where(condition)
            .order_by(*build_order_by(
                self._sort_column(options), self.model.id, options.sort_order,
            ))
            .offset(calculate_offset(options.page, options.limit))
            .limit(options.limit)
        )
        try:
            async with self._session_factory() as db:
                total = (await db.scalar(count_stmt)) or 0
                rows = (await db.scalars(data_stmt)).all()
        except SQLAlchemyError as e:
            raise self._query_failed("paginate", e) from e
        return Page(
            data=[self._from_row(row) for row in rows],
            pagination=build_pagination_meta(options.page, options.limit, total),
        )
