"""Generic SQLAlchemy implementations of Repository and SoftDeleteRepository.

Each operation runs in its own session drawn from the shared Database
handle, so independent operations (including the two halves of
find_with_pagination) can be in flight at the same time.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from typing import Any, TypeVar
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import Select, delete, func, inspect, select, update

from src.domain.errors import RecordValidationError
from src.domain.models.pagination import PaginatedResult, PaginationMeta, PaginationParams
from src.domain.repositories.base import (
    Filter,
    RecordData,
    RecordId,
    Repository,
    SoftDeleteRepository,
)
from src.infrastructure.database import Database
from src.infrastructure.persistence.documents import to_document
from src.infrastructure.persistence.filters import coerce_value, compile_filter, resolve_column
from src.infrastructure.persistence.models.mixins import utcnow
from src.infrastructure.persistence.query_builder import QueryBuilder
from src.infrastructure.persistence.store_errors import store_errors

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class SqlRepository(Repository[T]):
    """Repository[T] over one ORM model, returning domain_model records."""

    def __init__(self, database: Database, orm_model: type, domain_model: type[T]) -> None:
        self._database = database
        self._orm_model = orm_model
        self._domain_model = domain_model
        mapper = inspect(orm_model)
        self._table = mapper.local_table.name
        self._pk = mapper.primary_key[0]

    def query(self) -> QueryBuilder[T]:
        """Start a fluent query against this repository's table."""
        return QueryBuilder(self._database, self._orm_model, self._domain_model)

    # ------------------------------------------------------------------ #
    # Reads                                                                #
    # ------------------------------------------------------------------ #

    async def find_by_id(self, id: RecordId) -> T | None:
        with store_errors(f"finding {self._table} by id"):
            key = self._parse_id(id)
            async with self._database.session() as session:
                row = await session.get(self._orm_model, key)
                return self._to_domain(row) if row is not None else None

    async def find_one(self, filter: Filter) -> T | None:
        with store_errors(f"finding {self._table}"):
            stmt = self._select(filter).limit(1)
            async with self._database.session() as session:
                row = (await session.scalars(stmt)).first()
                return self._to_domain(row) if row is not None else None

    async def find(self, filter: Filter) -> list[T]:
        with store_errors(f"finding {self._table}"):
            return await self._fetch_all(self._select(filter))

    async def count(self, filter: Filter) -> int:
        with store_errors(f"counting {self._table}"):
            return await self._count(filter)

    async def find_with_pagination(
        self, filter: Filter, params: PaginationParams
    ) -> PaginatedResult[T]:
        """Return one page of matches, sorted by params.sort, plus the total.

        The windowed read and the count are issued concurrently in separate
        sessions.  Each is its own snapshot: a write landing between them can
        make total disagree with data (e.g. count a row that data missed).
        Callers needing a consistent view must not rely on the pair.
        """
        with store_errors(f"paginating {self._table}"):
            column = resolve_column(self._orm_model, params.sort)
            if params.ascending:
                order_by = (column.asc(), self._pk.asc())
            else:
                order_by = (column.desc(), self._pk.desc())
            window = (
                self._select(filter).order_by(*order_by).offset(params.skip).limit(params.limit)
            )
            data, total = await asyncio.gather(self._fetch_all(window), self._count(filter))
        return PaginatedResult(
            data=data,
            pagination=PaginationMeta.build(params.page, params.limit, total),
        )

    # ------------------------------------------------------------------ #
    # Writes                                                               #
    # ------------------------------------------------------------------ #

    async def create(self, data: RecordData) -> T:
        with store_errors(f"creating {self._table}"):
            values = self._column_values(data, partial=False)
            async with self._database.session() as session:
                row = self._orm_model(**values)
                session.add(row)
                await session.flush()
                await session.refresh(row)
                record = self._to_domain(row)
        logger.debug("Created %s %s", self._table, getattr(record, "id", None))
        return record

    async def update(self, id: RecordId, data: RecordData) -> T | None:
        with store_errors(f"updating {self._table}"):
            key = self._parse_id(id)
            values = self._column_values(data, partial=True)
            if self._pk.key in values:
                raise RecordValidationError(f"{self._pk.key} cannot be updated")
            async with self._database.session() as session:
                row = await session.get(self._orm_model, key)
                if row is None:
                    return None
                for field, value in values.items():
                    setattr(row, field, value)
                await session.flush()
                await session.refresh(row)
                return self._to_domain(row)

    async def delete(self, id: RecordId) -> bool:
        with store_errors(f"deleting {self._table}"):
            key = self._parse_id(id)
            async with self._database.session() as session:
                result = await session.execute(delete(self._orm_model).where(self._pk == key))
                removed = result.rowcount > 0
        if removed:
            logger.debug("Deleted %s %s", self._table, key)
        return removed

    # ------------------------------------------------------------------ #
    # Helpers                                                              #
    # ------------------------------------------------------------------ #

    def _parse_id(self, id: RecordId) -> UUID:
        return id if isinstance(id, UUID) else UUID(str(id))

    def _select(self, filter: Filter | None) -> Select:
        return select(self._orm_model).where(*compile_filter(self._orm_model, filter))

    async def _fetch_all(self, stmt: Select) -> list[T]:
        async with self._database.session() as session:
            rows = (await session.scalars(stmt)).all()
            return [self._to_domain(row) for row in rows]

    async def _count(self, filter: Filter | None) -> int:
        stmt = (
            select(func.count())
            .select_from(self._orm_model)
            .where(*compile_filter(self._orm_model, filter))
        )
        async with self._database.session() as session:
            return int(await session.scalar(stmt) or 0)

    def _to_domain(self, row: Any) -> T:
        return self._domain_model.model_validate(to_document(row))

    def _column_values(self, data: RecordData, partial: bool) -> dict[str, Any]:
        """Turn create/update input into column values, rejecting unknown fields.

        Pydantic input contributes only explicitly set fields on partial
        updates; mappings are taken as given.
        """
        if isinstance(data, BaseModel):
            raw = data.model_dump(exclude_unset=partial)
        elif isinstance(data, Mapping):
            raw = dict(data)
        else:
            raise RecordValidationError(f"Unsupported {self._table} payload: {type(data).__name__}")
        columns = inspect(self._orm_model).column_attrs
        unknown = sorted(set(raw) - set(columns.keys()))
        if unknown:
            raise RecordValidationError(
                f"Unknown {self._table} fields: {', '.join(unknown)}",
                details={"fields": unknown},
            )
        return {
            field: coerce_value(getattr(self._orm_model, field), value)
            for field, value in raw.items()
        }


class SqlSoftDeleteRepository(SqlRepository[T], SoftDeleteRepository[T]):
    """SqlRepository for models carrying SoftDeleteMixin columns."""

    async def soft_delete(self, id: RecordId) -> bool:
        return await self._mark(id, {"is_deleted": True, "deleted_at": utcnow()}, "soft deleting")

    async def restore(self, id: RecordId) -> bool:
        return await self._mark(id, {"is_deleted": False, "deleted_at": None}, "restoring")

    async def _mark(self, id: RecordId, values: dict[str, Any], action: str) -> bool:
        with store_errors(f"{action} {self._table}"):
            key = self._parse_id(id)
            stmt = (
                update(self._orm_model)
                .where(self._pk == key)
                .values(**values)
                .execution_options(synchronize_session=False)
            )
            async with self._database.session() as session:
                result = await session.execute(stmt)
                found = result.rowcount > 0
        if found:
            logger.debug("%s %s %s", action.capitalize(), self._table, key)
        return found
