"""Fluent query builder over one record table.

Builder calls only accumulate state; nothing touches the store until one of
the terminal methods (execute, first, count, exists) runs.  Per-method
semantics:

    filter          shallow-merges conditions; later keys overwrite
    where*/search   set the condition for one field (or $text)
    greater_than /
    less_than       merge the bound into an existing operator mapping on the
                    field, so both together give an open interval
    date_between    replaces any condition on the field with [start, end]
    sort            accumulates; first call has the highest priority
    select          projection; last call wins
    populate        accumulates relationship loads; repeating a path widens
                    its field selection
    limit / skip    set the window; paginate overwrites both

Whatever order the calls were made in, execute applies sort, then
projection, then population, then skip, then limit.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from sqlalchemy import Select, func, inspect, select
from sqlalchemy.orm import load_only, selectinload

from src.domain.errors import RepositoryError
from src.domain.models.enums import SortOrder
from src.infrastructure.database import Database

from .documents import to_document
from .filters import compile_filter, is_operator_mapping, resolve_column
from .store_errors import store_errors

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


def _field_list(fields: str | Iterable[str]) -> tuple[str, ...]:
    if isinstance(fields, str):
        fields = fields.replace(",", " ").split()
    return tuple(field for field in fields if field)


class QueryBuilder(Generic[T]):
    """Accumulates filter/sort/projection/window intent for one ORM model.

    Results are domain records (domain_model instances) unless a projection
    was selected, in which case each result is a dict holding the selected
    fields, the primary key, and any populated relations.
    """

    def __init__(self, database: Database, orm_model: type, domain_model: type[T]) -> None:
        self._database = database
        self._orm_model = orm_model
        self._domain_model = domain_model
        self._conditions: dict[str, Any] = {}
        self._sort: dict[str, SortOrder] = {}
        self._fields: tuple[str, ...] = ()
        self._populate: dict[str, tuple[str, ...]] = {}
        self._limit = 0
        self._skip = 0

    # ------------------------------------------------------------------ #
    # Accumulated state (read-only views)                                  #
    # ------------------------------------------------------------------ #

    @property
    def conditions(self) -> dict[str, Any]:
        return dict(self._conditions)

    @property
    def sort_keys(self) -> list[tuple[str, SortOrder]]:
        return list(self._sort.items())

    @property
    def selected_fields(self) -> tuple[str, ...]:
        return self._fields

    @property
    def populated(self) -> list[tuple[str, tuple[str, ...]]]:
        return list(self._populate.items())

    @property
    def limit_value(self) -> int:
        return self._limit

    @property
    def skip_value(self) -> int:
        return self._skip

    # ------------------------------------------------------------------ #
    # Filters                                                              #
    # ------------------------------------------------------------------ #

    def filter(self, conditions: Mapping[str, Any]) -> QueryBuilder[T]:
        self._conditions.update(conditions)
        return self

    def where(self, field: str, value: Any) -> QueryBuilder[T]:
        self._conditions[field] = value
        return self

    def where_in(self, field: str, values: Iterable[Any]) -> QueryBuilder[T]:
        self._conditions[field] = {"$in": list(values)}
        return self

    def where_not_in(self, field: str, values: Iterable[Any]) -> QueryBuilder[T]:
        self._conditions[field] = {"$nin": list(values)}
        return self

    def greater_than(self, field: str, value: Any) -> QueryBuilder[T]:
        return self._bound(field, "$gt", value)

    def less_than(self, field: str, value: Any) -> QueryBuilder[T]:
        return self._bound(field, "$lt", value)

    def date_between(self, field: str, start: datetime, end: datetime) -> QueryBuilder[T]:
        self._conditions[field] = {"$gte": start, "$lte": end}
        return self

    def search(self, term: str) -> QueryBuilder[T]:
        self._conditions["$text"] = {"$search": term}
        return self

    def _bound(self, field: str, op: str, value: Any) -> QueryBuilder[T]:
        current = self._conditions.get(field)
        if is_operator_mapping(current):
            self._conditions[field] = {**current, op: value}
        else:
            self._conditions[field] = {op: value}
        return self

    # ------------------------------------------------------------------ #
    # Shaping                                                              #
    # ------------------------------------------------------------------ #

    def sort(self, field: str, order: SortOrder | str = SortOrder.ASC) -> QueryBuilder[T]:
        if not isinstance(order, SortOrder):
            order = SortOrder.ASC if str(order).lower() == "asc" else SortOrder.DESC
        self._sort[field] = order
        return self

    def select(self, fields: str | Iterable[str]) -> QueryBuilder[T]:
        self._fields = _field_list(fields)
        return self

    def populate(self, path: str, select: str | Iterable[str] | None = None) -> QueryBuilder[T]:
        fields = _field_list(select) if select else ()
        current = self._populate.get(path)
        if current is not None:
            # An empty selection loads every column of the related record.
            if current and fields:
                fields = current + tuple(f for f in fields if f not in current)
            else:
                fields = ()
        self._populate[path] = fields
        return self

    def limit(self, limit: int) -> QueryBuilder[T]:
        self._limit = limit
        return self

    def skip(self, skip: int) -> QueryBuilder[T]:
        self._skip = skip
        return self

    def paginate(self, page: int, per_page: int) -> QueryBuilder[T]:
        self._limit = per_page
        self._skip = (page - 1) * per_page
        return self

    # ------------------------------------------------------------------ #
    # Terminal operations                                                  #
    # ------------------------------------------------------------------ #

    async def execute(self) -> list[T] | list[dict[str, Any]]:
        with store_errors(f"querying {self._table_name}"):
            stmt = self._shaped_statement()
            if self._skip > 0:
                stmt = stmt.offset(self._skip)
            if self._limit > 0:
                stmt = stmt.limit(self._limit)
            async with self._database.session() as session:
                rows = (await session.scalars(stmt)).all()
                return [self._to_result(row) for row in rows]

    async def first(self) -> T | dict[str, Any] | None:
        with store_errors(f"querying {self._table_name}"):
            stmt = self._shaped_statement().limit(1)
            async with self._database.session() as session:
                row = (await session.scalars(stmt)).first()
                return self._to_result(row) if row is not None else None

    async def count(self) -> int:
        with store_errors(f"counting {self._table_name}"):
            stmt = (
                select(func.count())
                .select_from(self._orm_model)
                .where(*compile_filter(self._orm_model, self._conditions))
            )
            async with self._database.session() as session:
                return int(await session.scalar(stmt) or 0)

    async def exists(self) -> bool:
        return await self.count() > 0

    # ------------------------------------------------------------------ #
    # Statement assembly                                                   #
    # ------------------------------------------------------------------ #

    @property
    def _table_name(self) -> str:
        return inspect(self._orm_model).local_table.name

    def _shaped_statement(self) -> Select:
        """Filter, then sort, projection and population; no window."""
        model = self._orm_model
        stmt = select(model).where(*compile_filter(model, self._conditions))

        for field, order in self._sort.items():
            column = resolve_column(model, field)
            stmt = stmt.order_by(column.asc() if order is SortOrder.ASC else column.desc())

        if self._fields:
            columns = [resolve_column(model, field) for field in self._fields]
            # Many-to-one loads need the local foreign key even when not selected.
            for path in self._populate:
                columns.extend(
                    getattr(model, column.key) for column in self._relationship(path).local_columns
                )
            stmt = stmt.options(load_only(*columns))

        for path, fields in self._populate.items():
            relationship = self._relationship(path)
            option = selectinload(getattr(model, path))
            if fields:
                target = relationship.mapper.class_
                option = option.load_only(*[resolve_column(target, field) for field in fields])
            stmt = stmt.options(option)

        logger.debug("Built %s query: %s", self._table_name, stmt)
        return stmt

    def _relationship(self, path: str) -> Any:
        relationships = inspect(self._orm_model).relationships
        if path not in relationships:
            raise RepositoryError(f"Unknown relation {path!r} on {self._table_name}")
        return relationships[path]

    def _to_result(self, row: Any) -> T | dict[str, Any]:
        document = to_document(row)
        if self._fields:
            return document
        return self._domain_model.model_validate(document)
