"""Translate document-store style filter mappings into SQLAlchemy criteria.

A filter maps field names to conditions:

    {"category": "books"}                          equality (None → IS NULL)
    {"price": {"$gte": 10, "$lt": 50}}             comparisons, AND-ed
    {"role": {"$in": ["admin", "user"]}}           set membership ($in / $nin)
    {"deleted_at": {"$exists": False}}             NULL / NOT NULL
    {"name": {"$contains": "lamp"}}                case-insensitive substring
    {"$text": {"$search": "red lamp"}}             any word in any search field
    {"$or": [{...}, {...}]}, {"$and": [...]}       logical composition

$ne and $nin treat a NULL field as a missing one, so it matches.
Field names are ORM attribute names.  Unknown fields and operators raise
RepositoryError so a typo never silently matches everything.
"""

from __future__ import annotations

import operator
from collections.abc import Callable, Mapping
from enum import Enum
from typing import Any
from uuid import UUID

from sqlalchemy import Uuid, and_, false, inspect, or_, true
from sqlalchemy.orm import InstrumentedAttribute
from sqlalchemy.sql.elements import ColumnElement

from src.domain.errors import RepositoryError

_COMPARISONS: dict[str, Callable[[Any, Any], ColumnElement[bool]]] = {
    "$eq": operator.eq,
    "$ne": operator.ne,
    "$gt": operator.gt,
    "$gte": operator.ge,
    "$lt": operator.lt,
    "$lte": operator.le,
}


def is_operator_mapping(condition: Any) -> bool:
    """True for {"$op": value, ...} mappings (as opposed to a literal value)."""
    return (
        isinstance(condition, Mapping)
        and bool(condition)
        and all(isinstance(key, str) and key.startswith("$") for key in condition)
    )


def resolve_column(model: type, field: str) -> InstrumentedAttribute:
    """Return the mapped column attribute for field, or raise RepositoryError."""
    mapper = inspect(model)
    if field not in mapper.column_attrs:
        raise RepositoryError(f"Unknown field {field!r} on {mapper.local_table.name}")
    return getattr(model, field)


def coerce_value(column: InstrumentedAttribute, value: Any) -> Any:
    """Convert a caller-supplied value to what the column binds.

    Enums bind by value; string identifiers bound to UUID columns are parsed
    (a malformed one raises ValueError, wrapped by the caller's boundary).
    """
    if isinstance(value, (list, tuple, set, frozenset)):
        return [coerce_value(column, item) for item in value]
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, str) and isinstance(column.type, Uuid):
        return UUID(value)
    return value


def compile_filter(model: type, filter: Mapping[str, Any] | None) -> list[ColumnElement[bool]]:
    """Compile filter into a list of criteria, implicitly AND-ed by the caller."""
    criteria: list[ColumnElement[bool]] = []
    for key, condition in (filter or {}).items():
        if key == "$and":
            criteria.append(and_(true(), *[_conjunction(model, sub) for sub in _sequence(key, condition)]))
        elif key == "$or":
            criteria.append(or_(false(), *[_conjunction(model, sub) for sub in _sequence(key, condition)]))
        elif key == "$text":
            criteria.append(_text_search(model, condition))
        elif key.startswith("$"):
            raise RepositoryError(f"Unsupported filter operator {key!r}")
        else:
            criteria.append(_field_condition(resolve_column(model, key), condition))
    return criteria


def _conjunction(model: type, filter: Mapping[str, Any]) -> ColumnElement[bool]:
    criteria = compile_filter(model, filter)
    return and_(*criteria) if criteria else true()


def _sequence(key: str, condition: Any) -> list[Mapping[str, Any]]:
    if not isinstance(condition, (list, tuple)) or not all(
        isinstance(item, Mapping) for item in condition
    ):
        raise RepositoryError(f"{key} expects a list of filters")
    return list(condition)


def _field_condition(column: InstrumentedAttribute, condition: Any) -> ColumnElement[bool]:
    if not is_operator_mapping(condition):
        if condition is None:
            return column.is_(None)
        return column == coerce_value(column, condition)
    clauses = [_operator_condition(column, op, value) for op, value in condition.items()]
    return and_(*clauses)


def _operator_condition(column: InstrumentedAttribute, op: str, value: Any) -> ColumnElement[bool]:
    if op in _COMPARISONS:
        if value is None:
            if op == "$eq":
                return column.is_(None)
            if op == "$ne":
                return column.is_not(None)
            raise RepositoryError(f"{op} cannot compare against None")
        condition = _COMPARISONS[op](column, coerce_value(column, value))
        if op == "$ne":
            # A NULL field is not equal to any value, matching $nin.
            return or_(condition, column.is_(None))
        return condition
    if op in ("$in", "$nin"):
        if not isinstance(value, (list, tuple, set, frozenset)):
            raise RepositoryError(f"{op} expects a list of values")
        values = coerce_value(column, value)
        if op == "$in":
            return column.in_(values)
        # Rows where the field is NULL do not hold any of the excluded values.
        return or_(column.not_in(values), column.is_(None))
    if op == "$exists":
        return column.is_not(None) if value else column.is_(None)
    if op == "$contains":
        return column.ilike(f"%{_escape_like(str(value))}%", escape="\\")
    raise RepositoryError(f"Unsupported filter operator {op!r}")


def _text_search(model: type, condition: Any) -> ColumnElement[bool]:
    if not isinstance(condition, Mapping) or "$search" not in condition:
        raise RepositoryError("$text expects {'$search': <terms>}")
    fields = getattr(model, "search_fields", ())
    if not fields:
        raise RepositoryError(f"{inspect(model).local_table.name} has no searchable fields")
    words = str(condition["$search"]).split()
    if not words:
        return false()
    columns = [resolve_column(model, field) for field in fields]
    return or_(
        *[
            column.ilike(f"%{_escape_like(word)}%", escape="\\")
            for word in words
            for column in columns
        ]
    )


def _escape_like(term: str) -> str:
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
