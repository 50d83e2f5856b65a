"""Convert loaded ORM rows into plain documents (dicts).

Only attributes that were actually loaded are included: deferred columns
(projections) and relationships that were not populated are skipped, so
building a document never triggers lazy I/O.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import inspect


def to_document(row: Any) -> dict[str, Any]:
    state = inspect(row)
    unloaded = state.unloaded
    document: dict[str, Any] = {}
    for attr in state.mapper.column_attrs:
        if attr.key not in unloaded:
            document[attr.key] = getattr(row, attr.key)
    for relationship in state.mapper.relationships:
        if relationship.key in unloaded:
            continue
        value = getattr(row, relationship.key)
        if value is None:
            document[relationship.key] = None
        elif relationship.uselist:
            document[relationship.key] = [to_document(item) for item in value]
        else:
            document[relationship.key] = to_document(value)
    return document
