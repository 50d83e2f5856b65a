"""Pagination request and result models.

PaginationParams normalizes whatever the caller hands in: page and limit are
always positive integers by the time a repository sees them, so the skip
arithmetic never has to guard against zero or negative values.
"""

from __future__ import annotations

import math
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, field_validator

from .enums import SortOrder

T = TypeVar("T")

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 10
DEFAULT_SORT_FIELD = "created_at"


def _coerce_positive_int(value: Any, default: int) -> int:
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, str):
        value = value.strip()
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number >= 1 else default


class PaginationParams(BaseModel):
    """Page/limit/sort/order request shape.

    order stays None when the caller did not ask for one; repositories treat
    anything other than ASC as descending.
    """

    model_config = ConfigDict(frozen=True)

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_PAGE_SIZE
    sort: str = DEFAULT_SORT_FIELD
    order: SortOrder | None = None

    @field_validator("page", mode="before")
    @classmethod
    def _coerce_page(cls, value: Any) -> int:
        return _coerce_positive_int(value, DEFAULT_PAGE)

    @field_validator("limit", mode="before")
    @classmethod
    def _coerce_limit(cls, value: Any) -> int:
        return _coerce_positive_int(value, DEFAULT_PAGE_SIZE)

    @field_validator("sort", mode="before")
    @classmethod
    def _coerce_sort(cls, value: Any) -> str:
        if value is None:
            return DEFAULT_SORT_FIELD
        return str(value).strip() or DEFAULT_SORT_FIELD

    @field_validator("order", mode="before")
    @classmethod
    def _coerce_order(cls, value: Any) -> SortOrder | None:
        if value is None or value == "":
            return None
        if isinstance(value, SortOrder):
            return value
        return SortOrder.ASC if str(value).strip().lower() == "asc" else SortOrder.DESC

    @classmethod
    def from_query(
        cls,
        page: str | int | None = None,
        limit: str | int | None = None,
        sort: str | None = None,
        order: str | None = None,
    ) -> PaginationParams:
        """Build params from raw query-string values (all optional strings)."""
        return cls(page=page, limit=limit, sort=sort, order=order)

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def ascending(self) -> bool:
        return self.order is SortOrder.ASC


class PaginationMeta(BaseModel):
    model_config = ConfigDict(frozen=True)

    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> PaginationMeta:
        """Compute total_pages = ceil(total / limit) for this snapshot."""
        return cls(page=page, limit=limit, total=total, total_pages=math.ceil(total / limit))


class PaginatedResult(BaseModel, Generic[T]):
    """One window of records plus the metadata it was computed with.

    Each result is a point-in-time snapshot: total is counted fresh on every
    call and is not guaranteed to agree with data under concurrent writes.
    """

    model_config = ConfigDict(frozen=True)

    data: list[T]
    pagination: PaginationMeta
