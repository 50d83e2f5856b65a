"""Generic repository base interfaces.

Repository[T] is the root abstraction for all data-access interfaces in this
domain layer.  Concrete implementations live in src/infrastructure/persistence/
and are wired at the application boundary via get_repositories().

Design notes:
  - All methods are async to accommodate async database drivers (asyncpg / aiosqlite).
  - T is the domain record type (never an ORM row or DTO).
  - Absence is reported as None / False, never as an exception; turning
    absence into NotFoundError is the service layer's job.
  - Every store fault surfaces as RepositoryError (or a sub-kind), so callers
    never handle driver exception types.
  - Soft deletion is a separate capability (SoftDeleteRepository) because not
    every record type carries the deletion markers.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any, Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel

from src.domain.models.pagination import PaginatedResult, PaginationParams

T = TypeVar("T")

Filter = Mapping[str, Any]
RecordId = UUID | str
RecordData = Mapping[str, Any] | BaseModel


class Repository(ABC, Generic[T]):
    """Abstract CRUD interface for one record type."""

    @abstractmethod
    async def find_by_id(self, id: RecordId) -> T | None:
        """Return the record with the given id, or None if not found."""

    @abstractmethod
    async def find_one(self, filter: Filter) -> T | None:
        """Return the first record matching filter, or None."""

    @abstractmethod
    async def find(self, filter: Filter) -> list[T]:
        """Return every record matching filter in store-default order."""

    @abstractmethod
    async def create(self, data: RecordData) -> T:
        """Persist a new record and return it with generated id/timestamps."""

    @abstractmethod
    async def update(self, id: RecordId, data: RecordData) -> T | None:
        """Apply a partial update; return the updated record or None if absent."""

    @abstractmethod
    async def delete(self, id: RecordId) -> bool:
        """Hard-delete the record; return whether one was removed."""

    @abstractmethod
    async def count(self, filter: Filter) -> int:
        """Return the number of records matching filter."""

    @abstractmethod
    async def find_with_pagination(
        self, filter: Filter, params: PaginationParams
    ) -> PaginatedResult[T]:
        """Return one sorted window of matches plus the total match count."""


class SoftDeleteRepository(Repository[T]):
    """Repository whose records can be marked deleted instead of removed."""

    @abstractmethod
    async def soft_delete(self, id: RecordId) -> bool:
        """Mark the record deleted; return whether it was found."""

    @abstractmethod
    async def restore(self, id: RecordId) -> bool:
        """Clear the deletion marker; return whether the record was found."""
