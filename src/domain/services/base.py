"""Generic CRUD service over one repository.

Service[T, R] holds a Repository[T] (composition, not inheritance) and adds
the two things repositories deliberately leave out: turning absence into
NotFoundError, and mapping records to response DTOs.  Entity services
subclass it, implement map_to_dto, and layer their own business checks
(uniqueness, ownership) on top of these operations.

Every method is a single stateless round trip to the repository; nothing is
retried and no multi-step transaction spans two calls.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from src.domain.errors import NotFoundError, UnsupportedOperationError
from src.domain.models.pagination import PaginatedResult, PaginationParams
from src.domain.repositories.base import (
    Filter,
    RecordData,
    RecordId,
    Repository,
    SoftDeleteRepository,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

DEFAULT_NOT_FOUND_MESSAGE = "Item not found"


class Service(ABC, Generic[T, R]):
    def __init__(self, repository: Repository[T]) -> None:
        self._repository = repository

    @property
    def repository(self) -> Repository[T]:
        return self._repository

    async def get_by_id(
        self, id: RecordId, not_found_message: str = DEFAULT_NOT_FOUND_MESSAGE
    ) -> R:
        item = await self._repository.find_by_id(id)
        if item is None:
            raise NotFoundError(not_found_message)
        return self.map_to_dto(item)

    async def get_all(
        self, params: PaginationParams | None = None, filter: Filter | None = None
    ) -> PaginatedResult[R]:
        """Return one page of DTOs; pagination metadata passes through untouched."""
        result = await self._repository.find_with_pagination(
            filter or {}, params or PaginationParams()
        )
        return PaginatedResult(
            data=[self.map_to_dto(item) for item in result.data],
            pagination=result.pagination,
        )

    async def create(self, data: RecordData) -> R:
        item = await self._repository.create(data)
        return self.map_to_dto(item)

    async def update(
        self, id: RecordId, data: RecordData, not_found_message: str = DEFAULT_NOT_FOUND_MESSAGE
    ) -> R:
        item = await self._repository.update(id, data)
        if item is None:
            raise NotFoundError(not_found_message)
        return self.map_to_dto(item)

    async def delete(self, id: RecordId, not_found_message: str = DEFAULT_NOT_FOUND_MESSAGE) -> None:
        if not await self._repository.delete(id):
            raise NotFoundError(not_found_message)
        logger.info("Deleted %s", id)

    async def soft_delete(
        self, id: RecordId, not_found_message: str = DEFAULT_NOT_FOUND_MESSAGE
    ) -> None:
        if not await self._soft_delete_repository().soft_delete(id):
            raise NotFoundError(not_found_message)
        logger.info("Soft deleted %s", id)

    async def restore(self, id: RecordId, not_found_message: str = DEFAULT_NOT_FOUND_MESSAGE) -> None:
        if not await self._soft_delete_repository().restore(id):
            raise NotFoundError(not_found_message)
        logger.info("Restored %s", id)

    def _soft_delete_repository(self) -> SoftDeleteRepository[T]:
        if not isinstance(self._repository, SoftDeleteRepository):
            raise UnsupportedOperationError("Soft delete not supported by this repository")
        return self._repository

    @abstractmethod
    def map_to_dto(self, item: T) -> R:
        """Map a persisted record to its response representation.

        Must be pure: no I/O, no mutation of item.  Identifiers become strings.
        """
