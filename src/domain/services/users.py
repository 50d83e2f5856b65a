"""User profile management service."""

from __future__ import annotations

import logging

from src.domain.errors import ConflictError
from src.domain.models.pagination import PaginatedResult, PaginationParams
from src.domain.models.users import User, UserResponse, UserUpdate
from src.domain.repositories.base import RecordId
from src.domain.repositories.users import UserRepository

from .base import Service

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User not found"


class UserService(Service[User, UserResponse]):
    """Profile reads/updates plus hard and soft account removal."""

    def __init__(self, repository: UserRepository) -> None:
        super().__init__(repository)
        self._users = repository

    async def get_profile(self, user_id: RecordId) -> UserResponse:
        return await self.get_by_id(user_id, USER_NOT_FOUND)

    async def get_all_users(self, params: PaginationParams) -> PaginatedResult[UserResponse]:
        return await self.get_all(params, {"is_active": True})

    async def update_profile(self, user_id: RecordId, data: UserUpdate) -> UserResponse:
        if data.email:
            existing = await self._users.find_one(
                {"email": data.email, "id": {"$ne": user_id}}
            )
            if existing is not None:
                raise ConflictError("Email already in use")
        return await self.update(user_id, data, USER_NOT_FOUND)

    async def delete_user(self, user_id: RecordId) -> None:
        await self.delete(user_id, USER_NOT_FOUND)

    async def archive_user(self, user_id: RecordId) -> None:
        await self.soft_delete(user_id, USER_NOT_FOUND)

    async def restore_user(self, user_id: RecordId) -> None:
        await self.restore(user_id, USER_NOT_FOUND)

    def map_to_dto(self, item: User) -> UserResponse:
        return UserResponse(
            id=str(item.id),
            email=item.email,
            name=item.name,
            role=item.role.value,
            is_active=item.is_active,
            created_at=item.created_at,
            updated_at=item.updated_at,
        )
