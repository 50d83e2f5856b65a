"""SQLAlchemy implementation of UserRepository."""

from __future__ import annotations

from src.domain.models.users import User as DomainUser
from src.domain.repositories.users import UserRepository
from src.infrastructure.database import Database
from src.infrastructure.persistence.models.users import User as OrmUser

from .base import SqlSoftDeleteRepository


class SqlUserRepository(SqlSoftDeleteRepository[DomainUser], UserRepository):
    def __init__(self, database: Database) -> None:
        super().__init__(database, OrmUser, DomainUser)

    async def find_by_email(self, email: str) -> DomainUser | None:
        return await self.find_one({"email": email.strip().lower()})

    async def email_exists(self, email: str) -> bool:
        return await self.count({"email": email.strip().lower()}) > 0

    async def find_active(self) -> list[DomainUser]:
        return await self.find({"is_active": True})
