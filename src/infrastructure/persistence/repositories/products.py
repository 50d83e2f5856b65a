"""SQLAlchemy implementation of ProductRepository."""

from __future__ import annotations

from src.domain.models.enums import ProductCategory
from src.domain.models.products import Product as DomainProduct
from src.domain.repositories.products import ProductRepository
from src.infrastructure.database import Database
from src.infrastructure.persistence.models.products import Product as OrmProduct

from .base import SqlSoftDeleteRepository


class SqlProductRepository(SqlSoftDeleteRepository[DomainProduct], ProductRepository):
    def __init__(self, database: Database) -> None:
        super().__init__(database, OrmProduct, DomainProduct)

    async def find_by_category(self, category: ProductCategory) -> list[DomainProduct]:
        return await self.find({"category": category, "is_active": True})

    async def search_products(self, term: str) -> list[DomainProduct]:
        return await self.find({"$text": {"$search": term}, "is_active": True})

    async def find_active(self) -> list[DomainProduct]:
        return await self.find({"is_active": True})
