"""Product repository interface."""

from __future__ import annotations

from abc import abstractmethod

from src.domain.models.enums import ProductCategory
from src.domain.models.products import Product

from .base import SoftDeleteRepository


class ProductRepository(SoftDeleteRepository[Product]):
    """Read/write interface for Product records.

    The category and search lookups only return active products.
    """

    @abstractmethod
    async def find_by_category(self, category: ProductCategory) -> list[Product]:
        """Return active products in category."""

    @abstractmethod
    async def search_products(self, term: str) -> list[Product]:
        """Full-text search over name and description among active products."""

    @abstractmethod
    async def find_active(self) -> list[Product]:
        """Return every product with is_active=True."""
