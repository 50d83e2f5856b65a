"""Product catalog service.

Writes are restricted to the product's creator: update and delete look the
product up first and raise ForbiddenError when user_id does not own it.
Listings only ever show active products.
"""

from __future__ import annotations

import logging

from src.domain.errors import DomainError, ForbiddenError, NotFoundError
from src.domain.models.enums import ProductCategory
from src.domain.models.pagination import PaginatedResult, PaginationParams
from src.domain.models.products import Product, ProductCreate, ProductResponse, ProductUpdate
from src.domain.repositories.base import RecordId
from src.domain.repositories.products import ProductRepository

from .base import Service

logger = logging.getLogger(__name__)

PRODUCT_NOT_FOUND = "Product not found"


class ProductService(Service[Product, ProductResponse]):
    def __init__(self, repository: ProductRepository) -> None:
        super().__init__(repository)
        self._products = repository

    async def create_product(self, user_id: RecordId, data: ProductCreate) -> ProductResponse:
        product = await self.create({**data.model_dump(), "created_by": user_id})
        logger.info("User %s created product %s", user_id, product.id)
        return product

    async def get_product(self, product_id: RecordId) -> ProductResponse:
        return await self.get_by_id(product_id, PRODUCT_NOT_FOUND)

    async def get_all_products(self, params: PaginationParams) -> PaginatedResult[ProductResponse]:
        return await self.get_all(params, {"is_active": True})

    async def get_products_by_category(
        self, category: ProductCategory, params: PaginationParams
    ) -> PaginatedResult[ProductResponse]:
        return await self.get_all(params, {"category": category, "is_active": True})

    async def search_products(self, term: str) -> list[ProductResponse]:
        products = await self._products.search_products(term)
        return [self.map_to_dto(product) for product in products]

    async def update_product(
        self, product_id: RecordId, user_id: RecordId, data: ProductUpdate
    ) -> ProductResponse:
        await self._require_owner(product_id, user_id, "update")
        return await self.update(product_id, data, PRODUCT_NOT_FOUND)

    async def delete_product(self, product_id: RecordId, user_id: RecordId) -> None:
        await self._require_owner(product_id, user_id, "delete")
        if not await self._products.delete(product_id):
            # Removed by someone else between the ownership check and the delete.
            raise DomainError("Failed to delete product")
        logger.info("User %s deleted product %s", user_id, product_id)

    async def _require_owner(self, product_id: RecordId, user_id: RecordId, action: str) -> Product:
        product = await self._products.find_by_id(product_id)
        if product is None:
            raise NotFoundError(PRODUCT_NOT_FOUND)
        if str(product.created_by) != str(user_id):
            raise ForbiddenError(f"Unauthorized to {action} this product")
        return product

    def map_to_dto(self, item: Product) -> ProductResponse:
        return ProductResponse(
            id=str(item.id),
            name=item.name,
            description=item.description,
            price=item.price,
            category=item.category.value,
            stock=item.stock,
            images=list(item.images),
            is_active=item.is_active,
            created_by=str(item.created_by),
            created_at=item.created_at,
            updated_at=item.updated_at,
        )
