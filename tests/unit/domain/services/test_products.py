"""Tests for ProductService: creation, listings and owner-checked writes."""

from datetime import datetime, timezone
from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from src.domain.errors import DomainError, ForbiddenError, NotFoundError
from src.domain.models.enums import ProductCategory
from src.domain.models.pagination import PaginatedResult, PaginationMeta, PaginationParams
from src.domain.models.products import Product, ProductCreate, ProductUpdate
from src.domain.repositories.products import ProductRepository
from src.domain.services.products import ProductService


def _product(**overrides):
    now = datetime.now(timezone.utc)
    defaults = dict(
        id=uuid4(),
        name="Desk Lamp",
        description="Adjustable LED desk lamp",
        price=25.0,
        category=ProductCategory.ELECTRONICS,
        stock=3,
        images=["lamp.png"],
        created_by=uuid4(),
        created_at=now,
        updated_at=now,
    )
    defaults.update(overrides)
    return Product(**defaults)


def _service():
    repo = MagicMock(spec=ProductRepository)
    return ProductService(repo), repo


def _page(*products):
    return PaginatedResult(
        data=list(products), pagination=PaginationMeta.build(1, 10, len(products))
    )


# --- map_to_dto ---

def test_map_to_dto_stringifies_ids_and_category():
    product = _product()
    dto = ProductService(MagicMock(spec=ProductRepository)).map_to_dto(product)
    assert dto.id == str(product.id)
    assert dto.created_by == str(product.created_by)
    assert dto.category == "electronics"
    assert dto.images == ["lamp.png"]


# --- create_product ---

async def test_create_product_records_creator():
    service, repo = _service()
    user_id = uuid4()
    repo.create.return_value = _product(created_by=user_id)

    data = ProductCreate(name="Desk Lamp", description="LED", price=25, category="electronics")
    dto = await service.create_product(user_id, data)

    assert dto.created_by == str(user_id)
    (sent,) = repo.create.await_args.args
    assert sent["created_by"] == user_id
    assert sent["name"] == "Desk Lamp"


# --- reads ---

async def test_get_product_missing_raises_product_not_found():
    service, repo = _service()
    repo.find_by_id.return_value = None
    with pytest.raises(NotFoundError, match="Product not found"):
        await service.get_product(uuid4())


async def test_get_all_products_filters_active():
    service, repo = _service()
    repo.find_with_pagination.return_value = _page(_product())
    await service.get_all_products(PaginationParams())
    filter, _ = repo.find_with_pagination.await_args.args
    assert filter == {"is_active": True}


async def test_get_products_by_category_filters_category_and_active():
    service, repo = _service()
    repo.find_with_pagination.return_value = _page()
    await service.get_products_by_category(ProductCategory.BOOKS, PaginationParams())
    filter, _ = repo.find_with_pagination.await_args.args
    assert filter == {"category": ProductCategory.BOOKS, "is_active": True}


async def test_search_products_maps_results():
    service, repo = _service()
    repo.search_products.return_value = [_product(name="Lamp"), _product(name="Lampshade")]
    results = await service.search_products("lamp")
    assert [r.name for r in results] == ["Lamp", "Lampshade"]
    repo.search_products.assert_awaited_once_with("lamp")


# --- update_product ---

async def test_update_product_by_owner():
    service, repo = _service()
    owner = uuid4()
    product = _product(created_by=owner)
    repo.find_by_id.return_value = product
    repo.update.return_value = _product(id=product.id, created_by=owner, price=30.0)

    dto = await service.update_product(product.id, owner, ProductUpdate(price=30))

    assert dto.price == 30.0


async def test_update_product_accepts_string_user_id():
    service, repo = _service()
    owner = uuid4()
    repo.find_by_id.return_value = _product(created_by=owner)
    repo.update.return_value = _product(created_by=owner)
    await service.update_product(uuid4(), str(owner), ProductUpdate(stock=1))
    repo.update.assert_awaited_once()


async def test_update_product_by_stranger_is_forbidden():
    service, repo = _service()
    repo.find_by_id.return_value = _product()
    with pytest.raises(ForbiddenError, match="Unauthorized to update this product"):
        await service.update_product(uuid4(), uuid4(), ProductUpdate(price=1))
    repo.update.assert_not_awaited()


async def test_update_product_missing_raises_not_found():
    service, repo = _service()
    repo.find_by_id.return_value = None
    with pytest.raises(NotFoundError, match="Product not found"):
        await service.update_product(uuid4(), uuid4(), ProductUpdate(price=1))


# --- delete_product ---

async def test_delete_product_by_owner():
    service, repo = _service()
    owner = uuid4()
    product = _product(created_by=owner)
    repo.find_by_id.return_value = product
    repo.delete.return_value = True

    await service.delete_product(product.id, owner)

    repo.delete.assert_awaited_once_with(product.id)


async def test_delete_product_by_stranger_is_forbidden():
    service, repo = _service()
    repo.find_by_id.return_value = _product()
    with pytest.raises(ForbiddenError, match="Unauthorized to delete this product"):
        await service.delete_product(uuid4(), uuid4())
    repo.delete.assert_not_awaited()


async def test_delete_product_lost_race_raises_domain_error():
    service, repo = _service()
    owner = uuid4()
    repo.find_by_id.return_value = _product(created_by=owner)
    repo.delete.return_value = False
    with pytest.raises(DomainError, match="Failed to delete product"):
        await service.delete_product(uuid4(), owner)
