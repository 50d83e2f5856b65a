"""Shared fixtures: a throwaway file-backed SQLite database per test.

A file (rather than :memory:) lets every session get its own connection,
which the concurrent read/count in find_with_pagination relies on.
"""

import pytest

import src.infrastructure.persistence  # noqa: F401  registers all mappers
from src.domain.models.enums import ProductCategory
from src.infrastructure.database import Database, Settings
from src.infrastructure.persistence.repositories import get_repositories


@pytest.fixture
async def database(tmp_path):
    db = Database(Settings(database_url=f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}"))
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def repos(database):
    return get_repositories(database)


@pytest.fixture
async def owner(repos):
    return await repos.users.create(
        {"email": "owner@example.com", "name": "Owner", "password_hash": "hashed"}
    )


@pytest.fixture
def make_product(repos, owner):
    """Async factory: await make_product(name="Lamp", price=12.5, ...)."""

    async def _make(**overrides):
        data = {
            "name": "Desk Lamp",
            "description": "Adjustable LED desk lamp",
            "price": 25.0,
            "category": ProductCategory.ELECTRONICS,
            "stock": 5,
            "created_by": owner.id,
        }
        data.update(overrides)
        return await repos.products.create(data)

    return _make
