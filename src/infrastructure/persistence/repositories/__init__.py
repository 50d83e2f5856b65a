"""Concrete SQLAlchemy repository implementations.

Exports the generic SqlRepository bases, the entity repositories, and the
get_repositories() factory used to wire them at the application boundary.
"""

from __future__ import annotations

from dataclasses import dataclass

from src.infrastructure.database import Database

from .base import SqlRepository, SqlSoftDeleteRepository
from .products import SqlProductRepository
from .users import SqlUserRepository


@dataclass
class Repositories:
    """All repository instances bound to a single Database handle."""

    users: SqlUserRepository
    products: SqlProductRepository


def get_repositories(database: Database) -> Repositories:
    """Construct all repositories bound to the given Database.

    Build once at startup and hand the repositories to the services:

        database = Database(Settings())
        repos = get_repositories(database)
        products = ProductService(repos.products)
    """
    return Repositories(
        users=SqlUserRepository(database),
        products=SqlProductRepository(database),
    )


__all__ = [
    "SqlRepository",
    "SqlSoftDeleteRepository",
    "SqlUserRepository",
    "SqlProductRepository",
    "Repositories",
    "get_repositories",
]
