"""Persistence package.

Importing this package registers every ORM mapper with Base.metadata
(required for Alembic autogenerate and Database.create_all) and exports all
repository implementations, the query builder, and the DI factory.
"""

from src.infrastructure.persistence.models import *  # noqa: F401, F403
from src.infrastructure.persistence.models import __all__ as _orm_all
from src.infrastructure.persistence.query_builder import QueryBuilder
from src.infrastructure.persistence.repositories import (
    Repositories,
    SqlProductRepository,
    SqlRepository,
    SqlSoftDeleteRepository,
    SqlUserRepository,
    get_repositories,
)

__all__ = _orm_all + [
    "QueryBuilder",
    "Repositories",
    "SqlRepository",
    "SqlSoftDeleteRepository",
    "SqlUserRepository",
    "SqlProductRepository",
    "get_repositories",
]
