"""ORM model registry: imports every model module so each mapper class is
registered with Base.metadata before Alembic or SQLAlchemy runs.

Import order follows the dependency graph (referenced tables first).
"""

from src.infrastructure.persistence.models.users import User
from src.infrastructure.persistence.models.products import Product

__all__ = [
    "User",
    "Product",
]
