"""Domain repository interfaces.

All abstractions are defined here with abc.ABC and @abstractmethod.
Concrete implementations live in src/infrastructure/persistence/ and are
wired at the application boundary via get_repositories().

Import from this package rather than individual modules to avoid coupling
services to specific repository module paths.
"""

from .base import Filter, RecordData, RecordId, Repository, SoftDeleteRepository
from .products import ProductRepository
from .users import UserRepository

__all__ = [
    "Filter",
    "RecordData",
    "RecordId",
    "Repository",
    "SoftDeleteRepository",
    "ProductRepository",
    "UserRepository",
]
