"""Domain model package.

All domain objects are pure Python / Pydantic models with no ORM or
infrastructure dependencies.  Import from this package to avoid coupling
application code to individual module paths.
"""

from .auth import AuthenticatedUser, AuthResponse, LoginRequest, RegisterRequest
from .enums import ProductCategory, SortOrder, UserRole
from .pagination import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    DEFAULT_SORT_FIELD,
    PaginatedResult,
    PaginationMeta,
    PaginationParams,
)
from .products import Product, ProductCreate, ProductResponse, ProductUpdate
from .users import User, UserCreate, UserResponse, UserSummary, UserUpdate

__all__ = [
    # enums
    "ProductCategory",
    "SortOrder",
    "UserRole",
    # pagination
    "DEFAULT_PAGE",
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_SORT_FIELD",
    "PaginatedResult",
    "PaginationMeta",
    "PaginationParams",
    # users
    "User",
    "UserCreate",
    "UserResponse",
    "UserSummary",
    "UserUpdate",
    # products
    "Product",
    "ProductCreate",
    "ProductResponse",
    "ProductUpdate",
    # auth
    "AuthenticatedUser",
    "AuthResponse",
    "LoginRequest",
    "RegisterRequest",
]
