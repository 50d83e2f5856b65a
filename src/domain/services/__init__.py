"""Domain services package."""

from .auth import AuthService, PasswordHasher
from .base import DEFAULT_NOT_FOUND_MESSAGE, Service
from .products import ProductService
from .users import UserService

__all__ = [
    "DEFAULT_NOT_FOUND_MESSAGE",
    "AuthService",
    "PasswordHasher",
    "ProductService",
    "Service",
    "UserService",
]
