"""User repository interface."""

from __future__ import annotations

from abc import abstractmethod

from src.domain.models.users import User

from .base import SoftDeleteRepository


class UserRepository(SoftDeleteRepository[User]):
    """Read/write interface for User records.

    Emails are stored lower-cased; lookups normalize their argument the same way.
    """

    @abstractmethod
    async def find_by_email(self, email: str) -> User | None:
        """Return the user (including password_hash) with this email, or None."""

    @abstractmethod
    async def email_exists(self, email: str) -> bool:
        """Return True when any user, active or not, already uses email."""

    @abstractmethod
    async def find_active(self) -> list[User]:
        """Return every user with is_active=True."""
