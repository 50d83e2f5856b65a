"""Registration and credential checks.

Token signing is the HTTP layer's concern; this service only decides whether
an account may be created or authenticated.  Password hashing is delegated
to an injected PasswordHasher.
"""

from __future__ import annotations

import logging
from typing import Protocol

from src.domain.errors import ConflictError, ForbiddenError, UnauthorizedError
from src.domain.models.auth import AuthenticatedUser, AuthResponse, LoginRequest, RegisterRequest
from src.domain.models.users import User, UserCreate
from src.domain.repositories.users import UserRepository

logger = logging.getLogger(__name__)


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...

    def verify(self, password: str, hashed: str) -> bool: ...


class AuthService:
    def __init__(self, repository: UserRepository, hasher: PasswordHasher) -> None:
        self._users = repository
        self._hasher = hasher

    async def register(self, data: RegisterRequest) -> AuthResponse:
        """Create an account; raises ConflictError if the email is taken.

        Two concurrent registrations can both pass the existence check; the
        loser then fails on the unique constraint with DuplicateRecordError,
        which is also a ConflictError.
        """
        if await self._users.email_exists(data.email):
            raise ConflictError("Email already registered")
        user = await self._users.create(
            UserCreate(
                email=data.email,
                name=data.name,
                password_hash=self._hasher.hash(data.password),
            )
        )
        logger.info("Registered user %s", user.id)
        return self._response(user)

    async def authenticate(self, data: LoginRequest) -> AuthResponse:
        user = await self._users.find_by_email(data.email)
        if user is None or user.is_deleted:
            raise UnauthorizedError("Invalid credentials")
        if not user.is_active:
            raise ForbiddenError("Account is disabled")
        if not user.password_hash or not self._hasher.verify(data.password, user.password_hash):
            logger.info("Rejected login for user %s", user.id)
            raise UnauthorizedError("Invalid credentials")
        return self._response(user)

    @staticmethod
    def _response(user: User) -> AuthResponse:
        return AuthResponse(
            user=AuthenticatedUser(
                id=str(user.id),
                email=user.email,
                name=user.name,
                role=user.role.value,
            )
        )
