"""User domain models and the DTOs exchanged with the API layer.

These are pure domain objects with no ORM or persistence concerns.
"""

from __future__ import annotations

from datetime import datetime
from typing import Annotated
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from .enums import UserRole


def _normalize_email(value: str) -> str:
    value = value.strip().lower()
    if "@" not in value or value.startswith("@") or value.endswith("@"):
        raise ValueError("Invalid email address")
    return value


EmailAddress = Annotated[str, AfterValidator(_normalize_email)]


class User(BaseModel):
    """A persisted user account.

    password_hash is optional so projected reads that skip it still validate;
    it never leaves the domain layer (UserResponse omits it).
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    email: str
    name: str
    role: UserRole = UserRole.USER
    is_active: bool = True
    password_hash: str | None = Field(default=None, repr=False)
    is_deleted: bool = False
    deleted_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class UserSummary(BaseModel):
    """A user reference as embedded in other records (e.g. a product's creator).

    Only id is guaranteed; the rest depends on which fields were populated.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    email: str | None = None
    name: str | None = None
    role: UserRole | None = None


class UserCreate(BaseModel):
    email: EmailAddress
    name: str = Field(min_length=1, max_length=100)
    password_hash: str
    role: UserRole = UserRole.USER


class UserUpdate(BaseModel):
    """Partial profile update; only fields explicitly set are applied."""

    name: str | None = Field(default=None, min_length=1, max_length=100)
    email: EmailAddress | None = None


class UserResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    email: str
    name: str
    role: str
    is_active: bool
    created_at: datetime
    updated_at: datetime
