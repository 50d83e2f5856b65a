"""Registration and login request/response models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .users import EmailAddress


class RegisterRequest(BaseModel):
    email: EmailAddress
    password: str = Field(min_length=6, repr=False)
    name: str = Field(min_length=1, max_length=100)


class LoginRequest(BaseModel):
    email: EmailAddress
    password: str = Field(repr=False)


class AuthenticatedUser(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    email: str
    name: str
    role: str


class AuthResponse(BaseModel):
    """Outcome of a successful register/login.

    Token issuance happens in the HTTP layer; it signs a token for user.
    """

    model_config = ConfigDict(frozen=True)

    user: AuthenticatedUser
