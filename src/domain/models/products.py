"""Product domain models and DTOs."""

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from .enums import ProductCategory
from .users import UserSummary


class Product(BaseModel):
    """A catalog product.

    creator is only present when the created_by relation was populated by
    the query that loaded the product.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    name: str
    description: str
    price: float
    category: ProductCategory
    stock: int = 0
    images: list[str] = Field(default_factory=list)
    is_active: bool = True
    created_by: UUID
    creator: UserSummary | None = None
    is_deleted: bool = False
    deleted_at: datetime | None = None
    created_at: datetime
    updated_at: datetime


class ProductCreate(BaseModel):
    name: str = Field(min_length=1, max_length=200)
    description: str = Field(min_length=1, max_length=2000)
    price: float = Field(ge=0)
    category: ProductCategory
    stock: int = Field(default=0, ge=0)
    images: list[str] = Field(default_factory=list)


class ProductUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, min_length=1, max_length=2000)
    price: float | None = Field(default=None, ge=0)
    category: ProductCategory | None = None
    stock: int | None = Field(default=None, ge=0)
    images: list[str] | None = None
    is_active: bool | None = None


class ProductResponse(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str
    price: float
    category: str
    stock: int
    images: list[str]
    is_active: bool
    created_by: str
    created_at: datetime
    updated_at: datetime
