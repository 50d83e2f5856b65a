"""Product ORM model."""

from __future__ import annotations

import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.infrastructure.database import Base

from .mixins import SoftDeleteMixin, TimestampMixin


class Product(TimestampMixin, SoftDeleteMixin, Base):
    """Catalog product owned by the user who created it.

    price and stock must be non-negative; category is one of the
    ProductCategory values.  Both are enforced by CHECK constraints so the
    store rejects bad rows even when callers bypass the Pydantic DTOs.
    """

    __tablename__ = "products"
    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
        CheckConstraint(
            "category IN ('electronics', 'clothing', 'food', 'books', 'other')",
            name="ck_products_category",
        ),
    )

    search_fields = ("name", "description")

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    price: Mapped[float] = mapped_column(Numeric(12, 2, asdecimal=False), nullable=False)
    category: Mapped[str] = mapped_column(String(20), nullable=False, index=True)
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_by: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    creator: Mapped["User"] = relationship(  # noqa: F821
        back_populates="products", lazy="raise"
    )
