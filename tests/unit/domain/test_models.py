"""Tests for the user, product and auth domain models."""

from datetime import datetime, timezone
from uuid import uuid4

import pytest
from pydantic import ValidationError

from src.domain.models.auth import RegisterRequest
from src.domain.models.enums import ProductCategory, SortOrder, UserRole
from src.domain.models.products import Product, ProductCreate, ProductUpdate
from src.domain.models.users import User, UserCreate, UserUpdate

_NOW = datetime.now(timezone.utc)


# --- enums ---

def test_enums_are_string_comparable():
    assert UserRole.ADMIN == "admin"
    assert ProductCategory.BOOKS == "books"


def test_sort_order_values():
    assert SortOrder.ASC == "asc"
    assert SortOrder.DESC == "desc"


# --- users ---

def test_user_create_normalizes_email():
    data = UserCreate(email="  Ada@Example.COM ", name="Ada", password_hash="h")
    assert data.email == "ada@example.com"


def test_user_create_rejects_email_without_at():
    with pytest.raises(ValidationError):
        UserCreate(email="not-an-email", name="Ada", password_hash="h")


def test_user_create_role_defaults_to_user():
    assert UserCreate(email="a@b.c", name="A", password_hash="h").role is UserRole.USER


def test_user_update_tracks_only_set_fields():
    assert UserUpdate(name="New").model_dump(exclude_unset=True) == {"name": "New"}


def test_user_hides_password_hash_from_repr():
    user = User(
        id=uuid4(), email="a@b.c", name="A", password_hash="secret",
        created_at=_NOW, updated_at=_NOW,
    )
    assert "secret" not in repr(user)


# --- products ---

def test_product_create_rejects_negative_price():
    with pytest.raises(ValidationError):
        ProductCreate(name="x", description="y", price=-1, category="books")


def test_product_create_rejects_unknown_category():
    with pytest.raises(ValidationError):
        ProductCreate(name="x", description="y", price=1, category="toys")


def test_product_create_defaults():
    data = ProductCreate(name="x", description="y", price=1, category="books")
    assert data.stock == 0
    assert data.images == []


def test_product_update_partial_dump():
    assert ProductUpdate(price=9.5).model_dump(exclude_unset=True) == {"price": 9.5}


def test_product_creator_defaults_to_none():
    product = Product(
        id=uuid4(), name="x", description="y", price=1.0, category="food",
        created_by=uuid4(), created_at=_NOW, updated_at=_NOW,
    )
    assert product.creator is None
    assert product.is_deleted is False


# --- auth ---

def test_register_request_requires_six_char_password():
    with pytest.raises(ValidationError):
        RegisterRequest(email="a@b.c", password="123", name="A")
