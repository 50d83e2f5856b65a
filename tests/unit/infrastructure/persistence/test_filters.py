"""Tests for filter compilation (no database needed).

Criteria are rendered with literal binds against the SQLite dialect so the
assertions can read the generated SQL.
"""

from uuid import uuid4

import pytest
from sqlalchemy.dialects import sqlite
from sqlalchemy.sql.elements import False_

from src.domain.errors import RepositoryError
from src.domain.models.enums import ProductCategory
from src.infrastructure.persistence.filters import (
    coerce_value,
    compile_filter,
    is_operator_mapping,
    resolve_column,
)
from src.infrastructure.persistence.models.products import Product
from src.infrastructure.persistence.models.users import User


def _sql(model, filter):
    return [
        str(c.compile(dialect=sqlite.dialect(), compile_kwargs={"literal_binds": True}))
        for c in compile_filter(model, filter)
    ]


# --- helpers ---

def test_is_operator_mapping():
    assert is_operator_mapping({"$gt": 1})
    assert not is_operator_mapping({"a": 1})
    assert not is_operator_mapping({})
    assert not is_operator_mapping("plain")


def test_resolve_column_unknown_field():
    with pytest.raises(RepositoryError, match="Unknown field 'nope'"):
        resolve_column(Product, "nope")


def test_resolve_column_rejects_relationship_names():
    with pytest.raises(RepositoryError):
        resolve_column(Product, "creator")


def test_coerce_value_enum_to_value():
    assert coerce_value(Product.category, ProductCategory.BOOKS) == "books"


def test_coerce_value_parses_uuid_strings_for_uuid_columns():
    value = uuid4()
    assert coerce_value(Product.created_by, str(value)) == value


def test_coerce_value_malformed_uuid_raises_value_error():
    with pytest.raises(ValueError):
        coerce_value(Product.id, "not-a-uuid")


def test_coerce_value_recurses_into_lists():
    assert coerce_value(Product.category, [ProductCategory.FOOD, "books"]) == ["food", "books"]


# --- compile_filter ---

def test_empty_filter_has_no_criteria():
    assert compile_filter(Product, {}) == []
    assert compile_filter(Product, None) == []


def test_equality():
    (sql,) = _sql(Product, {"category": ProductCategory.BOOKS})
    assert sql == "products.category = 'books'"


def test_none_means_is_null():
    (sql,) = _sql(Product, {"deleted_at": None})
    assert sql == "products.deleted_at IS NULL"


def test_each_field_is_its_own_criterion():
    assert len(compile_filter(Product, {"category": "books", "is_active": True})) == 2


def test_comparison_operators_are_and_ed():
    (sql,) = _sql(Product, {"price": {"$gte": 10, "$lt": 50}})
    assert "products.price >=" in sql
    assert "products.price <" in sql
    assert " AND " in sql


def test_in_and_nin():
    (in_sql,) = _sql(Product, {"category": {"$in": ["books", "food"]}})
    assert "IN ('books', 'food')" in in_sql
    (nin_sql,) = _sql(Product, {"category": {"$nin": ["books"]}})
    assert "NOT IN ('books')" in nin_sql
    assert "products.category IS NULL" in nin_sql


def test_in_requires_list():
    with pytest.raises(RepositoryError, match=r"\$in expects a list"):
        compile_filter(Product, {"category": {"$in": "books"}})


def test_exists():
    (present,) = _sql(Product, {"deleted_at": {"$exists": True}})
    (absent,) = _sql(Product, {"deleted_at": {"$exists": False}})
    assert present == "products.deleted_at IS NOT NULL"
    assert absent == "products.deleted_at IS NULL"


def test_ne_also_matches_null_fields():
    (sql,) = _sql(Product, {"category": {"$ne": "books"}})
    assert "products.category != 'books'" in sql
    assert "products.category IS NULL" in sql
    assert " OR " in sql


def test_ne_none_means_is_not_null():
    (sql,) = _sql(Product, {"deleted_at": {"$ne": None}})
    assert sql == "products.deleted_at IS NOT NULL"


def test_ordering_comparison_against_none_is_rejected():
    with pytest.raises(RepositoryError):
        compile_filter(Product, {"price": {"$gt": None}})


def test_contains_is_case_insensitive_and_escaped():
    (criterion,) = compile_filter(Product, {"name": {"$contains": "50%_off"}})
    compiled = criterion.compile(dialect=sqlite.dialect())
    assert "lower(products.name) LIKE lower(" in str(compiled)
    assert list(compiled.params.values()) == ["%50\\%\\_off%"]


def test_or_combines_subfilters():
    (sql,) = _sql(Product, {"$or": [{"category": "books"}, {"price": {"$lt": 5}}]})
    assert " OR " in sql
    assert "products.category = 'books'" in sql


def test_and_requires_list_of_filters():
    with pytest.raises(RepositoryError, match=r"\$and expects a list"):
        compile_filter(Product, {"$and": {"category": "books"}})


def test_text_search_matches_any_word_in_any_search_field():
    (sql,) = _sql(Product, {"$text": {"$search": "red lamp"}})
    for column in ("products.name", "products.description"):
        assert f"lower({column}) LIKE lower('%red%')" in sql
        assert f"lower({column}) LIKE lower('%lamp%')" in sql


def test_text_search_blank_term_matches_nothing():
    (criterion,) = compile_filter(Product, {"$text": {"$search": "   "}})
    assert isinstance(criterion, False_)


def test_text_search_requires_search_key():
    with pytest.raises(RepositoryError):
        compile_filter(User, {"$text": "ada"})


def test_unknown_operator_rejected():
    with pytest.raises(RepositoryError, match="Unsupported filter operator"):
        compile_filter(Product, {"price": {"$near": 1}})


def test_unknown_top_level_operator_rejected():
    with pytest.raises(RepositoryError, match="Unsupported filter operator"):
        compile_filter(Product, {"$where": "1=1"})


def test_unknown_field_rejected():
    with pytest.raises(RepositoryError, match="Unknown field"):
        compile_filter(User, {"nickname": "ada"})
