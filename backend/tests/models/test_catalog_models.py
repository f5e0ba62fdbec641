from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

from sqlalchemy.dialects import sqlite

from catalog.models.base import Base, UTCDateTime, new_entity_id
from catalog.models.category import Category, normalize_category_name
from catalog.models.product import Product


def test_new_entity_ids_are_unique_hex() -> None:
    first, second = new_entity_id(), new_entity_id()

    assert first != second
    assert len(first) == 32
    int(first, 16)


def test_normalize_category_name() -> None:
    assert normalize_category_name("  Home & Garden ") == "home & garden"


def test_category_rename_keeps_normalized_name_in_sync() -> None:
    category = Category()
    category.rename("Kitchen")
    category.rename("KITCHEN Tools")

    assert category.name == "KITCHEN Tools"
    assert category.normalized_name == "kitchen tools"


def test_product_repr_mentions_identity_and_stock() -> None:
    product = Product(id="p1", name="Kettle", price=Decimal("1.00"), stock_quantity=3)

    assert repr(product) == "Product(id='p1', name='Kettle', stock=3)"


def test_metadata_declares_catalog_constraints() -> None:
    products = Base.metadata.tables["products"]
    categories = Base.metadata.tables["categories"]

    product_constraints = {str(constraint.name) for constraint in products.constraints}
    category_constraints = {str(constraint.name) for constraint in categories.constraints}
    assert "ck_products_price_positive" in product_constraints
    assert "ck_products_stock_non_negative" in product_constraints
    assert "uq_categories_normalized_name" in category_constraints
    assert {index.name for index in products.indexes} == {
        "ix_products_category_id",
        "ix_products_active",
    }
    assert not products.c.category_id.foreign_keys


def test_utc_datetime_normalizes_bound_and_loaded_values() -> None:
    column_type = UTCDateTime()
    dialect = sqlite.dialect()
    naive = datetime(2026, 10, 16, 12, 0, 0)
    offset = datetime(2026, 10, 16, 14, 0, 0, tzinfo=timezone(timedelta(hours=2)))

    loaded = column_type.process_result_value(naive, dialect)
    bound = column_type.process_bind_param(offset, dialect)

    assert loaded == datetime(2026, 10, 16, 12, 0, 0, tzinfo=timezone.utc)
    assert bound is not None and bound.tzinfo is timezone.utc
    assert bound.hour == 12
    assert column_type.process_result_value(None, dialect) is None
