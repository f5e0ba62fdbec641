"""Tests for the product search query builder."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.exceptions.service_error import ProductServiceException, Validation
from catalog.models.product import Product
from catalog.services.query import (
    ProductSearchCriteria,
    SortDirection,
    build_product_search,
    escape_like,
)


async def _seed(session: AsyncSession) -> None:
    base = datetime(2026, 10, 1, tzinfo=timezone.utc)
    rows = [
        ("Red Kettle", "9.99", 5, "kitchen", True),
        ("Blue Kettle", "10.00", 12, "kitchen", True),
        ("Toaster", "15.50", 30, "kitchen", True),
        ("Desk Lamp", "20.00", 2, "office", True),
        ("Office Chair", "20.01", 8, "office", True),
        ("Retired Kettle", "12.00", 0, "kitchen", False),
        ("100%_Cotton Towel", "14.00", 40, None, True),
    ]
    for offset, (name, price, stock, category, active) in enumerate(rows):
        session.add(
            Product(
                name=name,
                description=None,
                price=Decimal(price),
                stock_quantity=stock,
                category_id=category,
                image_urls=[],
                active=active,
                created_at=base + timedelta(days=offset),
                updated_at=base + timedelta(days=offset),
            )
        )
    await session.commit()


async def _names(session: AsyncSession, criteria: ProductSearchCriteria) -> list[str]:
    result = await session.execute(build_product_search(criteria))
    return [product.name for product in result.scalars()]


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, SortDirection.ASC),
        ("asc", SortDirection.ASC),
        ("DESC", SortDirection.DESC),
        (" descending ", SortDirection.DESC),
        ("sideways", SortDirection.ASC),
        ("", SortDirection.ASC),
    ],
)
def test_sort_direction_parse_is_lenient(raw: str | None, expected: SortDirection) -> None:
    assert SortDirection.parse(raw) is expected


def test_escape_like_neutralises_wildcards() -> None:
    assert escape_like("50%_off\\") == "50\\%\\_off\\\\"


@pytest.mark.asyncio
async def test_no_filters_returns_only_active_products(db_session: AsyncSession) -> None:
    await _seed(db_session)

    names = await _names(db_session, ProductSearchCriteria())

    assert len(names) == 6
    assert "Retired Kettle" not in names


@pytest.mark.asyncio
async def test_price_range_is_inclusive(db_session: AsyncSession) -> None:
    await _seed(db_session)

    names = await _names(
        db_session,
        ProductSearchCriteria(min_price=Decimal("10"), max_price=Decimal("20")),
    )

    assert sorted(names) == ["100%_Cotton Towel", "Blue Kettle", "Desk Lamp", "Toaster"]


@pytest.mark.asyncio
async def test_open_ended_price_bounds(db_session: AsyncSession) -> None:
    await _seed(db_session)

    cheap = await _names(db_session, ProductSearchCriteria(max_price=Decimal("10")))
    pricey = await _names(db_session, ProductSearchCriteria(min_price=Decimal("20")))

    assert sorted(cheap) == ["Blue Kettle", "Red Kettle"]
    assert sorted(pricey) == ["Desk Lamp", "Office Chair"]


@pytest.mark.asyncio
async def test_filters_are_combined_with_and(db_session: AsyncSession) -> None:
    await _seed(db_session)

    names = await _names(
        db_session,
        ProductSearchCriteria(name="kettle", category_id="kitchen", min_price=Decimal("10")),
    )

    assert names == ["Blue Kettle"]


@pytest.mark.asyncio
async def test_name_filter_is_case_insensitive_literal_substring(
    db_session: AsyncSession,
) -> None:
    await _seed(db_session)

    assert sorted(await _names(db_session, ProductSearchCriteria(name="KETTLE"))) == [
        "Blue Kettle",
        "Red Kettle",
    ]
    assert await _names(db_session, ProductSearchCriteria(name="%_c")) == ["100%_Cotton Towel"]
    assert await _names(db_session, ProductSearchCriteria(name="_")) == ["100%_Cotton Towel"]


@pytest.mark.asyncio
async def test_blank_filters_count_as_absent(db_session: AsyncSession) -> None:
    await _seed(db_session)

    names = await _names(db_session, ProductSearchCriteria(name="  ", category_id=""))

    assert len(names) == 6


@pytest.mark.asyncio
async def test_sort_by_price_in_both_directions(db_session: AsyncSession) -> None:
    await _seed(db_session)

    ascending = await _names(db_session, ProductSearchCriteria(sort_by="price"))
    descending = await _names(
        db_session,
        ProductSearchCriteria(sort_by="price", direction=SortDirection.DESC),
    )

    assert ascending[0] == "Red Kettle"
    assert ascending[-1] == "Office Chair"
    assert descending == list(reversed(ascending))


@pytest.mark.asyncio
async def test_camel_case_sort_fields_are_accepted(db_session: AsyncSession) -> None:
    await _seed(db_session)

    names = await _names(db_session, ProductSearchCriteria(sort_by="stockQuantity"))

    assert names[0] == "Desk Lamp"
    assert names[-1] == "100%_Cotton Towel"


def test_unknown_sort_field_is_a_validation_error() -> None:
    with pytest.raises(ProductServiceException) as exc_info:
        build_product_search(ProductSearchCriteria(sort_by="password"))

    assert isinstance(exc_info.value.error, Validation)
    assert exc_info.value.error.field == "sort_by"


def test_inverted_price_range_is_a_validation_error() -> None:
    with pytest.raises(ProductServiceException) as exc_info:
        build_product_search(
            ProductSearchCriteria(min_price=Decimal("30"), max_price=Decimal("10"))
        )

    assert exc_info.value.error == Validation(
        field="min_price",
        reason="must not exceed max_price (30 > 10)",
    )
