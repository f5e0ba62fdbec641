"""Multi-criteria product search translated into a SQLAlchemy select."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import StrEnum

from sqlalchemy import ColumnElement, Select, select

from catalog.exceptions.service_error import ProductServiceException, Validation
from catalog.models.product import Product

LIKE_ESCAPE = "\\"

SORTABLE_COLUMNS: dict[str, ColumnElement] = {
    "name": Product.name,
    "price": Product.price,
    "stock_quantity": Product.stock_quantity,
    "stockQuantity": Product.stock_quantity,
    "category_id": Product.category_id,
    "categoryId": Product.category_id,
    "created_at": Product.created_at,
    "createdAt": Product.created_at,
    "updated_at": Product.updated_at,
    "updatedAt": Product.updated_at,
}


class SortDirection(StrEnum):
    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: str | None) -> SortDirection:
        """Lenient parse; anything unrecognised sorts ascending."""
        if value is None:
            return cls.ASC
        normalized = value.strip().lower()
        if normalized in ("desc", "descending"):
            return cls.DESC
        return cls.ASC


@dataclass(frozen=True, slots=True)
class ProductSearchCriteria:
    name: str | None = None
    category_id: str | None = None
    min_price: Decimal | None = None
    max_price: Decimal | None = None
    sort_by: str | None = None
    direction: SortDirection = SortDirection.ASC


def escape_like(value: str) -> str:
    """Make ``value`` match literally inside a LIKE pattern."""
    return (
        value.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )


def name_contains(value: str) -> ColumnElement[bool]:
    return Product.name.ilike(f"%{escape_like(value)}%", escape=LIKE_ESCAPE)


def check_price_range(min_price: Decimal | None, max_price: Decimal | None) -> None:
    if min_price is not None and max_price is not None and min_price > max_price:
        raise ProductServiceException(
            Validation(
                field="min_price",
                reason=f"must not exceed max_price ({min_price} > {max_price})",
            )
        )


def build_product_search(criteria: ProductSearchCriteria) -> Select[tuple[Product]]:
    """
    Compose the search select.

    Supplied filters are ANDed together with the mandatory ``active`` predicate.
    Price bounds are inclusive and independent. Without ``sort_by`` the rows
    come back in the store's natural order.
    """
    check_price_range(criteria.min_price, criteria.max_price)

    stmt = select(Product).where(Product.active.is_(True))

    if criteria.name and criteria.name.strip():
        stmt = stmt.where(name_contains(criteria.name.strip()))
    if criteria.category_id and criteria.category_id.strip():
        stmt = stmt.where(Product.category_id == criteria.category_id.strip())
    if criteria.min_price is not None:
        stmt = stmt.where(Product.price >= criteria.min_price)
    if criteria.max_price is not None:
        stmt = stmt.where(Product.price <= criteria.max_price)

    if criteria.sort_by:
        column = SORTABLE_COLUMNS.get(criteria.sort_by.strip())
        if column is None:
            raise ProductServiceException(
                Validation(field="sort_by", reason=f"unsupported sort field '{criteria.sort_by}'")
            )
        descending = criteria.direction is SortDirection.DESC
        stmt = stmt.order_by(column.desc() if descending else column.asc())

    return stmt


__all__ = [
    "ProductSearchCriteria",
    "SORTABLE_COLUMNS",
    "SortDirection",
    "build_product_search",
    "check_price_range",
    "escape_like",
    "name_contains",
]
