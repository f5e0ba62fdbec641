"""Product model storing sellable catalog items."""

from __future__ import annotations

from decimal import Decimal
from typing import Callable, cast

from sqlalchemy import JSON, Boolean, CheckConstraint, Index, Integer, Numeric, String, Text, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.mutable import MutableList
from sqlalchemy.orm import Mapped, mapped_column

from catalog.models.base import ENTITY_ID_LENGTH, Base, EntityMixin, TimestampMixin

_jsonb_factory: Callable[..., JSON] = cast(Callable[..., JSON], JSONB)
UrlListType = MutableList.as_mutable(
    JSON().with_variant(_jsonb_factory(astext_type=Text()), "postgresql")
)


class Product(EntityMixin, TimestampMixin, Base):
    """A catalog item; ``active`` doubles as the soft-delete marker."""

    __tablename__ = "products"

    name: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2, asdecimal=True), nullable=False)
    stock_quantity: Mapped[int] = mapped_column(Integer, nullable=False)

    # Weak reference: no foreign key, the category may not exist.
    category_id: Mapped[str | None] = mapped_column(String(ENTITY_ID_LENGTH))

    image_urls: Mapped[list[str]] = mapped_column(UrlListType, default=list, nullable=False)

    active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=text("true"),
    )

    __table_args__ = (
        CheckConstraint("price > 0", name="price_positive"),
        CheckConstraint("stock_quantity >= 0", name="stock_non_negative"),
        Index("ix_products_category_id", "category_id"),
        Index("ix_products_active", "active"),
    )

    def __repr__(self) -> str:
        return f"Product(id={self.id!r}, name={self.name!r}, stock={self.stock_quantity})"


__all__ = ["Product"]
