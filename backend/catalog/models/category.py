"""Category model grouping products."""

from __future__ import annotations

from sqlalchemy import Boolean, String, Text, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from catalog.models.base import ENTITY_ID_LENGTH, Base, EntityMixin, TimestampMixin


def normalize_category_name(name: str) -> str:
    """Key used for case-insensitive uniqueness of category names."""
    return name.strip().lower()


class Category(EntityMixin, TimestampMixin, Base):
    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    normalized_name: Mapped[str] = mapped_column(String(100), nullable=False)
    description: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        default="",
        server_default=text("''"),
    )
    # Weak reference to another category, no cycle detection.
    parent_category_id: Mapped[str | None] = mapped_column(String(ENTITY_ID_LENGTH))
    active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=text("true"),
    )

    __table_args__ = (UniqueConstraint("normalized_name", name="uq_categories_normalized_name"),)

    def rename(self, name: str) -> None:
        self.name = name
        self.normalized_name = normalize_category_name(name)


__all__ = ["Category", "normalize_category_name"]
