"""Repository helpers for Category entities."""

from __future__ import annotations

from sqlalchemy import select

from catalog.models.category import Category, normalize_category_name
from catalog.repositories.base import BaseRepository


class CategoryRepository(BaseRepository[Category]):
    """Persistence primitives for Category objects."""

    model = Category

    async def get_by_name(self, name: str, *, exclude_id: str | None = None) -> Category | None:
        """Case-insensitive lookup, optionally ignoring one category."""
        stmt = select(Category).where(Category.normalized_name == normalize_category_name(name))
        if exclude_id is not None:
            stmt = stmt.where(Category.id != exclude_id)
        result = await self.session.execute(stmt.limit(1))
        return result.scalar_one_or_none()


__all__ = ["CategoryRepository"]
