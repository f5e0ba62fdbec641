"""Repository helpers for Product entities."""

from __future__ import annotations

from sqlalchemy import Select, select

from catalog.models.product import Product
from catalog.repositories.base import BaseRepository


class ProductRepository(BaseRepository[Product]):
    """Persistence primitives for Product objects."""

    model = Product

    def active_products(self) -> Select[tuple[Product]]:
        """Base select every list query starts from."""
        return select(Product).where(Product.active.is_(True))

    async def count_by_category(self, category_id: str) -> int:
        return await self.count(Product.category_id == category_id)


__all__ = ["ProductRepository"]
