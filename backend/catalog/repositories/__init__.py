"""Repository layer wrapping SQLAlchemy persistence."""

from catalog.repositories.category import CategoryRepository
from catalog.repositories.product import ProductRepository

__all__ = ["CategoryRepository", "ProductRepository"]
