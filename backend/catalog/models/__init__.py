"""Database models of the catalog."""

from catalog.models.category import Category
from catalog.models.product import Product

__all__ = ["Category", "Product"]
