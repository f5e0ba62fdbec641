"""Pydantic schemas for catalog payloads and peer wire formats."""

from catalog.schemas.category import CategoryCreate, CategoryRead, CategoryUpdate
from catalog.schemas.peer import InventoryStatus, LowStockNotification
from catalog.schemas.product import ProductCreate, ProductRead, ProductUpdate

__all__ = [
    "CategoryCreate",
    "CategoryRead",
    "CategoryUpdate",
    "InventoryStatus",
    "LowStockNotification",
    "ProductCreate",
    "ProductRead",
    "ProductUpdate",
]
