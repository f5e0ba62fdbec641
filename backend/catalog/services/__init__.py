"""Domain services orchestrating store, cache and peer calls."""

from catalog.services.category import CategoryService, DefaultCategoryService
from catalog.services.product import DefaultProductService, ProductService
from catalog.services.query import ProductSearchCriteria, SortDirection

__all__ = [
    "CategoryService",
    "DefaultCategoryService",
    "DefaultProductService",
    "ProductSearchCriteria",
    "ProductService",
    "SortDirection",
]
