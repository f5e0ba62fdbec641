"""
Product domain service.

Reads go through the ``products`` cache; the inventory-enriched read has its
own ``product_inventory`` namespace so the two shapes never mix. Updates that
push stock across the low-stock threshold send a notification whose failure
is logged but never fails the update.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from decimal import Decimal
from typing import Protocol

from sqlalchemy import Select

from catalog.clients.inventory import InventoryClient
from catalog.clients.notification import NotificationClient
from catalog.core.cache import CatalogCaches
from catalog.exceptions.service_error import (
    NotFound,
    ProductServiceException,
    Validation,
)
from catalog.models.product import Product
from catalog.repositories.product import ProductRepository
from catalog.schemas.peer import LowStockNotification
from catalog.schemas.product import ProductCreate, ProductRead, ProductUpdate
from catalog.services.base import DomainService, utcnow
from catalog.services.query import (
    ProductSearchCriteria,
    build_product_search,
    check_price_range,
    name_contains,
)

logger = logging.getLogger("catalog.services.products")

PRODUCT_ENTITY = "Product"
DEFAULT_LOW_STOCK_THRESHOLD = 10


def crosses_below(previous: int, current: int, threshold: int) -> bool:
    """True only for a move from at-or-above ``threshold`` to below it."""
    return previous >= threshold > current


class ProductService(Protocol):
    async def create_product(self, payload: ProductCreate) -> ProductRead: ...

    async def get_product(self, product_id: str) -> ProductRead: ...

    async def get_product_with_inventory(self, product_id: str) -> ProductRead: ...

    def search_products(self, criteria: ProductSearchCriteria) -> AsyncIterator[ProductRead]: ...

    def search_by_name(self, query: str) -> AsyncIterator[ProductRead]: ...

    def list_by_category(self, category_id: str) -> AsyncIterator[ProductRead]: ...

    def list_by_price_range(
        self, min_price: Decimal, max_price: Decimal
    ) -> AsyncIterator[ProductRead]: ...

    def list_active(self) -> AsyncIterator[ProductRead]: ...

    def list_low_stock(self, max_stock: int) -> AsyncIterator[ProductRead]: ...

    async def update_product(self, product_id: str, payload: ProductUpdate) -> ProductRead: ...

    async def notify_low_stock(self, product: ProductRead) -> None: ...

    async def delete_product(self, product_id: str) -> None: ...


class DefaultProductService(DomainService):
    """Product operations over the store, the caches and the two peers."""

    exception_type = ProductServiceException
    repository: ProductRepository

    def __init__(
        self,
        repository: ProductRepository,
        caches: CatalogCaches,
        inventory_client: InventoryClient,
        notification_client: NotificationClient,
        *,
        low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
    ) -> None:
        super().__init__(repository)
        self.caches = caches
        self.inventory_client = inventory_client
        self.notification_client = notification_client
        self.low_stock_threshold = low_stock_threshold

    async def create_product(self, payload: ProductCreate) -> ProductRead:
        async with self._guard("create product", write=True):
            now = utcnow()
            product = Product(
                name=payload.name,
                description=payload.description,
                price=payload.price,
                stock_quantity=payload.stock_quantity,
                category_id=payload.category_id,
                image_urls=list(payload.image_urls),
                active=payload.active,
                created_at=now,
                updated_at=now,
            )
            await self.repository.add(product)
            await self.repository.commit()

        logger.info("Product created", extra={"product_id": product.id})
        return ProductRead.model_validate(product)

    async def get_product(self, product_id: str) -> ProductRead:
        return await self.caches.products.get_or_load(product_id, lambda: self._load(product_id))

    async def get_product_with_inventory(self, product_id: str) -> ProductRead:
        """
        Product with its stock replaced by the inventory service's live count.

        An inventory 404 keeps the stored stock. Any other peer failure raises
        ``ExternalService`` and nothing is cached.
        """

        async def load() -> ProductRead:
            product = await self.get_product(product_id)
            async with self._guard(f"get inventory for product {product_id}"):
                status = await self.inventory_client.get_inventory_status(product_id)
            if status is None:
                logger.info(
                    "No live inventory, using stored stock",
                    extra={"product_id": product_id},
                )
                return product
            return product.model_copy(update={"stock_quantity": status.quantity_on_hand})

        return await self.caches.product_inventory.get_or_load(product_id, load)

    def search_products(self, criteria: ProductSearchCriteria) -> AsyncIterator[ProductRead]:
        stmt = build_product_search(criteria)
        return self._stream(stmt, "search products")

    def search_by_name(self, query: str) -> AsyncIterator[ProductRead]:
        stmt = self.repository.active_products().where(name_contains(query))
        return self._stream(stmt, "search products by name")

    def list_by_category(self, category_id: str) -> AsyncIterator[ProductRead]:
        stmt = self.repository.active_products().where(Product.category_id == category_id)
        return self._stream(stmt, f"list products in category {category_id}")

    def list_by_price_range(
        self, min_price: Decimal, max_price: Decimal
    ) -> AsyncIterator[ProductRead]:
        check_price_range(min_price, max_price)
        stmt = self.repository.active_products().where(
            Product.price >= min_price,
            Product.price <= max_price,
        )
        return self._stream(stmt, "list products by price range")

    def list_active(self) -> AsyncIterator[ProductRead]:
        return self._stream(self.repository.active_products(), "list active products")

    def list_low_stock(self, max_stock: int) -> AsyncIterator[ProductRead]:
        if max_stock < 0:
            raise ProductServiceException(
                Validation(field="max_stock", reason="must be greater than or equal to 0")
            )
        stmt = self.repository.active_products().where(Product.stock_quantity <= max_stock)
        return self._stream(stmt, "list low stock products")

    async def update_product(self, product_id: str, payload: ProductUpdate) -> ProductRead:
        async with self._guard(f"update product {product_id}", write=True):
            product = await self.repository.get(product_id)
            if product is None:
                raise self._not_found(product_id)

            previous_stock = product.stock_quantity
            product.name = payload.name
            product.description = payload.description
            product.price = payload.price
            product.stock_quantity = payload.stock_quantity
            product.category_id = payload.category_id
            product.image_urls = list(payload.image_urls)
            product.active = payload.active
            product.updated_at = utcnow()
            await self.repository.commit()
            result = ProductRead.model_validate(product)

        self.caches.evict_product(product_id)

        if crosses_below(previous_stock, result.stock_quantity, self.low_stock_threshold):
            logger.info(
                "Stock fell below threshold",
                extra={
                    "product_id": product_id,
                    "previous_stock": previous_stock,
                    "current_stock": result.stock_quantity,
                    "threshold": self.low_stock_threshold,
                },
            )
            try:
                await self.notify_low_stock(result)
            except ProductServiceException as exc:
                logger.warning(
                    "Low stock notification failed; update kept",
                    extra={"product_id": product_id, "error_message": exc.error.message},
                )

        return result

    async def notify_low_stock(self, product: ProductRead) -> None:
        notification = LowStockNotification(
            product_id=product.id,
            product_name=product.name,
            current_stock=product.stock_quantity,
        )
        async with self._guard(f"notify low stock for product {product.id}"):
            await self.notification_client.send_low_stock_alert(notification)
        logger.info("Low stock notification sent", extra={"product_id": product.id})

    async def delete_product(self, product_id: str) -> None:
        async with self._guard(f"delete product {product_id}", write=True):
            product = await self.repository.get(product_id)
            if product is None:
                raise self._not_found(product_id)
            await self.repository.delete(product)
            await self.repository.commit()

        self.caches.evict_product(product_id)
        logger.info("Product deleted", extra={"product_id": product_id})

    async def _load(self, product_id: str) -> ProductRead:
        async with self._guard(f"get product {product_id}"):
            product = await self.repository.get(product_id)
        if product is None:
            raise self._not_found(product_id)
        return ProductRead.model_validate(product)

    async def _stream(
        self, stmt: Select[tuple[Product]], operation: str
    ) -> AsyncIterator[ProductRead]:
        async with self._guard(operation):
            products = await self.repository.find(stmt)
        for product in products:
            yield ProductRead.model_validate(product)

    def _not_found(self, product_id: str) -> ProductServiceException:
        return ProductServiceException(NotFound(entity=PRODUCT_ENTITY, id=product_id))


__all__ = [
    "DEFAULT_LOW_STOCK_THRESHOLD",
    "DefaultProductService",
    "ProductService",
    "crosses_below",
]
