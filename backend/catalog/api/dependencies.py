"""Shared FastAPI dependency builders."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.clients.inventory import InventoryClient
from catalog.clients.notification import NotificationClient
from catalog.core.cache import CatalogCaches
from catalog.core.config import settings
from catalog.core.db import get_session
from catalog.repositories.category import CategoryRepository
from catalog.repositories.product import ProductRepository
from catalog.services.category import DefaultCategoryService
from catalog.services.product import DefaultProductService

_caches = CatalogCaches.from_settings(settings)
_inventory_client = InventoryClient.from_settings(settings)
_notification_client = NotificationClient.from_settings(settings)


def get_caches() -> CatalogCaches:
    """Return the process-wide caches."""
    return _caches


def get_inventory_client() -> InventoryClient:
    return _inventory_client


def get_notification_client() -> NotificationClient:
    return _notification_client


async def close_peer_clients() -> None:
    """Release pooled peer connections on shutdown."""
    await _inventory_client.aclose()
    await _notification_client.aclose()


async def get_product_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    caches: Annotated[CatalogCaches, Depends(get_caches)],
    inventory_client: Annotated[InventoryClient, Depends(get_inventory_client)],
    notification_client: Annotated[NotificationClient, Depends(get_notification_client)],
) -> DefaultProductService:
    return DefaultProductService(
        ProductRepository(session),
        caches,
        inventory_client,
        notification_client,
        low_stock_threshold=settings.low_stock_threshold,
    )


async def get_category_service(
    session: Annotated[AsyncSession, Depends(get_session)],
    caches: Annotated[CatalogCaches, Depends(get_caches)],
) -> DefaultCategoryService:
    return DefaultCategoryService(
        CategoryRepository(session),
        ProductRepository(session),
        caches.categories,
    )


__all__ = [
    "close_peer_clients",
    "get_caches",
    "get_category_service",
    "get_inventory_client",
    "get_notification_client",
    "get_product_service",
]
