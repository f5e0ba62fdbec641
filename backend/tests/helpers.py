"""Shared helpers for tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from decimal import Decimal
from typing import Any

import httpx

from catalog.clients.base import build_http_client
from catalog.clients.inventory import InventoryClient
from catalog.clients.notification import NotificationClient
from catalog.repositories.category import CategoryRepository
from catalog.repositories.product import ProductRepository
from catalog.schemas.category import CategoryCreate
from catalog.schemas.product import ProductCreate

INVENTORY_BASE_URL = "http://inventory.test"
NOTIFICATION_BASE_URL = "http://notification.test"

Handler = Callable[[httpx.Request], httpx.Response]


def product_payload(**overrides: Any) -> ProductCreate:
    data: dict[str, Any] = {
        "name": "Espresso Machine",
        "description": "Dual boiler",
        "price": Decimal("499.99"),
        "stock_quantity": 25,
        "category_id": None,
        "image_urls": ["https://cdn.example.com/espresso.png"],
        "active": True,
    }
    data.update(overrides)
    return ProductCreate.model_validate(data)


def category_payload(**overrides: Any) -> CategoryCreate:
    data: dict[str, Any] = {"name": "Kitchen", "description": "Kitchen appliances"}
    data.update(overrides)
    return CategoryCreate.model_validate(data)


def inventory_client(handler: Handler) -> InventoryClient:
    return InventoryClient(
        build_http_client(INVENTORY_BASE_URL, transport=httpx.MockTransport(handler))
    )


def notification_client(handler: Handler) -> NotificationClient:
    return NotificationClient(
        build_http_client(NOTIFICATION_BASE_URL, transport=httpx.MockTransport(handler))
    )


def inventory_found(quantity: int) -> Handler:
    def handler(request: httpx.Request) -> httpx.Response:
        product_id = request.url.path.rsplit("/", 1)[-1]
        return httpx.Response(
            200,
            json={
                "productId": product_id,
                "quantityOnHand": quantity,
                "lastUpdatedAt": "2026-10-16T08:00:00Z",
            },
        )

    return handler


def respond_with(status_code: int, body: str = "") -> Handler:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(status_code, text=body)

    return handler


def raise_transport(exc_type: type[httpx.TransportError]) -> Handler:
    def handler(request: httpx.Request) -> httpx.Response:
        raise exc_type("simulated failure", request=request)

    return handler


class NotificationRecorder:
    """Mock notification peer capturing every POST body."""

    def __init__(self, status_code: int = 202) -> None:
        self.status_code = status_code
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code)

    @property
    def bodies(self) -> list[dict[str, Any]]:
        return [json.loads(request.content) for request in self.requests]


class CountingProductRepository(ProductRepository):
    """Product repository counting by-id store round-trips."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.get_calls = 0

    async def get(self, entity_id: str) -> Any:
        self.get_calls += 1
        return await super().get(entity_id)


class CountingCategoryRepository(CategoryRepository):
    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.get_calls = 0

    async def get(self, entity_id: str) -> Any:
        self.get_calls += 1
        return await super().get(entity_id)
