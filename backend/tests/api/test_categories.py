from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.api.dependencies import get_category_service, get_product_service
from catalog.core.cache import CatalogCaches
from catalog.main import app
from catalog.repositories.category import CategoryRepository
from catalog.repositories.product import ProductRepository
from catalog.services.category import DefaultCategoryService
from catalog.services.product import DefaultProductService
from tests.helpers import inventory_client, notification_client, respond_with


@pytest_asyncio.fixture()
async def client(db_session: AsyncSession, caches: CatalogCaches) -> AsyncIterator[AsyncClient]:
    def _category_override() -> DefaultCategoryService:
        return DefaultCategoryService(
            CategoryRepository(db_session),
            ProductRepository(db_session),
            caches.categories,
        )

    def _product_override() -> DefaultProductService:
        return DefaultProductService(
            ProductRepository(db_session),
            caches,
            inventory_client(respond_with(404)),
            notification_client(respond_with(202)),
        )

    app.dependency_overrides[get_category_service] = _category_override
    app.dependency_overrides[get_product_service] = _product_override
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac
    app.dependency_overrides.pop(get_category_service, None)
    app.dependency_overrides.pop(get_product_service, None)


@pytest.mark.asyncio
async def test_category_crud_flow(client: AsyncClient) -> None:
    created = await client.post(
        "/api/v1/categories",
        json={"name": "Kitchen", "description": "Cooking"},
    )
    assert created.status_code == 201
    category_id = created.json()["id"]

    fetched = await client.get(f"/api/v1/categories/{category_id}")
    listed = await client.get("/api/v1/categories")
    updated = await client.put(
        f"/api/v1/categories/{category_id}",
        json={"name": "Cookware", "description": "Pots"},
    )
    deleted = await client.delete(f"/api/v1/categories/{category_id}")
    missing = await client.get(f"/api/v1/categories/{category_id}")

    assert fetched.json()["name"] == "Kitchen"
    assert [item["id"] for item in listed.json()] == [category_id]
    assert updated.json()["name"] == "Cookware"
    assert deleted.status_code == 204
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_duplicate_category_name_is_bad_request(client: AsyncClient) -> None:
    await client.post("/api/v1/categories", json={"name": "Kitchen"})

    response = await client.post("/api/v1/categories", json={"name": "KITCHEN"})

    assert response.status_code == 400
    error = response.json()["error"]
    assert error["code"] == "BUSINESS_RULE_VIOLATION"
    assert error["details"] == {"rule": "duplicate-category-name"}


@pytest.mark.asyncio
async def test_category_in_use_cannot_be_deleted(client: AsyncClient) -> None:
    category = (await client.post("/api/v1/categories", json={"name": "Kitchen"})).json()
    await client.post(
        "/api/v1/products",
        json={
            "name": "Whisk",
            "price": "4.50",
            "stock_quantity": 12,
            "category_id": category["id"],
        },
    )

    response = await client.delete(f"/api/v1/categories/{category['id']}")
    still_there = await client.get(f"/api/v1/categories/{category['id']}")

    assert response.status_code == 400
    assert response.json()["error"]["details"] == {"rule": "category-in-use"}
    assert still_there.status_code == 200


@pytest.mark.asyncio
async def test_blank_category_name_is_rejected(client: AsyncClient) -> None:
    response = await client.post("/api/v1/categories", json={"name": "   "})

    assert response.status_code == 422
    assert "name" in response.json()["error"]["details"]
