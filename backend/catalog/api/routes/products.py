"""Product endpoints: CRUD, search and convenience listings."""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, Response, status

from catalog.api.dependencies import get_product_service
from catalog.schemas.product import ProductCreate, ProductRead, ProductUpdate
from catalog.services.product import ProductService
from catalog.services.query import ProductSearchCriteria, SortDirection

router = APIRouter(prefix="/products", tags=["products"])

ProductId = Annotated[str, Path(description="Product identifier")]
Service = Annotated[ProductService, Depends(get_product_service)]


@router.post(
    "",
    response_model=ProductRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a product",
)
async def create_product(payload: ProductCreate, service: Service) -> ProductRead:
    return await service.create_product(payload)


@router.get(
    "",
    response_model=list[ProductRead],
    summary="Search active products",
)
async def search_products(
    service: Service,
    name: Annotated[str | None, Query(description="Case-insensitive name substring.")] = None,
    category_id: Annotated[str | None, Query(description="Exact category id.")] = None,
    min_price: Annotated[Decimal | None, Query(description="Inclusive lower bound.")] = None,
    max_price: Annotated[Decimal | None, Query(description="Inclusive upper bound.")] = None,
    sort_by: Annotated[str | None, Query(description="Field to sort by.")] = None,
    direction: Annotated[str | None, Query(description="asc or desc; defaults to asc.")] = None,
) -> list[ProductRead]:
    criteria = ProductSearchCriteria(
        name=name,
        category_id=category_id,
        min_price=min_price,
        max_price=max_price,
        sort_by=sort_by,
        direction=SortDirection.parse(direction),
    )
    return [product async for product in service.search_products(criteria)]


@router.get(
    "/search",
    response_model=list[ProductRead],
    summary="Find active products whose name contains the query",
)
async def search_by_name(
    service: Service,
    query: Annotated[str, Query(min_length=1, description="Name substring.")],
) -> list[ProductRead]:
    return [product async for product in service.search_by_name(query)]


@router.get(
    "/category/{category_id}",
    response_model=list[ProductRead],
    summary="List active products in a category",
)
async def list_by_category(
    category_id: Annotated[str, Path(description="Category identifier")],
    service: Service,
) -> list[ProductRead]:
    return [product async for product in service.list_by_category(category_id)]


@router.get(
    "/price-range",
    response_model=list[ProductRead],
    summary="List active products priced within an inclusive range",
)
async def list_by_price_range(
    service: Service,
    min_price: Annotated[Decimal, Query()],
    max_price: Annotated[Decimal, Query()],
) -> list[ProductRead]:
    return [product async for product in service.list_by_price_range(min_price, max_price)]


@router.get(
    "/low-stock",
    response_model=list[ProductRead],
    summary="List active products at or below a stock level",
)
async def list_low_stock(
    service: Service,
    max_stock: Annotated[int, Query(description="Inclusive stock ceiling.")],
) -> list[ProductRead]:
    return [product async for product in service.list_low_stock(max_stock)]


@router.get(
    "/{product_id}",
    response_model=ProductRead,
    summary="Get a product by id",
)
async def get_product(product_id: ProductId, service: Service) -> ProductRead:
    return await service.get_product(product_id)


@router.get(
    "/{product_id}/inventory",
    response_model=ProductRead,
    summary="Get a product with live stock from the inventory service",
)
async def get_product_with_inventory(product_id: ProductId, service: Service) -> ProductRead:
    return await service.get_product_with_inventory(product_id)


@router.put(
    "/{product_id}",
    response_model=ProductRead,
    summary="Replace a product",
)
async def update_product(
    product_id: ProductId,
    payload: ProductUpdate,
    service: Service,
) -> ProductRead:
    return await service.update_product(product_id, payload)


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a product",
)
async def delete_product(product_id: ProductId, service: Service) -> Response:
    await service.delete_product(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
