"""Category CRUD endpoints."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Response, status

from catalog.api.dependencies import get_category_service
from catalog.schemas.category import CategoryCreate, CategoryRead, CategoryUpdate
from catalog.services.category import CategoryService

router = APIRouter(prefix="/categories", tags=["categories"])

CategoryId = Annotated[str, Path(description="Category identifier")]
Service = Annotated[CategoryService, Depends(get_category_service)]


@router.post(
    "",
    response_model=CategoryRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a category",
)
async def create_category(payload: CategoryCreate, service: Service) -> CategoryRead:
    return await service.create_category(payload)


@router.get("", response_model=list[CategoryRead], summary="List categories")
async def list_categories(service: Service) -> list[CategoryRead]:
    return [category async for category in service.list_categories()]


@router.get("/{category_id}", response_model=CategoryRead, summary="Get a category by id")
async def get_category(category_id: CategoryId, service: Service) -> CategoryRead:
    return await service.get_category(category_id)


@router.put("/{category_id}", response_model=CategoryRead, summary="Replace a category")
async def update_category(
    category_id: CategoryId,
    payload: CategoryUpdate,
    service: Service,
) -> CategoryRead:
    return await service.update_category(category_id, payload)


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a category that no product references",
)
async def delete_category(category_id: CategoryId, service: Service) -> Response:
    await service.delete_category(category_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


__all__ = ["router"]
