"""Category CRUD with duplicate-name and in-use protection."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from typing import Protocol

from sqlalchemy.exc import IntegrityError

from catalog.core.cache import LocalCache
from catalog.exceptions.service_error import (
    BusinessRule,
    CategoryServiceException,
    NotFound,
    Validation,
)
from catalog.models.category import Category
from catalog.repositories.category import CategoryRepository
from catalog.repositories.product import ProductRepository
from catalog.schemas.category import CategoryCreate, CategoryRead, CategoryUpdate
from catalog.services.base import DomainService, utcnow

logger = logging.getLogger("catalog.services.categories")

CATEGORY_ENTITY = "Category"
DUPLICATE_NAME_RULE = "duplicate-category-name"
CATEGORY_IN_USE_RULE = "category-in-use"


class CategoryService(Protocol):
    async def create_category(self, payload: CategoryCreate) -> CategoryRead: ...

    async def get_category(self, category_id: str) -> CategoryRead: ...

    def list_categories(self) -> AsyncIterator[CategoryRead]: ...

    async def update_category(self, category_id: str, payload: CategoryUpdate) -> CategoryRead: ...

    async def delete_category(self, category_id: str) -> None: ...


class DefaultCategoryService(DomainService):
    """Category operations over the store, read-through the categories cache."""

    exception_type = CategoryServiceException
    repository: CategoryRepository

    def __init__(
        self,
        repository: CategoryRepository,
        product_repository: ProductRepository,
        cache: LocalCache[CategoryRead],
    ) -> None:
        super().__init__(repository)
        self.product_repository = product_repository
        self.cache = cache

    async def create_category(self, payload: CategoryCreate) -> CategoryRead:
        async with self._guard("create category", write=True):
            await self._ensure_unique_name(payload.name)

            now = utcnow()
            category = Category(
                description=payload.description,
                parent_category_id=payload.parent_category_id,
                active=payload.active,
                created_at=now,
                updated_at=now,
            )
            category.rename(payload.name)
            try:
                await self.repository.add(category)
                await self.repository.commit()
            except IntegrityError as exc:
                raise self._duplicate_name(payload.name) from exc

        logger.info("Category created", extra={"category_id": category.id})
        return CategoryRead.model_validate(category)

    async def get_category(self, category_id: str) -> CategoryRead:
        return await self.cache.get_or_load(category_id, lambda: self._load(category_id))

    async def list_categories(self) -> AsyncIterator[CategoryRead]:
        async with self._guard("list categories"):
            categories = await self.repository.list_all()
        for category in categories:
            yield CategoryRead.model_validate(category)

    async def update_category(self, category_id: str, payload: CategoryUpdate) -> CategoryRead:
        async with self._guard(f"update category {category_id}", write=True):
            category = await self.repository.get(category_id)
            if category is None:
                raise self._not_found(category_id)
            if payload.parent_category_id == category_id:
                raise self._fail(
                    Validation(
                        field="parent_category_id",
                        reason="a category cannot be its own parent",
                    )
                )
            await self._ensure_unique_name(payload.name, exclude_id=category_id)

            category.rename(payload.name)
            category.description = payload.description
            category.parent_category_id = payload.parent_category_id
            category.updated_at = utcnow()
            try:
                await self.repository.commit()
            except IntegrityError as exc:
                raise self._duplicate_name(payload.name) from exc
            result = CategoryRead.model_validate(category)

        self.cache.delete(category_id)
        return result

    async def delete_category(self, category_id: str) -> None:
        async with self._guard(f"delete category {category_id}", write=True):
            category = await self.repository.get(category_id)
            if category is None:
                raise self._not_found(category_id)

            in_use = await self.product_repository.count_by_category(category_id)
            if in_use:
                logger.info(
                    "Refusing to delete category in use",
                    extra={"category_id": category_id, "product_count": in_use},
                )
                raise self._fail(
                    BusinessRule(
                        rule=CATEGORY_IN_USE_RULE,
                        details=f"Category {category_id} is referenced by {in_use} product(s)",
                    )
                )

            await self.repository.delete(category)
            await self.repository.commit()

        self.cache.delete(category_id)

    async def _load(self, category_id: str) -> CategoryRead:
        async with self._guard(f"get category {category_id}"):
            category = await self.repository.get(category_id)
        if category is None:
            raise self._not_found(category_id)
        return CategoryRead.model_validate(category)

    async def _ensure_unique_name(self, name: str, *, exclude_id: str | None = None) -> None:
        if await self.repository.get_by_name(name, exclude_id=exclude_id) is not None:
            raise self._duplicate_name(name)

    def _duplicate_name(self, name: str) -> CategoryServiceException:
        return CategoryServiceException(
            BusinessRule(
                rule=DUPLICATE_NAME_RULE,
                details=f"A category named '{name}' already exists",
            )
        )

    def _not_found(self, category_id: str) -> CategoryServiceException:
        return CategoryServiceException(NotFound(entity=CATEGORY_ENTITY, id=category_id))


__all__ = [
    "CATEGORY_IN_USE_RULE",
    "CategoryService",
    "DUPLICATE_NAME_RULE",
    "DefaultCategoryService",
]
