"""Common persistence primitives shared by the catalog repositories."""

from __future__ import annotations

from collections.abc import Awaitable
from typing import Any, ClassVar, Generic, TypeVar, cast

from sqlalchemy import ColumnElement, Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.models.base import EntityMixin

ModelT = TypeVar("ModelT", bound=EntityMixin)


class BaseRepository(Generic[ModelT]):
    """Store operations for one entity type on top of an AsyncSession.

    Mutations only flush; the owning service decides when to commit.
    """

    model: ClassVar[type[Any]]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def add(self, instance: ModelT) -> ModelT:
        """Add model to session handling async mocks in tests."""
        add_result = cast(object, self.session.add(instance))
        if isinstance(add_result, Awaitable):
            await add_result
        await self.session.flush()
        return instance

    async def get(self, entity_id: str) -> ModelT | None:
        return cast(ModelT | None, await self.session.get(self.model, entity_id))

    async def list_all(self) -> list[ModelT]:
        result = await self.session.execute(select(self.model))
        return list(result.scalars())

    async def find(self, stmt: Select[Any]) -> list[ModelT]:
        """Run a prepared select (predicates plus optional ordering)."""
        result = await self.session.execute(stmt)
        return list(result.scalars())

    async def count(self, *criteria: ColumnElement[bool]) -> int:
        stmt = select(func.count()).select_from(self.model).where(*criteria)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def delete(self, instance: ModelT) -> None:
        await self.session.delete(instance)
        await self.session.flush()

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()


__all__ = ["BaseRepository"]
