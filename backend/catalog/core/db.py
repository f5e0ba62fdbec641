"""Async engine and session factory for the catalog store."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from catalog import models  # noqa: F401  (registers tables on Base.metadata)
from catalog.core.config import settings
from catalog.models.base import Base


def build_engine(database_url: str, *, echo: bool = False) -> AsyncEngine:
    """Create an engine; SQLite URLs get the options aiosqlite needs."""
    options: dict[str, Any] = {"echo": echo}
    if database_url.startswith("sqlite"):
        options["connect_args"] = {"check_same_thread": False}
    else:
        options["pool_pre_ping"] = True
    return create_async_engine(database_url, **options)


engine: AsyncEngine = build_engine(settings.database_url, echo=settings.debug)
AsyncSessionFactory = async_sessionmaker(engine, expire_on_commit=False)


async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding one session per request."""

    async with AsyncSessionFactory() as session:
        yield session


async def create_schema(target: AsyncEngine | None = None) -> None:
    """Create missing tables; deployed environments use Alembic instead."""

    async with (target or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_engine() -> None:
    await engine.dispose()


__all__ = [
    "AsyncSessionFactory",
    "build_engine",
    "create_schema",
    "dispose_engine",
    "engine",
    "get_session",
]
