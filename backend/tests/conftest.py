from __future__ import annotations

import os
from typing import Final

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

_TEST_ENV_VARS: Final[dict[str, str]] = {
    "APP_ENV": "test",
    "DATABASE_URL": "sqlite+aiosqlite:///:memory:",
    "INVENTORY_SERVICE_URL": "http://inventory.test",
    "NOTIFICATION_SERVICE_URL": "http://notification.test",
}

for key, value in _TEST_ENV_VARS.items():
    os.environ.setdefault(key, value)

from catalog.core.cache import CatalogCaches  # noqa: E402
from catalog.models.base import Base  # noqa: E402


@pytest_asyncio.fixture()
async def db_session() -> AsyncSession:
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    Session = async_sessionmaker(engine, expire_on_commit=False)

    async with Session() as session:
        yield session

    await engine.dispose()


@pytest.fixture()
def caches() -> CatalogCaches:
    return CatalogCaches(ttl_seconds=600, max_entries=100)
