"""Declarative base classes and shared SQLAlchemy mixins."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import DateTime, MetaData, String
from sqlalchemy.engine import Dialect
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

ENTITY_ID_LENGTH = 32


def new_entity_id() -> str:
    """Opaque identifier assigned by the store on first persist."""
    return uuid.uuid4().hex


class UTCDateTime(TypeDecorator[datetime]):
    """Timezone-aware datetime that always round-trips as UTC.

    Backends without a zoned timestamp type (SQLite) hand values back naive;
    those are read as UTC.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        return _as_utc(value)

    def process_result_value(self, value: Any, dialect: Dialect) -> datetime | None:
        return _as_utc(value)


def _as_utc(value: datetime | None) -> datetime | None:
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Declarative base with shared metadata naming convention."""

    metadata = MetaData(naming_convention=naming_convention)


class EntityMixin:
    """String primary key generated on insert."""

    id: Mapped[str] = mapped_column(
        String(ENTITY_ID_LENGTH),
        primary_key=True,
        default=new_entity_id,
    )


class TimestampMixin:
    """Created/updated timestamps.

    Values are stamped by the domain services; the store never rewrites them.
    """

    created_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(UTCDateTime(), nullable=False)


__all__ = [
    "Base",
    "ENTITY_ID_LENGTH",
    "EntityMixin",
    "TimestampMixin",
    "UTCDateTime",
    "new_entity_id",
]
