"""Pydantic schemas describing product payloads."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ProductPayload(BaseModel):
    """Caller-supplied product fields; ids and timestamps are ignored."""

    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1, max_length=200)
    description: str | None = None
    price: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    stock_quantity: int = Field(ge=0)
    category_id: str | None = None
    image_urls: list[str] = Field(default_factory=list)
    active: bool = True

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("Product name is required")
        return trimmed

    @field_validator("category_id")
    @classmethod
    def _blank_category_is_none(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()


class ProductCreate(ProductPayload):
    """Request body for POST /products."""


class ProductUpdate(ProductPayload):
    """Request body for PUT /products/{id} (full replacement)."""


class ProductRead(BaseModel):
    """Product as returned by the domain service and cached by id."""

    id: str
    name: str
    description: str | None
    price: Decimal
    stock_quantity: int
    category_id: str | None
    image_urls: tuple[str, ...]
    created_at: datetime
    updated_at: datetime
    active: bool

    model_config = ConfigDict(from_attributes=True, frozen=True)


__all__ = ["ProductCreate", "ProductPayload", "ProductRead", "ProductUpdate"]
