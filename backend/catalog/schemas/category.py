"""Pydantic schemas describing category payloads."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CategoryPayload(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = Field(min_length=1, max_length=100)
    description: str = ""
    parent_category_id: str | None = None

    @field_validator("name")
    @classmethod
    def _validate_name(cls, value: str) -> str:
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("Category name is required")
        return trimmed

    @field_validator("parent_category_id")
    @classmethod
    def _blank_parent_is_none(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip()


class CategoryCreate(CategoryPayload):
    """Request body for POST /categories."""

    active: bool = True


class CategoryUpdate(CategoryPayload):
    """Request body for PUT /categories/{id}; ``active`` is not part of an update."""


class CategoryRead(BaseModel):
    id: str
    name: str
    description: str
    parent_category_id: str | None
    active: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True, frozen=True)


__all__ = ["CategoryCreate", "CategoryPayload", "CategoryRead", "CategoryUpdate"]
