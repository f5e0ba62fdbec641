"""Wire formats exchanged with the inventory and notification peers."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class PeerModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class InventoryStatus(PeerModel):
    """Live stock level reported by the inventory service."""

    product_id: str
    quantity_on_hand: int = Field(ge=0)
    last_updated_at: datetime | None = None


class LowStockNotification(PeerModel):
    """Body of POST /low-stock on the notification service."""

    product_id: str
    product_name: str
    current_stock: int


__all__ = ["InventoryStatus", "LowStockNotification", "PeerModel"]
