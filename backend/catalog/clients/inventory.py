"""Client for the inventory peer service."""

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from catalog.clients.base import PeerClient, PeerResponseError, build_http_client
from catalog.core.config import Settings
from catalog.schemas.peer import InventoryStatus

logger = logging.getLogger("catalog.clients.inventory")


class InventoryClient(PeerClient):
    """Looks up live stock levels by product id."""

    service_name = "inventory-service"

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> InventoryClient:
        return cls(
            build_http_client(
                settings.inventory_service_url,
                connect_timeout=settings.http_connect_timeout,
                read_timeout=settings.http_read_timeout,
                transport=transport,
            )
        )

    async def get_inventory_status(self, product_id: str) -> InventoryStatus | None:
        """
        Return the live stock level for a product.

        A 404 means the inventory service has no record of the product and
        yields None; any other failure raises a PeerServiceError.
        """
        operation = f"get status for product {product_id}"
        response = await self._send("GET", f"/{quote(product_id, safe='')}", operation=operation)

        if response.status_code == httpx.codes.NOT_FOUND:
            logger.info(
                "Inventory has no record for product",
                extra={"product_id": product_id},
            )
            return None

        self._raise_for_status(response, operation)

        try:
            return InventoryStatus.model_validate_json(response.content)
        except ValidationError as exc:
            raise PeerResponseError(
                self.service_name,
                operation,
                status_code=response.status_code,
                body=response.text,
                cause=f"Malformed inventory payload: {exc.error_count()} validation error(s)",
            ) from exc


__all__ = ["InventoryClient"]
