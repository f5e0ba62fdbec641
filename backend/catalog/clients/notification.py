"""Client for the notification peer service."""

from __future__ import annotations

import httpx

from catalog.clients.base import PeerClient, build_http_client
from catalog.core.config import Settings
from catalog.schemas.peer import LowStockNotification


class NotificationClient(PeerClient):
    """Posts low-stock alerts; any 2xx answer counts as delivered."""

    service_name = "notification-service"

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> NotificationClient:
        return cls(
            build_http_client(
                settings.notification_service_url,
                connect_timeout=settings.http_connect_timeout,
                read_timeout=settings.http_read_timeout,
                transport=transport,
            )
        )

    async def send_low_stock_alert(self, notification: LowStockNotification) -> None:
        operation = f"send low stock notification for product {notification.product_id}"
        response = await self._send(
            "POST",
            "/low-stock",
            operation=operation,
            json=notification.model_dump(mode="json", by_alias=True),
        )
        self._raise_for_status(response, operation)


__all__ = ["NotificationClient"]
