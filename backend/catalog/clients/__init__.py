"""Outbound HTTP clients for peer services."""

from catalog.clients.base import (
    PeerResponseError,
    PeerServiceError,
    PeerTransportError,
    build_http_client,
)
from catalog.clients.inventory import InventoryClient
from catalog.clients.notification import NotificationClient

__all__ = [
    "InventoryClient",
    "NotificationClient",
    "PeerResponseError",
    "PeerServiceError",
    "PeerTransportError",
    "build_http_client",
]
