"""
In-process caches for catalog entities.

Each named cache is bounded and time-expiring:
- entries expire a fixed TTL after they were written (reads do not extend it);
- beyond ``max_entries`` the least recently used entry is evicted;
- every operation is guarded by a lock so tasks and threads can share one cache.

Read paths go through ``get_or_load`` and write paths call ``delete`` once the
store mutation has committed.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from catalog.core.config import Settings
from catalog.core.metrics import record_cache_eviction, record_cache_lookup

logger = logging.getLogger("catalog.core.cache")

TTL_10_MINUTES = 600
DEFAULT_MAX_ENTRIES = 500

PRODUCTS_CACHE = "products"
CATEGORIES_CACHE = "categories"
PRODUCT_INVENTORY_CACHE = "product_inventory"

V = TypeVar("V")


@dataclass(slots=True)
class _CacheEntry(Generic[V]):
    value: V
    expires_at: float


class LocalCache(Generic[V]):
    """Bounded LRU cache with expire-after-write semantics."""

    def __init__(
        self,
        name: str,
        *,
        ttl_seconds: float = TTL_10_MINUTES,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if ttl_seconds <= 0:
            raise ValueError("ttl_seconds must be greater than zero.")
        if max_entries <= 0:
            raise ValueError("max_entries must be greater than zero.")
        self.name = name
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, _CacheEntry[V]] = OrderedDict()
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, key: str) -> V | None:
        """Return the live value for ``key`` or None."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and entry.expires_at <= self._clock():
                del self._entries[key]
                record_cache_eviction(self.name, "expired")
                entry = None

            if entry is None:
                record_cache_lookup(self.name, hit=False)
                return None

            self._entries.move_to_end(key)
            record_cache_lookup(self.name, hit=True)
            logger.debug("Cache hit", extra={"cache": self.name, "key": key})
            return entry.value

    def set(self, key: str, value: V) -> None:
        with self._lock:
            self._entries[key] = _CacheEntry(value, self._clock() + self.ttl_seconds)
            self._entries.move_to_end(key)
            overflow = len(self._entries) - self.max_entries
            for _ in range(overflow):
                evicted_key, _entry = self._entries.popitem(last=False)
                logger.debug("Cache overflow", extra={"cache": self.name, "key": evicted_key})
            record_cache_eviction(self.name, "capacity", max(overflow, 0))

    def delete(self, key: str) -> bool:
        """Invalidate ``key``; returns True when an entry was removed."""
        with self._lock:
            removed = self._entries.pop(key, None) is not None
        if removed:
            record_cache_eviction(self.name, "invalidated")
            logger.debug("Cache evict", extra={"cache": self.name, "key": key})
        return removed

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    async def get_or_load(self, key: str, loader: Callable[[], Awaitable[V]]) -> V:
        """
        Read-through lookup.

        On a hit the loader is not called. On a miss the loader result is
        cached and returned; if the loader raises, nothing is cached.
        """
        cached = self.get(key)
        if cached is not None:
            return cached

        value = await loader()
        self.set(key, value)
        return value


class CatalogCaches:
    """The isolated named caches used by the domain services."""

    def __init__(
        self,
        *,
        ttl_seconds: float = TTL_10_MINUTES,
        max_entries: int = DEFAULT_MAX_ENTRIES,
    ) -> None:
        self.products: LocalCache = LocalCache(
            PRODUCTS_CACHE, ttl_seconds=ttl_seconds, max_entries=max_entries
        )
        self.categories: LocalCache = LocalCache(
            CATEGORIES_CACHE, ttl_seconds=ttl_seconds, max_entries=max_entries
        )
        self.product_inventory: LocalCache = LocalCache(
            PRODUCT_INVENTORY_CACHE, ttl_seconds=ttl_seconds, max_entries=max_entries
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> CatalogCaches:
        return cls(ttl_seconds=settings.cache_ttl_seconds, max_entries=settings.cache_max_entries)

    def evict_product(self, product_id: str) -> None:
        """Drop both the plain and the inventory-enriched views of a product."""
        self.products.delete(product_id)
        self.product_inventory.delete(product_id)

    def clear(self) -> None:
        for cache in (self.products, self.categories, self.product_inventory):
            cache.clear()


__all__ = [
    "CATEGORIES_CACHE",
    "CatalogCaches",
    "DEFAULT_MAX_ENTRIES",
    "LocalCache",
    "PRODUCTS_CACHE",
    "PRODUCT_INVENTORY_CACHE",
    "TTL_10_MINUTES",
]
