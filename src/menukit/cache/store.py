"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Namespaced TTL cache over a persistent key-value storage.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from ..utils import json_dumps, json_loads, now_ms
from .base import CACHE_PREFIX, DEFAULT_TTL_MS, CacheEntry, KeyValueStorage

logger = logging.getLogger("menukit.cache")


@dataclass(frozen=True, slots=True)
class CacheStats:
    """Count of namespaced rows and their approximate stored size in characters."""

    total_items: int = 0
    total_size: int = 0


class TTLCacheStore:
    """
    Key -> value cache with per-entry expiry.

    Every key is stored under ``prefix + key`` as a JSON blob holding the
    value, its write time and its ttl. Storage and (de)serialization
    failures never reach the caller: writes become no-ops and reads become
    misses.

    Args:
        storage: Persistent key-value storage collaborator.
        prefix: Namespace prepended to every key.
        default_ttl_ms: Ttl used when ``set`` is called without one.
        clock: Returns the current time in epoch milliseconds.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        prefix: str = CACHE_PREFIX,
        default_ttl_ms: int = DEFAULT_TTL_MS,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        if not prefix:
            raise ValueError("Cache prefix must be non-empty")
        self._storage = storage
        self._prefix = prefix
        self._default_ttl_ms = default_ttl_ms
        self._clock = clock

    @property
    def prefix(self) -> str:
        return self._prefix

    def _key(self, key: str) -> str:
        return f"{self._prefix}{key}"

    async def set(self, key: str, data: Any, ttl_ms: int | None = None) -> None:
        """Write ``data`` under ``key``; failures are logged and ignored."""
        entry = CacheEntry(
            data=data,
            written_at=self._clock(),
            ttl_ms=self._default_ttl_ms if ttl_ms is None else ttl_ms,
        )
        try:
            blob = json_dumps(entry.to_dict())
            await self._storage.set_item(self._key(key), blob)
        except Exception:  # noqa: BLE001
            logger.warning("Cache set failed for key %r", key, exc_info=True)
            return
        logger.debug("Cached %r (ttl=%dms)", key, entry.ttl_ms)

    async def _read(self, key: str) -> CacheEntry | None:
        try:
            blob = await self._storage.get_item(self._key(key))
        except Exception:  # noqa: BLE001
            logger.warning("Cache read failed for key %r", key, exc_info=True)
            return None
        if blob is None:
            return None
        try:
            return CacheEntry.from_dict(json_loads(blob))
        except Exception:  # noqa: BLE001
            logger.warning("Discarding unreadable cache entry %r", key)
            await self.remove(key)
            return None

    async def get(self, key: str) -> Any | None:
        """Return the cached value, or ``None`` when missing, corrupt or expired."""
        entry = await self._read(key)
        if entry is None:
            logger.debug("Cache miss: %r", key)
            return None

        now = self._clock()
        if entry.is_expired(now):
            logger.debug(
                "Cache expired: %r (age=%ds)", key, _round_seconds(entry.age_ms(now))
            )
            await self.remove(key)
            return None

        logger.debug("Cache hit: %r (age=%ds)", key, _round_seconds(entry.age_ms(now)))
        return entry.data

    async def has(self, key: str) -> bool:
        return await self.get(key) is not None

    async def remove(self, key: str) -> None:
        try:
            await self._storage.remove_item(self._key(key))
        except Exception:  # noqa: BLE001
            logger.warning("Cache remove failed for key %r", key, exc_info=True)

    async def _namespaced_keys(self) -> list[str]:
        keys = await self._storage.get_all_keys()
        return [key for key in keys if key.startswith(self._prefix)]

    async def clear(self) -> None:
        """Remove every key under this store's namespace."""
        try:
            keys = await self._namespaced_keys()
            if keys:
                await self._storage.multi_remove(keys)
        except Exception:  # noqa: BLE001
            logger.warning("Cache clear failed", exc_info=True)
            return
        logger.debug("Cleared %d cached items", len(keys))

    async def get_age_seconds(self, key: str) -> int | None:
        """Age of the stored entry in whole seconds, expired or not."""
        entry = await self._read(key)
        if entry is None:
            return None
        return _round_seconds(entry.age_ms(self._clock()))

    async def stats(self) -> CacheStats:
        try:
            keys = await self._namespaced_keys()
            rows = await self._storage.multi_get(keys)
        except Exception:  # noqa: BLE001
            logger.warning("Cache stats failed", exc_info=True)
            return CacheStats()
        total_size = sum(len(value) for _, value in rows if value)
        return CacheStats(total_items=len(keys), total_size=total_size)


def _round_seconds(age_ms: int) -> int:
    return math.floor(age_ms / 1000 + 0.5)
