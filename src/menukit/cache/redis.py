"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/redis.py.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from redis.exceptions import RedisError

from ..errors import StorageError
from .base import KeyValueStorage


def _decode(raw: Any) -> str | None:
    if raw is None:
        return None
    if isinstance(raw, bytes):
        return raw.decode("utf-8")
    return str(raw)


class RedisKeyValueStorage(KeyValueStorage):
    """
    Redis-backed key-value storage for persisting cache rows across restarts.

    Requires ``redis.asyncio`` (``pip install redis``). Values are plain
    strings; expiry is owned by the cache store, not by Redis.

    Args:
        redis: An ``redis.asyncio.Redis`` client instance.
        scan_count: Batch size hint used when listing keys.
    """

    backend_id: str = "redis"

    def __init__(self, redis: Any, *, scan_count: int = 500) -> None:
        self._redis = redis
        self._scan_count = scan_count

    async def get_item(self, key: str) -> str | None:
        try:
            return _decode(await self._redis.get(key))
        except RedisError as e:
            raise StorageError(f"Redis GET failed for '{key}': {e}") from e

    async def set_item(self, key: str, value: str) -> None:
        try:
            await self._redis.set(key, value)
        except RedisError as e:
            raise StorageError(f"Redis SET failed for '{key}': {e}") from e

    async def remove_item(self, key: str) -> None:
        try:
            await self._redis.delete(key)
        except RedisError as e:
            raise StorageError(f"Redis DEL failed for '{key}': {e}") from e

    async def get_all_keys(self) -> list[str]:
        keys: list[str] = []
        try:
            async for raw in self._redis.scan_iter(count=self._scan_count):
                key = _decode(raw)
                if key is not None:
                    keys.append(key)
        except RedisError as e:
            raise StorageError(f"Redis SCAN failed: {e}") from e
        return keys

    async def multi_get(self, keys: Sequence[str]) -> list[tuple[str, str | None]]:
        if not keys:
            return []
        try:
            values = await self._redis.mget(list(keys))
        except RedisError as e:
            raise StorageError(f"Redis MGET failed: {e}") from e
        return [(key, _decode(value)) for key, value in zip(keys, values)]

    async def multi_remove(self, keys: Sequence[str]) -> None:
        if not keys:
            return
        try:
            await self._redis.delete(*keys)
        except RedisError as e:
            raise StorageError(f"Redis DEL failed: {e}") from e
