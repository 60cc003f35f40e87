"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/base.py.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any, Protocol

CACHE_PREFIX = "@tiptop_cache:"
DEFAULT_TTL_MS = 15 * 60 * 1000


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """One cached value with the write time and time-to-live, both in ms."""

    data: Any
    written_at: int
    ttl_ms: int

    def age_ms(self, now: int) -> int:
        return now - self.written_at

    def is_expired(self, now: int) -> bool:
        # age == ttl is still valid
        return self.age_ms(now) > self.ttl_ms

    def to_dict(self) -> dict[str, Any]:
        return {"data": self.data, "written_at": self.written_at, "ttl_ms": self.ttl_ms}

    @staticmethod
    def from_dict(row: Any) -> "CacheEntry":
        """Rebuild an entry from its decoded JSON row, rejecting malformed rows."""
        if not isinstance(row, dict) or "data" not in row:
            raise ValueError("Cache row must be an object with a 'data' field")
        written_at = row.get("written_at")
        ttl_ms = row.get("ttl_ms")
        if isinstance(written_at, bool) or not isinstance(written_at, int | float):
            raise ValueError("Cache row has no numeric 'written_at'")
        if isinstance(ttl_ms, bool) or not isinstance(ttl_ms, int | float):
            raise ValueError("Cache row has no numeric 'ttl_ms'")
        if any(isinstance(v, float) and not math.isfinite(v) for v in (written_at, ttl_ms)):
            raise ValueError("Cache row timestamps must be finite")
        return CacheEntry(data=row["data"], written_at=int(written_at), ttl_ms=int(ttl_ms))


class KeyValueStorage(Protocol):
    """Persistent string key-value storage the cache store writes through."""

    backend_id: str

    async def get_item(self, key: str) -> str | None: ...

    async def set_item(self, key: str, value: str) -> None: ...

    async def remove_item(self, key: str) -> None: ...

    async def get_all_keys(self) -> list[str]: ...

    async def multi_get(self, keys: Sequence[str]) -> list[tuple[str, str | None]]: ...

    async def multi_remove(self, keys: Sequence[str]) -> None: ...
