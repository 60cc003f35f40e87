"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/__init__.py.
"""

from .base import CACHE_PREFIX, DEFAULT_TTL_MS, CacheEntry, KeyValueStorage
from .factory import create_storage_from_env
from .inmemory import InMemoryKeyValueStorage
from .store import CacheStats, TTLCacheStore

__all__ = [
    "CACHE_PREFIX",
    "DEFAULT_TTL_MS",
    "CacheEntry",
    "CacheStats",
    "KeyValueStorage",
    "InMemoryKeyValueStorage",
    "TTLCacheStore",
    "create_storage_from_env",
]


# Lazy import for Redis storage
def __getattr__(name: str):
    """Lazily expose optional storage backends that require extra dependencies."""
    if name == "RedisKeyValueStorage":
        from .redis import RedisKeyValueStorage

        return RedisKeyValueStorage
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
