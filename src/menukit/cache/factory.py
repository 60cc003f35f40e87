"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Factory helpers for selecting cache storage backends from environment variables.
"""

from __future__ import annotations

import os
from typing import Any

from .base import KeyValueStorage
from .inmemory import InMemoryKeyValueStorage


def _env_first(*names: str, default: str | None = None) -> str | None:
    """
    Return the first non-empty environment variable in `names`.

    Args:
        *names: Environment variable names to check in order.
        default: Value returned if no non-empty variable is found.
    """
    for name in names:
        raw = os.getenv(name)
        if raw is None:
            continue
        value = raw.strip()
        if value:
            return value
    return default


def redis_url_from_env() -> str:
    """Build a Redis URL from `MENUKIT_STORAGE_REDIS_*` / `MENUKIT_REDIS_*` variables."""
    url = _env_first("MENUKIT_STORAGE_REDIS_URL", "MENUKIT_REDIS_URL")
    if url:
        return url
    host = (
        _env_first("MENUKIT_STORAGE_REDIS_HOST", "MENUKIT_REDIS_HOST", default="localhost")
        or "localhost"
    )
    port = (
        _env_first("MENUKIT_STORAGE_REDIS_PORT", "MENUKIT_REDIS_PORT", default="6379")
        or "6379"
    )
    db = _env_first("MENUKIT_STORAGE_REDIS_DB", "MENUKIT_REDIS_DB", default="0") or "0"
    password = (
        _env_first("MENUKIT_STORAGE_REDIS_PASSWORD", "MENUKIT_REDIS_PASSWORD", default="")
        or ""
    )
    if password:
        return f"redis://:{password}@{host}:{port}/{db}"
    return f"redis://{host}:{port}/{db}"


def create_storage_from_env(*, redis_client: Any | None = None) -> KeyValueStorage:
    """
    Create a key-value storage backend from `MENUKIT_STORAGE_*` environment variables.

    Backends:
    - `inmemory` (default)
    - `redis`

    Redis resolution uses the provided `redis_client` when supplied, otherwise
    builds a client from :func:`redis_url_from_env`.
    """
    backend = os.getenv("MENUKIT_STORAGE_BACKEND", "inmemory").strip().lower()

    if backend in ("mem", "memory", "inmemory", "in_memory"):
        return InMemoryKeyValueStorage()

    if backend in ("redis",):
        from .redis import RedisKeyValueStorage

        client = redis_client
        if client is None:
            import redis.asyncio as redis

            client = redis.Redis.from_url(redis_url_from_env())
        return RedisKeyValueStorage(client)

    raise ValueError(f"Unknown MENUKIT_STORAGE_BACKEND: {backend}")
