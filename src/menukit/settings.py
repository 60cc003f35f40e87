"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Menu data layer settings and explicit config loading.
"""

from __future__ import annotations

import os
from dataclasses import dataclass

from .cache.base import CACHE_PREFIX, DEFAULT_TTL_MS

DEFAULT_API_BASE_URL = "https://tiptopapp-backend.onrender.com/api/v1"


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True, slots=True)
class MenuSettings:
    """Explicit settings used by the listing source, cache and controller."""

    api_base_url: str = DEFAULT_API_BASE_URL
    api_token: str | None = None
    request_timeout_s: float = 10.0

    page_limit: int = 20
    default_sort: str = "-rating"
    only_available: bool = True

    cache_prefix: str = CACHE_PREFIX
    default_ttl_ms: int = DEFAULT_TTL_MS
    page_ttl_ms: int = 10 * 60 * 1000
    categories_ttl_ms: int = 30 * 60 * 1000

    @staticmethod
    def from_env() -> "MenuSettings":
        """Load settings from environment variables."""
        return MenuSettings(
            api_base_url=os.getenv("MENUKIT_API_BASE_URL", DEFAULT_API_BASE_URL),
            api_token=os.getenv("MENUKIT_API_TOKEN"),
            request_timeout_s=float(os.getenv("MENUKIT_REQUEST_TIMEOUT_S", "10")),
            page_limit=int(os.getenv("MENUKIT_PAGE_LIMIT", "20")),
            default_sort=os.getenv("MENUKIT_DEFAULT_SORT", "-rating"),
            only_available=_env_bool("MENUKIT_ONLY_AVAILABLE", True),
            cache_prefix=os.getenv("MENUKIT_CACHE_PREFIX", CACHE_PREFIX),
            default_ttl_ms=int(
                os.getenv("MENUKIT_CACHE_DEFAULT_TTL_MS", str(DEFAULT_TTL_MS))
            ),
            page_ttl_ms=int(os.getenv("MENUKIT_CACHE_PAGE_TTL_MS", "600000")),
            categories_ttl_ms=int(
                os.getenv("MENUKIT_CACHE_CATEGORIES_TTL_MS", "1800000")
            ),
        )
