"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Client-side menu data layer: TTL cache, fuzzy search and a paginated fetch controller.

Quick start::

    from menukit import (
        HttpMenuSource,
        MenuController,
        MenuSettings,
        TTLCacheStore,
        create_storage_from_env,
    )

    settings = MenuSettings.from_env()
    cache = TTLCacheStore(create_storage_from_env(), prefix=settings.cache_prefix)
    source = HttpMenuSource(settings.api_base_url, timeout_s=settings.request_timeout_s)

    controller = MenuController(source, cache, settings=settings)
    controller.start()
    await controller.wait_idle()
"""

from .cache import (
    CacheStats,
    InMemoryKeyValueStorage,
    KeyValueStorage,
    TTLCacheStore,
    create_storage_from_env,
)
from .controller import FetchKind, FetchOutcome, FetchPhase, MenuController, MenuView
from .errors import FetchTimeoutError, MenuAPIError, MenuKitError, StorageError
from .listing import (
    HttpMenuSource,
    MenuDataSource,
    MenuItem,
    MenuPage,
    MenuQuery,
    Pagination,
    PriceVariant,
)
from .search import fuzzy_match, fuzzy_search_items, highlight_match, levenshtein_distance
from .settings import MenuSettings

__all__ = [
    "CacheStats",
    "InMemoryKeyValueStorage",
    "KeyValueStorage",
    "TTLCacheStore",
    "create_storage_from_env",
    "FetchKind",
    "FetchOutcome",
    "FetchPhase",
    "MenuController",
    "MenuView",
    "FetchTimeoutError",
    "MenuAPIError",
    "MenuKitError",
    "StorageError",
    "HttpMenuSource",
    "MenuDataSource",
    "MenuItem",
    "MenuPage",
    "MenuQuery",
    "Pagination",
    "PriceVariant",
    "fuzzy_match",
    "fuzzy_search_items",
    "highlight_match",
    "levenshtein_distance",
    "MenuSettings",
]
