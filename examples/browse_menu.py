"""
browse_menu.py — Minimal menukit example.

Loads the first menu page (cache-first), pages once, then ranks the held
items locally against a misspelled query.

Usage:
    export MENUKIT_API_BASE_URL=https://tiptopapp-backend.onrender.com/api/v1
    python examples/browse_menu.py
"""

import logging

from menukit import (
    HttpMenuSource,
    MenuController,
    MenuSettings,
    TTLCacheStore,
    create_storage_from_env,
)


async def main() -> None:
    settings = MenuSettings.from_env()
    cache = TTLCacheStore(
        create_storage_from_env(),
        prefix=settings.cache_prefix,
        default_ttl_ms=settings.default_ttl_ms,
    )
    source = HttpMenuSource(
        settings.api_base_url,
        token=settings.api_token,
        timeout_s=settings.request_timeout_s,
    )

    controller = MenuController(source, cache, settings=settings)
    controller.start()
    await controller.wait_idle()

    if controller.load_more():
        await controller.wait_idle()

    view = controller.snapshot()
    print(f"categories: {', '.join(view.categories)}")
    print(f"{len(view.items)} items, error={view.error}")
    for item in controller.filter_local("chiken biryani"):
        print(f"  {item.name} ({item.base_price})")

    await controller.aclose()


if __name__ == "__main__":
    import asyncio

    logging.basicConfig(level=logging.INFO)
    asyncio.run(main())
