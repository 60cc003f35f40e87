"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Paginated, cache-first menu fetch controller.

The controller owns the menu query state and at most one in-flight fetch.
Query mutations are synchronous; they bump a generation counter and request
a fetch, which runs as an ``asyncio.Task`` and snapshots the query when it
starts. Requests arriving while a fetch is in flight are dropped. A response
is applied only when its generation is still current; otherwise it is
discarded and the latest query is fetched once more before going idle.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass, replace
from enum import Enum

from pydantic import ValidationError

from ..cache import TTLCacheStore
from ..errors import FetchTimeoutError
from ..listing.models import ALL_CATEGORIES, MenuItem, MenuPage, MenuQuery, Pagination
from ..listing.source import MenuDataSource
from ..search import DEFAULT_THRESHOLD, fuzzy_search_items
from ..settings import MenuSettings

logger = logging.getLogger("menukit.controller")

CATEGORIES_CACHE_KEY = "categories"
DEFAULT_ERROR_MESSAGE = "Failed to load menu items"


class FetchKind(str, Enum):
    INITIAL = "initial"
    LOAD_MORE = "load_more"
    REFRESH = "refresh"


class FetchPhase(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"


class FetchOutcome(str, Enum):
    CACHE_HIT = "cache_hit"
    SUCCESS = "success"
    ERROR = "error"
    DISCARDED = "discarded"


@dataclass(frozen=True, slots=True)
class MenuView:
    """Immutable snapshot of what a menu screen renders."""

    items: tuple[MenuItem, ...]
    categories: tuple[str, ...]
    pagination: Pagination | None
    query: MenuQuery
    loading: bool
    refreshing: bool
    loading_more: bool
    error: str | None


class MenuController:
    """
    Coordinates menu listing fetches against a TTL cache.

    Must be driven from a running event loop: setters schedule work on it.

    Args:
        source: Listing data source for items and categories.
        cache: Cache store used for first pages and the category list.
        settings: Page size, sort, ttl and timeout defaults.
        query: Initial query state; derived from ``settings`` when omitted.
    """

    def __init__(
        self,
        source: MenuDataSource,
        cache: TTLCacheStore,
        *,
        settings: MenuSettings | None = None,
        query: MenuQuery | None = None,
    ) -> None:
        self._source = source
        self._cache = cache
        self._settings = settings or MenuSettings()
        self._query = query or MenuQuery(
            limit=self._settings.page_limit,
            sort=self._settings.default_sort,
            is_available=True if self._settings.only_available else None,
        )

        self._items: list[MenuItem] = []
        self._categories: list[str] = [ALL_CATEGORIES]
        self._pagination: Pagination | None = None
        self._error: str | None = None

        self._phase = FetchPhase.IDLE
        self._kind: FetchKind | None = None
        self._generation = 0
        self._pending_kind: FetchKind | None = None
        self._last_outcome: FetchOutcome | None = None
        self._last_kind: FetchKind | None = None
        self._task: asyncio.Task[FetchOutcome] | None = None

        self._categories_fetched = False
        self._categories_task: asyncio.Task[None] | None = None

    # -- read side ---------------------------------------------------------

    @property
    def items(self) -> list[MenuItem]:
        return list(self._items)

    @property
    def categories(self) -> list[str]:
        return list(self._categories)

    @property
    def pagination(self) -> Pagination | None:
        return self._pagination

    @property
    def query(self) -> MenuQuery:
        return self._query

    @property
    def error(self) -> str | None:
        return self._error

    @property
    def phase(self) -> FetchPhase:
        return self._phase

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def last_outcome(self) -> FetchOutcome | None:
        return self._last_outcome

    @property
    def is_fetching(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def loading(self) -> bool:
        return self.is_fetching and self._kind is FetchKind.INITIAL

    @property
    def refreshing(self) -> bool:
        return self.is_fetching and self._kind is FetchKind.REFRESH

    @property
    def loading_more(self) -> bool:
        return self.is_fetching and self._kind is FetchKind.LOAD_MORE

    def snapshot(self) -> MenuView:
        return MenuView(
            items=tuple(self._items),
            categories=tuple(self._categories),
            pagination=self._pagination,
            query=self._query,
            loading=self.loading,
            refreshing=self.refreshing,
            loading_more=self.loading_more,
            error=self._error,
        )

    def filter_local(
        self, query: str, threshold: float = DEFAULT_THRESHOLD
    ) -> list[MenuItem]:
        """Rank the held items against ``query`` without a network call."""
        return fuzzy_search_items(self._items, query, threshold)

    # -- lifecycle ---------------------------------------------------------

    def start(self) -> None:
        """Kick off the first page load and the category fetch."""
        self._request(FetchKind.INITIAL)
        self._ensure_categories_task()

    async def wait_idle(self) -> None:
        """Wait until the in-flight fetch and category load have settled."""
        pending = [t for t in (self._task, self._categories_task) if t is not None]
        if pending:
            await asyncio.gather(*pending, return_exceptions=True)

    async def aclose(self) -> None:
        """Cancel any in-flight work."""
        for task in (self._task, self._categories_task):
            if task is not None and not task.done():
                task.cancel()
                with contextlib.suppress(asyncio.CancelledError):
                    await task

    async def clear_cache(self) -> None:
        """Drop every cached page and allow the category list to be fetched again."""
        await self._cache.clear()
        self._categories_fetched = False

    # -- query mutations ---------------------------------------------------

    def set_category(self, category: str | None) -> bool:
        if not category or category == ALL_CATEGORIES:
            category = None
        logger.debug("Filtering by category: %s", category)
        return self._update(category=category)

    def set_search(self, search: str) -> bool:
        logger.debug("Searching for: %r", search)
        return self._update(search=search.strip() or None)

    def set_sort_by(self, sort: str) -> bool:
        logger.debug("Sorting by: %s", sort)
        return self._update(sort=sort)

    def set_filters(
        self,
        *,
        is_available: bool | None = True,
        min_price: float | None = None,
        max_price: float | None = None,
        min_rating: float | None = None,
    ) -> bool:
        """Replace the availability, price and rating filters; ``None`` clears one."""
        return self._update(
            is_available=is_available,
            min_price=min_price,
            max_price=max_price,
            min_rating=min_rating,
        )

    def load_more(self) -> bool:
        """
        Request the next page when one exists and nothing is in flight.

        A failed page rolls the page cursor back, so the next call asks for
        the same page again.
        """
        if self.is_fetching:
            return False
        if self._pagination is None or not self._pagination.has_next_page:
            return False
        logger.debug("Loading page %d", self._query.page + 1)
        self._mutate(page=self._query.page + 1)
        return self._request(FetchKind.LOAD_MORE)

    def refresh(self) -> bool:
        """Re-fetch the first page from the source, bypassing the cache."""
        logger.debug("Refreshing menu")
        if self._query.page != 1:
            self._mutate(page=1)
        return self._request(FetchKind.REFRESH)

    def retry(self) -> bool:
        """Repeat the last failed fetch; a failed load-more is re-issued as one."""
        logger.debug("Retrying fetch")
        self._error = None
        if (
            self._last_outcome is FetchOutcome.ERROR
            and self._last_kind is FetchKind.LOAD_MORE
        ):
            return self.load_more()
        return self._request(FetchKind.INITIAL)

    def _mutate(self, **changes: object) -> None:
        self._query = replace(self._query, **changes)
        self._generation += 1

    def _update(self, **changes: object) -> bool:
        self._mutate(page=1, **changes)
        return self._request(FetchKind.INITIAL)

    # -- fetch machinery ---------------------------------------------------

    def _request(self, kind: FetchKind) -> bool:
        if self.is_fetching:
            self._pending_kind = kind
            logger.debug("Fetch already in progress, skipping %s", kind.value)
            return False
        loop = asyncio.get_running_loop()
        self._phase = FetchPhase.FETCHING
        self._kind = kind
        self._pending_kind = None
        self._task = loop.create_task(self._run(kind))
        return True

    async def _run(self, kind: FetchKind) -> FetchOutcome:
        outcome = FetchOutcome.DISCARDED
        try:
            while True:
                query = self._query
                generation = self._generation
                kind = FetchKind.LOAD_MORE if query.page > 1 else kind
                self._kind = kind
                self._pending_kind = None

                outcome = await self._fetch(query, generation, kind)
                if generation == self._generation:
                    break
                # the newer query's own request was dropped while we were in flight
                kind = self._pending_kind or FetchKind.INITIAL
                logger.debug("Query changed during fetch; fetching latest state")
        finally:
            self._phase = FetchPhase.IDLE
            self._kind = None
        self._last_outcome = outcome
        self._last_kind = kind
        return outcome

    async def _fetch(
        self, query: MenuQuery, generation: int, kind: FetchKind
    ) -> FetchOutcome:
        try:
            return await self._fetch_page(query, generation, kind)
        except Exception as e:  # noqa: BLE001
            logger.exception("Unexpected failure while fetching menu items")
            if generation != self._generation:
                return FetchOutcome.DISCARDED
            self._error = str(e) or DEFAULT_ERROR_MESSAGE
            return FetchOutcome.ERROR

    async def _fetch_page(
        self, query: MenuQuery, generation: int, kind: FetchKind
    ) -> FetchOutcome:
        if query.page == 1 and kind is not FetchKind.REFRESH:
            cached = await self._cached_page(query)
            if cached is not None and cached.items:
                if generation != self._generation:
                    return FetchOutcome.DISCARDED
                logger.debug("Using cached menu items for %s", query.cache_key())
                self._items = list(cached.items)
                self._pagination = cached.pagination
                self._error = None
                return FetchOutcome.CACHE_HIT

        logger.debug("Fetching menu items: %s", query.to_params())
        try:
            page = await self._call_source(query)
        except Exception as e:  # noqa: BLE001
            if generation != self._generation:
                return FetchOutcome.DISCARDED
            self._error = str(e) or DEFAULT_ERROR_MESSAGE
            logger.warning("Menu fetch failed (%s): %s", kind.value, self._error)
            if kind is FetchKind.REFRESH:
                await self._fall_back_to_cache(query, generation)
            elif kind is FetchKind.LOAD_MORE and query.page > 1:
                # next load_more asks for the failed page again
                self._query = replace(self._query, page=query.page - 1)
            return FetchOutcome.ERROR

        if generation != self._generation:
            logger.debug("Discarding stale response for %s", query.cache_key())
            return FetchOutcome.DISCARDED

        if query.page == 1:
            self._items = list(page.items)
        else:
            self._items = _append_unique(self._items, page.items)
        self._pagination = page.pagination
        self._error = None
        logger.debug("Fetched %d menu items (page %d)", len(page.items), query.page)

        if query.page == 1:
            await self._cache.set(
                query.cache_key(),
                page.model_dump(mode="json", by_alias=True),
                self._settings.page_ttl_ms,
            )
        return FetchOutcome.SUCCESS

    async def _call_source(self, query: MenuQuery) -> MenuPage:
        timeout_s = self._settings.request_timeout_s
        try:
            return await asyncio.wait_for(self._source.list_items(query), timeout_s)
        except asyncio.TimeoutError as e:
            raise FetchTimeoutError(timeout_s) from e

    async def _cached_page(self, query: MenuQuery) -> MenuPage | None:
        raw = await self._cache.get(query.cache_key())
        if raw is None:
            return None
        try:
            return MenuPage.model_validate(raw)
        except ValidationError:
            logger.warning("Ignoring malformed cached page %s", query.cache_key())
            return None

    async def _fall_back_to_cache(self, query: MenuQuery, generation: int) -> None:
        cached = await self._cached_page(replace(query, page=1))
        if cached is None or not cached.items or generation != self._generation:
            return
        logger.debug("Using cached data after refresh error")
        self._items = list(cached.items)
        self._pagination = cached.pagination

    # -- categories --------------------------------------------------------

    def _ensure_categories_task(self) -> asyncio.Task[None]:
        task = self._categories_task
        if task is None or (task.done() and not self._categories_fetched):
            task = asyncio.get_running_loop().create_task(self._fetch_categories())
            self._categories_task = task
        return task

    async def load_categories(self) -> list[str]:
        """Load the category list once; failures keep the current list."""
        if not self._categories_fetched:
            await self._ensure_categories_task()
        return self.categories

    async def _fetch_categories(self) -> None:
        try:
            cached = await self._cache.get(CATEGORIES_CACHE_KEY)
            if isinstance(cached, list) and cached:
                logger.debug("Using cached categories")
                self._categories = [ALL_CATEGORIES, *(str(c) for c in cached)]
                self._categories_fetched = True
                return

            categories = await asyncio.wait_for(
                self._source.list_categories(), self._settings.request_timeout_s
            )
            self._categories = [ALL_CATEGORIES, *categories]
            await self._cache.set(
                CATEGORIES_CACHE_KEY, list(categories), self._settings.categories_ttl_ms
            )
            self._categories_fetched = True
        except Exception:  # noqa: BLE001
            logger.warning("Categories fetch failed", exc_info=True)


def _append_unique(held: list[MenuItem], incoming: list[MenuItem]) -> list[MenuItem]:
    seen = {item.id for item in held}
    merged = list(held)
    for item in incoming:
        if item.id in seen:
            continue
        seen.add(item.id)
        merged.append(item)
    return merged
