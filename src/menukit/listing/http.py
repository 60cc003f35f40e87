"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

REST listing source backed by the menu HTTP API.
"""

from __future__ import annotations

import asyncio
import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import BaseModel, Field, ValidationError

from ..errors import MenuAPIError
from .models import MenuItem, MenuPage, MenuQuery, Pagination
from .source import MenuDataSource

logger = logging.getLogger("menukit.listing.http")

NETWORK_ERROR_MESSAGE = "Network error. Please check your internet connection."

M = TypeVar("M", bound=BaseModel)

HttpGet = Callable[[str, dict[str, str], float], bytes]


class _MenuItemsData(BaseModel):
    menu_items: list[MenuItem] = Field(default_factory=list, alias="menuItems")


class _MenuItemsEnvelope(BaseModel):
    pagination: Pagination = Field(default_factory=Pagination)
    data: _MenuItemsData


class _MenuItemData(BaseModel):
    menu_item: MenuItem = Field(alias="menuItem")


class _MenuItemEnvelope(BaseModel):
    data: _MenuItemData


class _CategoriesData(BaseModel):
    categories: list[str] = Field(default_factory=list)


class _CategoriesEnvelope(BaseModel):
    data: _CategoriesData


class HttpMenuSource(MenuDataSource):
    """
    Menu listing source talking to the ``/menu`` REST endpoints.

    Blocking ``urllib`` requests run in a worker thread so callers stay on
    the event loop.

    Args:
        base_url: API root, e.g. ``https://host/api/v1``.
        token: Optional bearer token sent as ``Authorization``.
        timeout_s: Socket timeout for each request.
        get: Replacement transport ``(url, headers, timeout_s) -> body``.
    """

    def __init__(
        self,
        base_url: str,
        *,
        token: str | None = None,
        timeout_s: float = 10.0,
        get: HttpGet | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._token = token
        self._timeout_s = timeout_s
        self._get = get or self.http_get

    async def list_items(self, query: MenuQuery) -> MenuPage:
        envelope = await self._request(
            "/menu", _MenuItemsEnvelope, params=query.to_params()
        )
        return MenuPage(items=envelope.data.menu_items, pagination=envelope.pagination)

    async def list_categories(self) -> list[str]:
        envelope = await self._request("/menu/categories/all", _CategoriesEnvelope)
        return envelope.data.categories

    async def popular_items(self, limit: int = 10) -> list[MenuItem]:
        envelope = await self._request(
            "/menu/popular/items", _MenuItemsEnvelope, params={"limit": str(limit)}
        )
        return envelope.data.menu_items

    async def items_by_category(self, category: str, limit: int = 20) -> list[MenuItem]:
        path = f"/menu/category/{urllib.parse.quote(category, safe='')}"
        envelope = await self._request(
            path, _MenuItemsEnvelope, params={"limit": str(limit)}
        )
        return envelope.data.menu_items

    async def get_item(self, item_id: str) -> MenuItem:
        path = f"/menu/{urllib.parse.quote(item_id, safe='')}"
        envelope = await self._request(path, _MenuItemEnvelope)
        return envelope.data.menu_item

    async def get_item_by_slug(self, slug: str) -> MenuItem:
        path = f"/menu/slug/{urllib.parse.quote(slug, safe='')}"
        envelope = await self._request(path, _MenuItemEnvelope)
        return envelope.data.menu_item

    async def search(self, query: str, limit: int = 50) -> list[MenuItem]:
        if not query or not query.strip():
            return []
        envelope = await self._request(
            "/menu",
            _MenuItemsEnvelope,
            params={"search": query, "limit": str(limit), "isAvailable": "true"},
        )
        return envelope.data.menu_items

    def _url(self, path: str, params: dict[str, str] | None) -> str:
        url = f"{self._base_url}{path}"
        if params:
            url = f"{url}?{urllib.parse.urlencode(params)}"
        return url

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json", "Content-Type": "application/json"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"
        return headers

    async def _request(
        self,
        path: str,
        model: type[M],
        *,
        params: dict[str, str] | None = None,
    ) -> M:
        url = self._url(path, params)
        logger.debug("GET %s", url)
        body = await asyncio.to_thread(self._get, url, self._headers(), self._timeout_s)
        try:
            decoded = json.loads(body.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as e:
            raise MenuAPIError(
                f"Invalid JSON response from {path}", code="INVALID_RESPONSE"
            ) from e
        try:
            return model.model_validate(decoded)
        except ValidationError as e:
            raise MenuAPIError(
                f"Unexpected response shape from {path}", code="INVALID_RESPONSE"
            ) from e

    def http_get(self, url: str, headers: dict[str, str], timeout_s: float) -> bytes:
        req = urllib.request.Request(url, method="GET", headers=headers)
        try:
            with urllib.request.urlopen(req, timeout=timeout_s) as resp:  # noqa: S310
                return resp.read()
        except urllib.error.HTTPError as e:
            message = _error_message(e) or str(e.reason) or "Request failed"
            logger.warning("Menu API error %s for %s: %s", e.code, url, message)
            raise MenuAPIError(message, code=f"HTTP_{e.code}", status=e.code) from e
        except urllib.error.URLError as e:
            logger.warning("Network error calling %s: %s", url, e.reason)
            raise MenuAPIError(NETWORK_ERROR_MESSAGE, code="NETWORK_ERROR") from e
        except TimeoutError as e:
            logger.warning("Timed out calling %s", url)
            raise MenuAPIError(NETWORK_ERROR_MESSAGE, code="NETWORK_ERROR") from e


def _error_message(error: urllib.error.HTTPError) -> str:
    try:
        payload: Any = json.loads(error.read().decode("utf-8", errors="replace"))
    except Exception:  # noqa: BLE001
        return ""
    if isinstance(payload, dict) and isinstance(payload.get("message"), str):
        return payload["message"]
    return ""
