from __future__ import annotations

import asyncio
import io
import json
import urllib.error
import urllib.parse

import pytest

from menukit.errors import MenuAPIError
from menukit.listing import HttpMenuSource, MenuQuery
from menukit.listing.http import NETWORK_ERROR_MESSAGE


def run_async(coro):
    return asyncio.run(coro)


def item_row(item_id: str, name: str) -> dict:
    return {"_id": item_id, "name": name, "priceVariants": [{"quantity": "Full", "price": 100}]}


class RecordingTransport:
    def __init__(self, responses: dict[str, object]) -> None:
        self.responses = responses
        self.calls: list[tuple[str, dict[str, str], float]] = []

    def __call__(self, url: str, headers: dict[str, str], timeout_s: float) -> bytes:
        self.calls.append((url, headers, timeout_s))
        path = urllib.parse.urlsplit(url).path
        return json.dumps(self.responses[path]).encode("utf-8")


def test_list_items_builds_query_string_and_parses_envelope():
    transport = RecordingTransport(
        {
            "/api/v1/menu": {
                "status": "success",
                "results": 2,
                "pagination": {
                    "currentPage": 1,
                    "totalPages": 4,
                    "totalItems": 8,
                    "itemsPerPage": 2,
                    "hasNextPage": True,
                    "hasPrevPage": False,
                },
                "data": {"menuItems": [item_row("a", "Kulfi"), item_row("b", "Falooda")]},
            }
        }
    )
    source = HttpMenuSource(
        "https://api.example/api/v1/", token="t0k", timeout_s=3, get=transport
    )

    page = run_async(source.list_items(MenuQuery(limit=2, category="Desserts")))

    assert [item.id for item in page.items] == ["a", "b"]
    assert page.pagination.has_next_page is True
    url, headers, timeout_s = transport.calls[0]
    query = urllib.parse.parse_qs(urllib.parse.urlsplit(url).query)
    assert query == {
        "category": ["Desserts"],
        "page": ["1"],
        "limit": ["2"],
        "sort": ["-rating"],
        "isAvailable": ["true"],
    }
    assert headers["Authorization"] == "Bearer t0k"
    assert timeout_s == 3


def test_categories_and_single_item_endpoints():
    transport = RecordingTransport(
        {
            "/api/v1/menu/categories/all": {"data": {"categories": ["Starters", "Desserts"]}},
            "/api/v1/menu/abc": {"data": {"menuItem": item_row("abc", "Lassi")}},
            "/api/v1/menu/slug/sweet-lassi": {"data": {"menuItem": item_row("abc", "Lassi")}},
            "/api/v1/menu/category/Ice%20Cream": {"data": {"menuItems": [item_row("i", "Kulfi")]}},
            "/api/v1/menu/popular/items": {"data": {"menuItems": [item_row("p", "Biryani")]}},
        }
    )
    source = HttpMenuSource("https://api.example/api/v1", get=transport)

    assert run_async(source.list_categories()) == ["Starters", "Desserts"]
    assert run_async(source.get_item("abc")).name == "Lassi"
    assert run_async(source.get_item_by_slug("sweet-lassi")).id == "abc"
    assert [i.id for i in run_async(source.items_by_category("Ice Cream"))] == ["i"]
    assert [i.id for i in run_async(source.popular_items(limit=5))] == ["p"]
    assert transport.calls[-1][0].endswith("/menu/popular/items?limit=5")
    assert "Authorization" not in transport.calls[0][1]


def test_search_skips_request_for_blank_query():
    transport = RecordingTransport(
        {"/api/v1/menu": {"data": {"menuItems": [item_row("a", "Kulfi")]}}}
    )
    source = HttpMenuSource("https://api.example/api/v1", get=transport)

    assert run_async(source.search("   ")) == []
    assert transport.calls == []

    assert [i.id for i in run_async(source.search("kulfi"))] == ["a"]
    query = urllib.parse.parse_qs(urllib.parse.urlsplit(transport.calls[0][0]).query)
    assert query == {"search": ["kulfi"], "limit": ["50"], "isAvailable": ["true"]}


def test_invalid_json_and_shape_raise_invalid_response():
    source = HttpMenuSource("https://api.example", get=lambda url, headers, t: b"<html>")
    with pytest.raises(MenuAPIError) as bad_json:
        run_async(source.list_categories())
    assert bad_json.value.code == "INVALID_RESPONSE"

    source = HttpMenuSource("https://api.example", get=lambda url, headers, t: b'{"data": 1}')
    with pytest.raises(MenuAPIError) as bad_shape:
        run_async(source.list_items(MenuQuery()))
    assert bad_shape.value.code == "INVALID_RESPONSE"


def test_http_get_maps_http_errors(monkeypatch):
    def fake_urlopen(req, timeout):
        raise urllib.error.HTTPError(
            req.full_url,
            404,
            "Not Found",
            hdrs=None,
            fp=io.BytesIO(b'{"message": "Menu item not found"}'),
        )

    monkeypatch.setattr("urllib.request.urlopen", fake_urlopen)
    source = HttpMenuSource("https://api.example")

    with pytest.raises(MenuAPIError) as err:
        run_async(source.get_item("missing"))
    assert str(err.value) == "Menu item not found"
    assert err.value.code == "HTTP_404"
    assert err.value.status == 404


def test_http_get_maps_network_errors(monkeypatch):
    def fake_urlopen(req, timeout):
        raise urllib.error.URLError("connection refused")

    monkeypatch.setattr("urllib.request.urlopen", fake_urlopen)
    source = HttpMenuSource("https://api.example")

    with pytest.raises(MenuAPIError) as err:
        run_async(source.list_categories())
    assert str(err.value) == NETWORK_ERROR_MESSAGE
    assert err.value.code == "NETWORK_ERROR"
