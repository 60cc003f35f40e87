"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Menu listing payload models and the query state sent to listing sources.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from ..utils import json_dumps

DEFAULT_PORTION = "Full"
ALL_CATEGORIES = "All"


class PriceVariant(BaseModel):
    """One orderable portion size and its price."""

    quantity: str
    price: float


class MenuItem(BaseModel):
    """Menu item as returned by the backend; ``id`` is the dedup identity."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: str = Field(alias="_id", min_length=1)
    name: str
    slug: str = ""
    description: str | None = None
    image: str | None = None
    price_variants: list[PriceVariant] = Field(default_factory=list, alias="priceVariants")
    categories: list[str] = Field(default_factory=list)
    rating: float = 0.0
    reviews: int = 0
    is_available: bool = Field(default=True, alias="isAvailable")
    is_active: bool = Field(default=True, alias="isActive")
    created_at: str | None = Field(default=None, alias="createdAt")
    updated_at: str | None = Field(default=None, alias="updatedAt")

    def default_variant(self) -> PriceVariant | None:
        """The ``Full`` portion when offered, else the first variant."""
        for variant in self.price_variants:
            if variant.quantity == DEFAULT_PORTION:
                return variant
        return self.price_variants[0] if self.price_variants else None

    @property
    def base_price(self) -> float | None:
        variant = self.default_variant()
        return variant.price if variant is not None else None

    @property
    def primary_category(self) -> str:
        return self.categories[0] if self.categories else ALL_CATEGORIES

    def price_for(self, portion: str) -> float | None:
        """Price of ``portion``, falling back to the first variant's price."""
        for variant in self.price_variants:
            if variant.quantity == portion and variant.price:
                return variant.price
        return self.price_variants[0].price if self.price_variants else None

    def portions(self) -> list[str]:
        return [variant.quantity for variant in self.price_variants]

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class Pagination(BaseModel):
    """Pagination metadata for one listing page."""

    model_config = ConfigDict(populate_by_name=True)

    current_page: int = Field(default=1, alias="currentPage")
    total_pages: int = Field(default=1, alias="totalPages")
    total_items: int = Field(default=0, alias="totalItems")
    items_per_page: int = Field(default=0, alias="itemsPerPage")
    has_next_page: bool = Field(default=False, alias="hasNextPage")
    has_prev_page: bool = Field(default=False, alias="hasPrevPage")


class MenuPage(BaseModel):
    """One page of menu items plus its pagination metadata."""

    items: list[MenuItem] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)


@dataclass(frozen=True, slots=True)
class MenuQuery:
    """Filter, sort and pagination state for a menu listing request."""

    page: int = 1
    limit: int = 20
    sort: str = "-rating"
    category: str | None = None
    search: str | None = None
    is_available: bool | None = True
    min_price: float | None = None
    max_price: float | None = None
    min_rating: float | None = None

    def to_params(self) -> dict[str, str]:
        """
        Query-string parameters in backend naming.

        Unset or falsy values are omitted, except ``isAvailable`` which is
        sent whenever it is not ``None``.
        """
        params: dict[str, str] = {}
        if self.category:
            params["category"] = self.category
        if self.search:
            params["search"] = self.search
        if self.page:
            params["page"] = str(self.page)
        if self.limit:
            params["limit"] = str(self.limit)
        if self.sort:
            params["sort"] = self.sort
        if self.is_available is not None:
            params["isAvailable"] = "true" if self.is_available else "false"
        if self.min_price:
            params["minPrice"] = f"{self.min_price:g}"
        if self.max_price:
            params["maxPrice"] = f"{self.max_price:g}"
        if self.min_rating:
            params["minRating"] = f"{self.min_rating:g}"
        return params

    def cache_key(self) -> str:
        """Deterministic cache key for this exact query state."""
        state = {k: v for k, v in asdict(self).items() if v is not None}
        return "menu_" + json_dumps(dict(sorted(state.items())))
