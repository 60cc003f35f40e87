"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Menu listing models and data sources.
"""

from .http import HttpMenuSource
from .models import (
    ALL_CATEGORIES,
    MenuItem,
    MenuPage,
    MenuQuery,
    Pagination,
    PriceVariant,
)
from .source import MenuDataSource

__all__ = [
    "ALL_CATEGORIES",
    "HttpMenuSource",
    "MenuDataSource",
    "MenuItem",
    "MenuPage",
    "MenuQuery",
    "Pagination",
    "PriceVariant",
]
