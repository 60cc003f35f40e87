"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: listing/source.py.
"""

from __future__ import annotations

from typing import Protocol

from .models import MenuPage, MenuQuery


class MenuDataSource(Protocol):
    """Protocol implemented by listing sources used by the menu controller."""

    async def list_items(self, query: MenuQuery) -> MenuPage: ...

    async def list_categories(self) -> list[str]: ...
