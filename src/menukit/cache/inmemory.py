"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Module: cache/inmemory.py.
"""

from __future__ import annotations

from collections.abc import Sequence

from .base import KeyValueStorage


class InMemoryKeyValueStorage(KeyValueStorage):
    """Process-local storage suitable for development/test workloads."""

    backend_id: str = "inmemory"

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._rows: dict[str, str] = dict(initial or {})

    async def get_item(self, key: str) -> str | None:
        return self._rows.get(key)

    async def set_item(self, key: str, value: str) -> None:
        self._rows[key] = value

    async def remove_item(self, key: str) -> None:
        self._rows.pop(key, None)

    async def get_all_keys(self) -> list[str]:
        return list(self._rows.keys())

    async def multi_get(self, keys: Sequence[str]) -> list[tuple[str, str | None]]:
        return [(key, self._rows.get(key)) for key in keys]

    async def multi_remove(self, keys: Sequence[str]) -> None:
        for key in keys:
            self._rows.pop(key, None)
