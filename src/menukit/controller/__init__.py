"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Menu fetch controller package.
"""

from .menu import (
    CATEGORIES_CACHE_KEY,
    FetchKind,
    FetchOutcome,
    FetchPhase,
    MenuController,
    MenuView,
)

__all__ = [
    "CATEGORIES_CACHE_KEY",
    "FetchKind",
    "FetchOutcome",
    "FetchPhase",
    "MenuController",
    "MenuView",
]
