"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Fuzzy matching helpers for menu search ranking.
"""

from .fuzzy import (
    DEFAULT_THRESHOLD,
    fuzzy_match,
    fuzzy_search_items,
    highlight_match,
    levenshtein_distance,
)

__all__ = [
    "DEFAULT_THRESHOLD",
    "fuzzy_match",
    "fuzzy_search_items",
    "highlight_match",
    "levenshtein_distance",
]
