"""
MIT License
Copyright (c) 2026 arpan404
See LICENSE file for full license text.

Typo tolerant text scoring used to rank menu search results.

Scores are in ``[0, 1]``. A literal substring match scores exactly 1; otherwise
each query word is scored against the best text word (containment, 3-char
prefix, or Levenshtein similarity gated by word length) and the word scores
are averaged, provided at least half of the query words matched.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from typing import Protocol, TypeVar

from rapidfuzz.distance import Levenshtein

DEFAULT_THRESHOLD = 0.4
DESCRIPTION_WEIGHT = 0.7

PREFIX_SCORE = 0.8
LONG_WORD_FACTOR = 0.9
SHORT_WORD_FACTOR = 0.85


class Searchable(Protocol):
    name: str
    description: str | None


T = TypeVar("T", bound=Searchable)


def levenshtein_distance(a: str, b: str) -> int:
    """Minimum single-character insertions, deletions and substitutions turning ``a`` into ``b``."""
    return Levenshtein.distance(a, b)


def _word_score(query_word: str, text_word: str) -> float:
    if query_word in text_word:
        return 1.0

    best = 0.0
    if text_word.startswith(query_word[: min(3, len(query_word))]):
        best = PREFIX_SCORE

    distance = levenshtein_distance(query_word, text_word)
    similarity = 1 - distance / max(len(query_word), len(text_word))
    if len(query_word) > 4 and distance <= 2:
        best = max(best, similarity * LONG_WORD_FACTOR)
    elif len(query_word) > 2 and distance == 1:
        best = max(best, similarity * SHORT_WORD_FACTOR)
    return best


def fuzzy_match(query: str, text: str) -> float:
    """Score how well ``query`` matches ``text``."""
    normalized_query = query.strip().lower()
    normalized_text = text.strip().lower()

    if not normalized_query:
        return 0.0
    if normalized_query in normalized_text:
        return 1.0

    query_words = normalized_query.split()
    text_words = normalized_text.split()

    total = 0.0
    matched = 0
    for query_word in query_words:
        best = max((_word_score(query_word, w) for w in text_words), default=0.0)
        if best > 0:
            matched += 1
            total += best

    if matched >= math.ceil(len(query_words) / 2):
        return total / len(query_words)
    return 0.0


def fuzzy_search_items(
    items: Iterable[T],
    query: str,
    threshold: float = DEFAULT_THRESHOLD,
) -> list[T]:
    """
    Filter and rank ``items`` by their best name/description score.

    Description scores are weighted by ``DESCRIPTION_WEIGHT``. Items scoring
    below ``threshold`` are dropped. A blank query returns every item in its
    original order.
    """
    rows = list(items)
    if not query.strip():
        return rows

    scored: list[tuple[float, T]] = []
    for item in rows:
        name_score = fuzzy_match(query, item.name)
        desc_score = (
            fuzzy_match(query, item.description) * DESCRIPTION_WEIGHT
            if item.description
            else 0.0
        )
        score = max(name_score, desc_score)
        if score >= threshold:
            scored.append((score, item))

    scored.sort(key=lambda row: row[0], reverse=True)
    return [item for _, item in scored]


def highlight_match(text: str, query: str) -> str:
    # No markup is produced yet; callers render the text as-is.
    _ = query
    return text
