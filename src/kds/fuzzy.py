"""Fuzzy ranking of record names, backed by rapidfuzz.

A name matches when every character of the pattern appears in it in order
(case-insensitive, punctuation included). rapidfuzz's ``WRatio`` only
decides the order of the names that match.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from rapidfuzz import fuzz
from rapidfuzz.utils import default_process


@dataclass(slots=True)
class Match:
    """A candidate that matched, by position in the candidate sequence."""

    index: int
    score: float


def is_subsequence(pattern: str, candidate: str) -> bool:
    """True when pattern's characters occur in candidate in order."""
    remaining = iter(candidate.casefold())
    return all(char in remaining for char in pattern.casefold())


def find_matches(pattern: str, candidates: Sequence[str]) -> list[Match]:
    """Rank the candidates containing pattern in order, best first.

    Equal scores keep their original relative order.
    """
    if not pattern:
        return []

    query = default_process(pattern)
    matches = []
    for index, candidate in enumerate(candidates):
        if not is_subsequence(pattern, candidate):
            continue
        # Punctuation-only patterns process to "", so they rank everything equally
        score = fuzz.WRatio(query, default_process(candidate)) if query else 0.0
        matches.append(Match(index=index, score=score))

    matches.sort(key=lambda m: m.score, reverse=True)
    return matches


__all__ = [
    "Match",
    "find_matches",
    "is_subsequence",
]
