"""Catalog of listed secrets, its filtered view and the list cursor."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence

from kds.fuzzy import Match, find_matches
from kds.models import RecordRef

logger = logging.getLogger(__name__)

Scorer = Callable[[str, Sequence[str]], list[Match]]


class Catalog:
    """All records of one namespace plus the subset matching the filter.

    ``all`` is fixed at construction. ``visible`` is recomputed on every
    pattern change; navigation only ever moves over ``visible``.
    """

    def __init__(self, records: Sequence[RecordRef], scorer: Scorer = find_matches) -> None:
        self._all: tuple[RecordRef, ...] = tuple(records)
        self._names: list[str] = [r.name for r in self._all]
        self._scorer = scorer
        self.filter_pattern: str = ""
        self.visible: list[RecordRef] = list(self._all)
        self.cursor: int = 0

    @property
    def all(self) -> tuple[RecordRef, ...]:
        return self._all

    @property
    def highlighted(self) -> RecordRef | None:
        """Record under the cursor, or None when nothing matches."""
        if not self.visible:
            return None
        return self.visible[self.cursor]

    def set_pattern(self, pattern: str) -> None:
        """Refilter against pattern and move the cursor to the best match."""
        if pattern == self.filter_pattern:
            return
        self.filter_pattern = pattern
        if not pattern:
            self.visible = list(self._all)
        else:
            seen: set[int] = set()
            visible = []
            for match in self._scorer(pattern, self._names):
                if match.index in seen or not 0 <= match.index < len(self._all):
                    continue
                seen.add(match.index)
                visible.append(self._all[match.index])
            self.visible = visible
        self.cursor = 0
        logger.debug(
            "Filter applied: pattern=%r, matched=%d/%d", pattern, len(self.visible), len(self._all)
        )

    def move(self, delta: int) -> None:
        """Move the cursor by delta rows, clamped to the visible range."""
        if not self.visible:
            self.cursor = 0
            return
        self.cursor = max(0, min(self.cursor + delta, len(self.visible) - 1))

    def move_to_start(self) -> None:
        self.cursor = 0

    def move_to_end(self) -> None:
        self.cursor = max(0, len(self.visible) - 1)


__all__ = [
    "Catalog",
    "Scorer",
]
