"""Per-secret cache of decoded data or fetch errors."""

from __future__ import annotations

from collections.abc import Mapping

from kds.models import CacheEntry


class DataCache:
    """Unbounded name -> CacheEntry store for one session.

    A stored success replaces a stored error for the same name and vice
    versa. Entries are never evicted.
    """

    def __init__(self) -> None:
        self._entries: dict[str, CacheEntry] = {}

    def get(self, name: str) -> CacheEntry | None:
        return self._entries.get(name)

    def put(self, name: str, data: Mapping[str, str]) -> None:
        self._entries[name] = CacheEntry(data=dict(data))

    def put_error(self, name: str, error: str) -> None:
        self._entries[name] = CacheEntry(error=error)

    def __contains__(self, name: object) -> bool:
        return name in self._entries

    def __len__(self) -> int:
        return len(self._entries)


__all__ = ["DataCache"]
