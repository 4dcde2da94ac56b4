"""Events consumed and commands produced by the session controller.

Every input the controller reacts to is one of the ``SessionEvent`` kinds;
everything it asks the host to do is one of the ``Command`` kinds. The host
runs commands and feeds their outcomes back as events, one at a time.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from kds.models import RecordRef


@dataclass(slots=True)
class Resize:
    """Terminal dimensions changed (or became known)."""

    width: int
    height: int


@dataclass(slots=True)
class Key:
    """A key press.

    ``key`` is the normalized key name (``"tab"``, ``"ctrl+c"``, ``"a"``);
    ``character`` is the printable character, if any.
    """

    key: str
    character: str | None = None

    @property
    def is_printable(self) -> bool:
        char = self.character
        return char is not None and len(char) == 1 and char.isprintable()


@dataclass(slots=True)
class CatalogLoaded:
    """The namespace listing succeeded with at least one record."""

    records: list[RecordRef]


@dataclass(slots=True)
class ItemLoaded:
    """A record's fields were fetched and decoded."""

    name: str
    data: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class ItemFailed:
    """Fetching one record failed; browsing continues."""

    name: str
    message: str


@dataclass(slots=True)
class FatalFailed:
    """The namespace listing failed or was empty; the session ends."""

    message: str


SessionEvent = Resize | Key | CatalogLoaded | ItemLoaded | ItemFailed | FatalFailed


@dataclass(slots=True)
class FetchCatalog:
    namespace: str


@dataclass(slots=True)
class FetchRecord:
    namespace: str
    name: str


@dataclass(slots=True)
class Quit:
    return_code: int = 0
    message: str | None = None


Command = FetchCatalog | FetchRecord | Quit


__all__ = [
    "CatalogLoaded",
    "Command",
    "FatalFailed",
    "FetchCatalog",
    "FetchRecord",
    "ItemFailed",
    "ItemLoaded",
    "Key",
    "Quit",
    "Resize",
    "SessionEvent",
]
