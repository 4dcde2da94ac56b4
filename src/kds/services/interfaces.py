"""Service interfaces + default adapters for app-level dependency injection."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol, runtime_checkable

from kds.events import CatalogLoaded, FatalFailed, ItemFailed, ItemLoaded
from kds.models import RecordRef
from kds.services import fetch_service as _fetch


@runtime_checkable
class RecordSource(Protocol):
    """Blocking access to the records of a namespace."""

    def list_records(self, namespace: str) -> list[RecordRef]:
        """List every record in the namespace."""
        ...

    def get_record(self, namespace: str, name: str) -> Mapping[str, str | bytes]:
        """Return one record's fields in their base64 transport encoding."""
        ...


@runtime_checkable
class FetchService(Protocol):
    """Interface for the background fetches the session commands ask for."""

    async def fetch_catalog(self, namespace: str) -> CatalogLoaded | FatalFailed:
        """List the namespace as a session event."""
        ...

    async def fetch_record(self, namespace: str, name: str) -> ItemLoaded | ItemFailed:
        """Fetch one record as a session event."""
        ...


class DefaultFetchService:
    """Default adapter that delegates to function-based fetch services."""

    def __init__(self, source: RecordSource) -> None:
        self.source = source

    async def fetch_catalog(self, namespace: str) -> CatalogLoaded | FatalFailed:
        return await _fetch.fetch_catalog(self.source, namespace)

    async def fetch_record(self, namespace: str, name: str) -> ItemLoaded | ItemFailed:
        return await _fetch.fetch_record(self.source, namespace, name)


@dataclass(slots=True)
class AppServices:
    """Aggregated service interfaces consumed by the app layer."""

    fetch: FetchService


def build_default_app_services(source: RecordSource) -> AppServices:
    """Build default app services around a record source."""
    return AppServices(fetch=DefaultFetchService(source))


__all__ = [
    "AppServices",
    "DefaultFetchService",
    "FetchService",
    "RecordSource",
    "build_default_app_services",
]
