"""Background fetches that resolve to session events.

Both coroutines run the blocking record source in a worker thread and never
raise: every failure comes back as an event for the controller.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from kds.controller import empty_catalog_message
from kds.decoding import decode_fields
from kds.events import CatalogLoaded, FatalFailed, ItemFailed, ItemLoaded
from kds.services.kubernetes_source import describe_source_error

if TYPE_CHECKING:
    from kds.services.interfaces import RecordSource

logger = logging.getLogger(__name__)


async def fetch_catalog(source: RecordSource, namespace: str) -> CatalogLoaded | FatalFailed:
    """List the namespace; an empty listing is as fatal as a failed one."""
    logger.debug("Listing secrets in %r", namespace)
    try:
        records = await asyncio.to_thread(source.list_records, namespace)
    except Exception as exc:
        logger.warning("Listing secrets in %r failed: %s", namespace, exc, exc_info=True)
        return FatalFailed(
            message=f"failed to list secrets in namespace '{namespace}': "
            f"{describe_source_error(exc)}"
        )
    if not records:
        return FatalFailed(message=empty_catalog_message(namespace))
    return CatalogLoaded(records=list(records))


async def fetch_record(
    source: RecordSource, namespace: str, name: str
) -> ItemLoaded | ItemFailed:
    """Fetch and decode one record; undecodable fields do not fail the fetch."""
    logger.debug("Fetching secret %r in %r", name, namespace)
    try:
        raw_fields = await asyncio.to_thread(source.get_record, namespace, name)
        data = decode_fields(raw_fields)
    except Exception as exc:
        logger.warning("Fetching secret %r failed: %s", name, exc, exc_info=True)
        return ItemFailed(name=name, message=describe_source_error(exc))
    logger.debug("Fetched secret %r (%d fields)", name, len(data))
    return ItemLoaded(name=name, data=data)


__all__ = [
    "fetch_catalog",
    "fetch_record",
]
