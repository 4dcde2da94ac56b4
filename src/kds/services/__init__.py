"""Internal service layer: record sources and background fetches."""

from kds.services.fetch_service import fetch_catalog, fetch_record
from kds.services.kubernetes_source import (
    KubernetesRecordSource,
    build_record_source,
    describe_source_error,
    resolve_namespace,
)

__all__ = [
    "KubernetesRecordSource",
    "build_record_source",
    "describe_source_error",
    "fetch_catalog",
    "fetch_record",
    "resolve_namespace",
]
