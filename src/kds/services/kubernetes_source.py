"""Kubernetes-backed record source (secrets in one namespace)."""

from __future__ import annotations

import logging

from kubernetes import client as kube_client
from kubernetes import config as kube_config
from kubernetes.client.rest import ApiException
from kubernetes.config.config_exception import ConfigException
from urllib3.exceptions import HTTPError as TransportError

from kds.models import DEFAULT_NAMESPACE, REQUEST_TIMEOUT_DEFAULT, RecordRef

logger = logging.getLogger(__name__)


class KubernetesRecordSource:
    """Record source reading Secrets through a ``CoreV1Api``.

    Every call blocks; callers on the event loop go through
    ``kds.services.fetch_service``.
    """

    def __init__(
        self,
        api: kube_client.CoreV1Api,
        *,
        request_timeout: int = REQUEST_TIMEOUT_DEFAULT,
    ) -> None:
        self._api = api
        self._request_timeout = request_timeout

    def list_records(self, namespace: str) -> list[RecordRef]:
        result = self._api.list_namespaced_secret(
            namespace, _request_timeout=self._request_timeout
        )
        records: list[RecordRef] = []
        for item in result.items or []:
            metadata = item.metadata
            if metadata is None or not metadata.name:
                continue
            records.append(RecordRef(name=metadata.name, namespace=metadata.namespace or namespace))
        logger.debug("Listed %d secrets in %r", len(records), namespace)
        return records

    def get_record(self, namespace: str, name: str) -> dict[str, str]:
        """Return the raw base64 field values of one secret."""
        secret = self._api.read_namespaced_secret(
            name, namespace, _request_timeout=self._request_timeout
        )
        return dict(secret.data or {})


def build_record_source(
    kubeconfig: str | None = None,
    request_timeout: int = REQUEST_TIMEOUT_DEFAULT,
) -> KubernetesRecordSource:
    """Build a source from a kubeconfig file (``None`` uses the client default).

    Raises ``ConfigException`` or ``OSError`` when the kubeconfig cannot be loaded.
    """
    api_client = kube_config.new_client_from_config(config_file=kubeconfig or None)
    return KubernetesRecordSource(
        kube_client.CoreV1Api(api_client), request_timeout=request_timeout
    )


def resolve_namespace(kubeconfig: str | None = None) -> str:
    """Namespace of the current kubeconfig context, or ``default``."""
    _contexts, active = kube_config.list_kube_config_contexts(config_file=kubeconfig or None)
    context = (active or {}).get("context") or {}
    namespace = context.get("namespace")
    if isinstance(namespace, str) and namespace:
        return namespace
    return DEFAULT_NAMESPACE


def describe_source_error(exc: BaseException) -> str:
    """Human-readable one-line cause for a record source failure."""
    if isinstance(exc, ApiException):
        status = " ".join(str(part) for part in (exc.status, exc.reason) if part)
        if exc.status == 404:
            return "not found"
        if exc.status in (401, 403):
            return f"access denied ({status})"
        if status:
            return f"API request failed ({status})"
        return f"API request failed: {exc}"
    if isinstance(exc, TransportError):
        return f"could not reach the cluster: {exc}"
    if isinstance(exc, ConfigException):
        return f"invalid kubeconfig: {exc}"
    if isinstance(exc, TimeoutError):
        return "request timed out"
    message = str(exc).strip()
    return message or type(exc).__name__


__all__ = [
    "KubernetesRecordSource",
    "build_record_source",
    "describe_source_error",
    "resolve_namespace",
]
