"""Shared test fixtures for kds tests."""

from __future__ import annotations

import base64
import logging
import threading
from collections.abc import Mapping

import pytest

from kds.models import RecordRef

# ── Global logging isolation ─────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def _reset_logging_disable():
    """Undo logging.disable() from CLI tests so later caplog assertions work."""
    yield
    logging.disable(logging.NOTSET)


# ── Factories ────────────────────────────────────────────────────────────────


def b64(text: str) -> str:
    """Encode text the way the API transports secret values."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


@pytest.fixture
def make_record():
    """Factory fixture for creating RecordRef instances with sensible defaults."""

    def _make(name: str = "db-credentials", namespace: str = "default") -> RecordRef:
        return RecordRef(name=name, namespace=namespace)

    return _make


class FakeRecordSource:
    """In-memory record source with per-name failures and a call log.

    ``data`` maps names to their raw (base64) fields. ``failures`` maps names
    to the exception ``get_record`` raises. ``list_error`` makes listing fail.
    """

    def __init__(
        self,
        records: list[RecordRef] | None = None,
        data: Mapping[str, Mapping[str, str]] | None = None,
        failures: Mapping[str, Exception] | None = None,
        list_error: Exception | None = None,
    ) -> None:
        self.records = list(records or [])
        self.data = {name: dict(fields) for name, fields in (data or {}).items()}
        self.failures = dict(failures or {})
        self.list_error = list_error
        self.list_calls: list[str] = []
        self.get_calls: list[tuple[str, str]] = []
        self._lock = threading.Lock()

    def list_records(self, namespace: str) -> list[RecordRef]:
        with self._lock:
            self.list_calls.append(namespace)
        if self.list_error is not None:
            raise self.list_error
        return list(self.records)

    def get_record(self, namespace: str, name: str) -> dict[str, str]:
        with self._lock:
            self.get_calls.append((namespace, name))
        if name in self.failures:
            raise self.failures[name]
        if name not in self.data:
            raise LookupError(f"secret '{name}' not found")
        return dict(self.data[name])


@pytest.fixture
def fake_source():
    """Factory fixture building a FakeRecordSource.

    Records default to one per ``data`` key, in the given order; plain-text
    values in ``plain`` are base64-encoded for you.
    """

    def _make(
        plain: Mapping[str, Mapping[str, str]] | None = None,
        *,
        records: list[RecordRef] | None = None,
        raw: Mapping[str, Mapping[str, str]] | None = None,
        failures: Mapping[str, Exception] | None = None,
        list_error: Exception | None = None,
        namespace: str = "default",
    ) -> FakeRecordSource:
        data: dict[str, dict[str, str]] = {}
        for name, fields in (plain or {}).items():
            data[name] = {key: b64(value) for key, value in fields.items()}
        for name, fields in (raw or {}).items():
            data[name] = dict(fields)
        if records is None:
            records = [RecordRef(name=name, namespace=namespace) for name in data]
        return FakeRecordSource(
            records=records, data=data, failures=failures, list_error=list_error
        )

    return _make
