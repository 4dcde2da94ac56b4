"""Tests for config loading and hardening."""

from __future__ import annotations

import json
import logging

import pytest

from kds.config import _coerce_request_timeout, _dict_to_config, get_config_path, load_config
from kds.models import REQUEST_TIMEOUT_DEFAULT, UserConfig


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    monkeypatch.setattr("kds.config.get_config_path", lambda: path)
    return path


def test_config_path_lives_under_app_dir() -> None:
    path = get_config_path()

    assert path.name == "config.json"
    assert path.parent.name == "kds"


def test_missing_file_returns_defaults(config_file) -> None:
    loaded = load_config()

    assert loaded == UserConfig()
    assert loaded.config_defaulted is False


def test_valid_file_is_loaded(config_file) -> None:
    config_file.write_text(
        json.dumps(
            {
                "theme_name": "monokai",
                "kubeconfig": "/etc/kube/config",
                "namespace": " payments ",
                "request_timeout_seconds": 10,
            }
        ),
        encoding="utf-8",
    )

    loaded = load_config()

    assert loaded.theme_name == "monokai"
    assert loaded.kubeconfig == "/etc/kube/config"
    assert loaded.namespace == "payments"
    assert loaded.request_timeout_seconds == 10


def test_explicit_path_argument(tmp_path) -> None:
    path = tmp_path / "other.json"
    path.write_text(json.dumps({"namespace": "ops"}), encoding="utf-8")

    assert load_config(path).namespace == "ops"


def test_wrong_types_fall_back_per_key(config_file) -> None:
    config_file.write_text(
        json.dumps({"theme_name": 3, "namespace": ["x"], "kubeconfig": "/k"}),
        encoding="utf-8",
    )

    loaded = load_config()

    assert loaded.theme_name == "default"
    assert loaded.namespace == ""
    assert loaded.kubeconfig == "/k"
    assert loaded.config_defaulted is False


def test_invalid_json_returns_defaults_and_warns(config_file, caplog) -> None:
    config_file.write_text("{not json", encoding="utf-8")

    with caplog.at_level(logging.WARNING, logger="kds.config"):
        loaded = load_config()

    assert loaded.config_defaulted is True
    assert loaded.theme_name == "default"
    assert "invalid JSON" in caplog.text


@pytest.mark.parametrize("payload", [[], "oops", 123])
def test_non_dict_root_returns_default(payload, config_file) -> None:
    config_file.write_text(json.dumps(payload), encoding="utf-8")

    loaded = load_config()

    assert isinstance(loaded, UserConfig)
    assert loaded.config_defaulted is True


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (45, 45),
        (0, 1),
        (-3, 1),
        (10_000, 300),
        ("30", REQUEST_TIMEOUT_DEFAULT),
        (True, REQUEST_TIMEOUT_DEFAULT),
        (None, REQUEST_TIMEOUT_DEFAULT),
    ],
)
def test_request_timeout_is_clamped(value, expected) -> None:
    assert _coerce_request_timeout(value) == expected


def test_dict_to_config_ignores_unknown_keys() -> None:
    loaded = _dict_to_config({"version": 2, "unknown": True})

    assert loaded.version == 2
    assert loaded == UserConfig(version=2)
