"""Tests for user-facing error and warning copy."""

from __future__ import annotations

from kds.action_messages import (
    build_actionable_error,
    build_actionable_warning,
    build_kubeconfig_error,
    build_next_step_hint,
    build_secret_fetch_error,
)


def test_actionable_error_with_and_without_why():
    assert build_actionable_error("list secrets", next_step="retry") == (
        "Could not list secrets.\nNext step: retry."
    )
    assert build_actionable_error("list secrets", why="timed out", next_step="retry!") == (
        "Could not list secrets.\nWhy: timed out.\nNext step: retry!"
    )


def test_next_step_hint_adds_punctuation_once():
    assert build_next_step_hint("  check it  ") == "Next step: check it."
    assert build_next_step_hint("check it?") == "Next step: check it?"


def test_actionable_warning():
    assert build_actionable_warning("Config ignored", next_step="fix it") == (
        "Config ignored.\nNext step: fix it."
    )


def test_kubeconfig_error_names_the_file():
    message = build_kubeconfig_error("/tmp/kc", "invalid kubeconfig: bad")

    assert message.splitlines()[0] == "Could not load kubeconfig '/tmp/kc'."
    assert build_kubeconfig_error(None, "x").startswith("Could not load the default kubeconfig.")


def test_secret_fetch_error():
    lines = build_secret_fetch_error("db", "apps", "not found").splitlines()

    assert lines[0] == "Could not get secret 'db' in namespace 'apps'."
    assert lines[1] == "Why: not found."
    assert lines[2].startswith("Next step: ")
