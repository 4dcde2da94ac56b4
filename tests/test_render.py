"""Tests for rendering a session into text."""

from __future__ import annotations

import io

from rich.console import Console

from kds.controller import SessionController
from kds.events import CatalogLoaded, FatalFailed, ItemFailed, ItemLoaded, Key, Resize
from kds.fuzzy import Match
from kds.models import RecordRef
from kds.render import HELP_TEXT, render_help, render_session
from kds.themes import get_view_style

STYLE = get_view_style("default")


def _text(renderable, width: int = 80) -> str:
    console = Console(
        width=width, file=io.StringIO(), record=True, color_system=None, legacy_windows=False
    )
    console.print(renderable)
    return console.export_text()


def _render(controller: SessionController) -> str:
    return _text(render_session(controller.session, STYLE), width=controller.session.width or 80)


def _browsing(*names: str, size=(80, 24), scorer=None) -> SessionController:
    kwargs = {"scorer": scorer} if scorer is not None else {}
    controller = SessionController("ns", **kwargs)
    controller.start()
    controller.dispatch(Resize(*size))
    controller.dispatch(CatalogLoaded([RecordRef(name, "ns") for name in names]))
    return controller


def test_initializing_before_first_resize():
    controller = SessionController("ns")

    assert "Initializing..." in _render(controller)


def test_loading_screen_names_the_namespace():
    controller = SessionController("kube-system")
    controller.dispatch(Resize(80, 24))

    assert "Searching for secrets in namespace 'kube-system'..." in _render(controller)


def test_fatal_screen():
    controller = SessionController("ns")
    controller.dispatch(Resize(80, 24))
    controller.dispatch(FatalFailed("no secrets found in namespace 'ns'"))

    assert "Fatal Error: no secrets found in namespace 'ns'" in _render(controller)


def test_browsing_shows_list_detail_and_help():
    controller = _browsing("db-credentials", "tls-cert")

    output = _render(controller)

    assert "Kubernetes Secrets (2)" in output
    assert "db-credentials" in output
    assert "tls-cert" in output
    assert "Loading secret data..." in output
    assert HELP_TEXT.strip() in output


def test_loaded_record_is_shown_sorted():
    controller = _browsing("db")
    controller.dispatch(ItemLoaded("db", {"user": "admin", "password": "pw"}))

    output = _render(controller)

    assert "password: pw" in output
    assert output.index("password: pw") < output.index("user: admin")


def test_decode_failure_marker_is_visible():
    controller = _browsing("db")
    controller.dispatch(ItemLoaded("db", {"token": "%%% (decode failed)"}))

    assert "token: %%% (decode failed)" in _render(controller)


def test_item_error_panel_offers_retry():
    controller = _browsing("db")
    controller.dispatch(ItemFailed("db", "not found"))

    output = _render(controller)

    assert "Failed to fetch secret 'db':" in output
    assert "not found" in output
    assert "Press ctrl+r to retry." in output


def test_filtered_title_and_no_match_state():
    controller = _browsing("alpha", "beta", scorer=lambda pattern, names: [])
    controller.dispatch(Key("z", "z"))

    output = _render(controller)

    assert "Kubernetes Secrets (0/2)" in output
    assert "No matches." in output
    assert "No secrets match the search." in output


def test_filtered_title_counts_visible():
    controller = _browsing("alpha", "beta", scorer=lambda pattern, names: [Match(1, 100.0)])
    controller.dispatch(Key("b", "b"))

    assert "Kubernetes Secrets (1/2)" in _render(controller)


def test_long_list_is_windowed_around_cursor():
    controller = _browsing(*(f"secret-{i:02}" for i in range(40)))
    controller.dispatch(Key("end"))

    output = _render(controller)

    assert "secret-39" in output
    assert "secret-00" not in output


def test_tiny_terminal_shows_notice():
    controller = _browsing("a", size=(12, 5))

    output = _text(render_session(controller.session, STYLE), width=80)

    assert "Terminal too small." in output


def test_render_help_is_one_line():
    assert _text(render_help(STYLE)).strip() == HELP_TEXT.strip()
