"""Rendering of a session snapshot into a Rich renderable.

``render_session`` is a pure function of the session and the injected
``ViewStyle``; the Textual host only hands its result to a widget.
"""

from __future__ import annotations

from rich.box import ROUNDED
from rich.console import Group, RenderableType
from rich.padding import Padding
from rich.panel import Panel
from rich.spinner import Spinner
from rich.table import Table
from rich.text import Text

from kds.controller import Session
from kds.layout import (
    PANE_HORIZONTAL_OVERHEAD,
    PANE_VERTICAL_OVERHEAD,
    content_height,
    list_window,
    split_width,
)
from kds.models import (
    DECODE_FAILED_MARKER,
    FOCUS_DETAIL,
    FOCUS_LIST,
    HELP_BAR_HEIGHT,
    PHASE_FATAL,
    PHASE_LOADING,
)
from kds.themes import ViewStyle

HELP_TEXT = "  ↑/↓: navigate | tab: switch pane | ctrl+r: retry | q: quit"
LIST_TITLE = "Kubernetes Secrets"
SELECTED_PREFIX = "│ "
UNSELECTED_PREFIX = "  "


def render_help(style: ViewStyle) -> Text:
    """One-line key binding legend."""
    return Text(HELP_TEXT, style=style.note, no_wrap=True, overflow="ellipsis")


def render_fatal(message: str, style: ViewStyle) -> Text:
    return Text.assemble("\n", ("Fatal Error", f"bold {style.error}"), f": {message}\n\n")


def _render_loading_catalog(namespace: str, style: ViewStyle) -> RenderableType:
    spinner = Spinner(
        style.spinner,
        text=Text(f"Searching for secrets in namespace '{namespace}'..."),
        style=style.primary,
    )
    return Padding(spinner, (1, 2))


def _render_search_line(session: Session, style: ViewStyle) -> Text:
    catalog = session.catalog
    pattern = catalog.filter_pattern if catalog is not None else ""
    line = Text(style.search_prompt, style=style.primary, no_wrap=True, overflow="ellipsis")
    if pattern:
        line.append(pattern)
    elif session.search_active:
        line.append(style.search_placeholder, style=style.note)
    if session.search_active:
        line.append("█", style=style.note)
    return line


def _render_list_pane(session: Session, style: ViewStyle) -> tuple[RenderableType, str]:
    catalog = session.catalog
    rows: list[RenderableType] = [_render_search_line(session, style), Text("")]
    if catalog is not None:
        visible = catalog.visible
        start, end = list_window(catalog.cursor, len(visible), session.layout.list_height - 1)
        for index in range(start, end):
            selected = index == catalog.cursor
            name = visible[index].name
            if selected:
                color = style.focused if session.focus == FOCUS_LIST else style.primary
                line = Text(SELECTED_PREFIX + name, style=f"bold {color}")
            else:
                line = Text(UNSELECTED_PREFIX + name)
            line.no_wrap = True
            line.overflow = "ellipsis"
            rows.append(line)
        if not visible:
            rows.append(Text("No matches.", style=style.note))
        if catalog.filter_pattern:
            title = f"{LIST_TITLE} ({len(visible)}/{len(catalog.all)})"
        else:
            title = f"{LIST_TITLE} ({len(catalog.all)})"
    else:
        title = LIST_TITLE
    return Group(*rows), title


def _render_record_lines(session: Session, style: ViewStyle) -> Text:
    rows = session.layout.detail_height
    start = session.detail_scroll
    window = session.detail_lines[start : start + rows] if rows > 0 else []
    text = Text()
    for offset, line in enumerate(window):
        if offset:
            text.append("\n")
        if start + offset == 0:
            text.append(line, style=f"bold {style.primary}")
        else:
            text.append(line)
    text.highlight_words([DECODE_FAILED_MARKER], style=style.note)
    return text


def _render_detail_body(session: Session, style: ViewStyle) -> RenderableType:
    highlighted = session.highlighted
    if highlighted is None:
        catalog = session.catalog
        if catalog is not None and not catalog.visible:
            return Text("No secrets match the search.", style=style.note)
        return Text("Select a secret to view its data.", style=style.note)

    entry = session.highlighted_entry
    if session.loading_selected:
        return Padding(
            Spinner(style.spinner, text=Text("Loading secret data..."), style=style.primary),
            (1, 0, 0, 0),
        )
    if entry is not None and entry.error is not None:
        return Group(
            Text("Error", style=f"bold {style.error}"),
            Text(""),
            Text(f"Failed to fetch secret '{highlighted.name}':"),
            Text(""),
            Text(entry.error, style=f"bold {style.error}"),
            Text(""),
            Text("Press ctrl+r to retry.", style=style.note),
        )
    if entry is not None:
        return _render_record_lines(session, style)
    return Text("Select a secret to view its data.", style=style.note)


def _render_panes(session: Session, style: ViewStyle) -> RenderableType:
    left_width, right_width = split_width(session.width)
    band = content_height(session.height, HELP_BAR_HEIGHT)
    too_narrow = min(left_width, right_width) <= PANE_HORIZONTAL_OVERHEAD
    if too_narrow or band <= PANE_VERTICAL_OVERHEAD:
        return Group(Text("Terminal too small.", style=style.note), render_help(style))

    list_body, list_title = _render_list_pane(session, style)
    left = Panel(
        list_body,
        title=list_title,
        title_align="left",
        box=ROUNDED,
        border_style=style.focused if session.focus == FOCUS_LIST else style.primary,
        padding=(1, 2),
        width=left_width,
        height=band,
    )
    right = Panel(
        _render_detail_body(session, style),
        box=ROUNDED,
        border_style=style.focused if session.focus == FOCUS_DETAIL else style.primary,
        padding=(1, 2),
        width=right_width,
        height=band,
    )
    grid = Table.grid(padding=0)
    grid.add_column(width=left_width)
    grid.add_column(width=right_width)
    grid.add_row(left, right)
    return Group(grid, render_help(style))


def render_session(session: Session, style: ViewStyle) -> RenderableType:
    """Render the current frame for the session."""
    if session.phase == PHASE_FATAL:
        return render_fatal(session.fatal_error or "unknown error", style)
    if not session.ready:
        return Text("Initializing...")
    if session.phase == PHASE_LOADING:
        return _render_loading_catalog(session.namespace, style)
    return _render_panes(session, style)


__all__ = [
    "HELP_TEXT",
    "render_fatal",
    "render_help",
    "render_session",
]
