"""Pane geometry and text wrapping for the two-pane view.

Everything here is a pure function of its arguments so the controller can
recompute it on every resize and the renderer can rely on it.
"""

from __future__ import annotations

import textwrap
from collections.abc import Mapping

from kds.models import (
    HELP_BAR_HEIGHT,
    PANE_BORDER,
    PANE_PADDING_HORIZONTAL,
    PANE_PADDING_VERTICAL,
    SEARCH_INPUT_HEIGHT,
    PaneLayout,
)

PANE_HORIZONTAL_OVERHEAD = 2 * (PANE_BORDER + PANE_PADDING_HORIZONTAL)
PANE_VERTICAL_OVERHEAD = 2 * (PANE_BORDER + PANE_PADDING_VERTICAL)


def split_width(width: int) -> tuple[int, int]:
    """Split the terminal width into (list region, detail region)."""
    width = max(0, width)
    left = width // 2
    return left, width - left


def content_height(height: int, help_bar_height: int = HELP_BAR_HEIGHT) -> int:
    """Height of the band shared by both regions, above the help bar."""
    return max(0, height - help_bar_height)


def compute_layout(width: int, height: int, help_bar_height: int = HELP_BAR_HEIGHT) -> PaneLayout:
    """Compute the inner size of both panes, never negative."""
    left, right = split_width(width)
    band = content_height(height, help_bar_height)
    return PaneLayout(
        list_width=max(0, left - PANE_HORIZONTAL_OVERHEAD),
        list_height=max(0, band - PANE_VERTICAL_OVERHEAD - SEARCH_INPUT_HEIGHT),
        detail_width=max(0, right - PANE_HORIZONTAL_OVERHEAD),
        detail_height=max(0, band - PANE_VERTICAL_OVERHEAD),
    )


def wrap_text(text: str, width: int) -> list[str]:
    """Wrap text to width, keeping embedded line breaks and blank lines."""
    width = max(1, width)
    lines: list[str] = []
    for raw_line in text.split("\n"):
        if not raw_line:
            lines.append("")
            continue
        lines.extend(textwrap.wrap(raw_line, width=width, break_on_hyphens=False) or [""])
    return lines


def wrap_record(name: str, data: Mapping[str, str], width: int) -> list[str]:
    """Format a decoded record as wrapped lines: title, blank, ``key: value``."""
    lines = wrap_text(name, width)
    lines.append("")
    for key in sorted(data):
        lines.extend(wrap_text(f"{key}: {data[key]}", width))
    return lines


def list_window(cursor: int, count: int, rows: int) -> tuple[int, int]:
    """Return the [start, end) slice of a list that keeps cursor on screen."""
    if rows <= 0 or count <= 0:
        return 0, 0
    start = max(0, min(cursor - rows + 1, count - rows))
    return start, min(count, start + rows)


def max_scroll(line_count: int, rows: int) -> int:
    """Largest scroll offset that still fills the viewport."""
    return max(0, line_count - max(0, rows))


__all__ = [
    "PANE_HORIZONTAL_OVERHEAD",
    "PANE_VERTICAL_OVERHEAD",
    "compute_layout",
    "content_height",
    "list_window",
    "max_scroll",
    "split_width",
    "wrap_record",
    "wrap_text",
]
