"""Tests for pane geometry and wrapping."""

from __future__ import annotations

import pytest

from kds.layout import (
    compute_layout,
    content_height,
    list_window,
    max_scroll,
    split_width,
    wrap_record,
    wrap_text,
)
from kds.models import PaneLayout


class TestComputeLayout:
    def test_standard_terminal(self):
        assert compute_layout(80, 24) == PaneLayout(
            list_width=34, list_height=18, detail_width=34, detail_height=19
        )

    def test_odd_width_gives_remainder_to_detail(self):
        layout = compute_layout(81, 24)

        assert layout.list_width == 34
        assert layout.detail_width == 35

    def test_narrow_terminal(self):
        assert compute_layout(40, 24).list_width == 14

    @pytest.mark.parametrize(("width", "height"), [(0, 0), (5, 3), (12, 5), (-4, -1)])
    def test_tiny_terminals_clamp_at_zero(self, width, height):
        layout = compute_layout(width, height)

        assert min(
            layout.list_width, layout.list_height, layout.detail_width, layout.detail_height
        ) >= 0

    def test_help_bar_height_is_subtracted(self):
        assert compute_layout(80, 24, help_bar_height=3).detail_height == 17

    def test_split_width_and_content_height(self):
        assert split_width(11) == (5, 6)
        assert content_height(10, 1) == 9
        assert content_height(0, 1) == 0


class TestWrapping:
    def test_wrap_text_respects_width(self):
        lines = wrap_text("aaaa bbbb cccc", 9)

        assert lines == ["aaaa bbbb", "cccc"]
        assert all(len(line) <= 9 for line in lines)

    def test_wrap_text_keeps_blank_lines_and_breaks(self):
        assert wrap_text("one\n\ntwo", 20) == ["one", "", "two"]

    def test_wrap_text_breaks_long_words(self):
        assert wrap_text("x" * 10, 4) == ["xxxx", "xxxx", "xx"]

    def test_wrap_text_zero_width_is_treated_as_one(self):
        assert wrap_text("ab", 0) == ["a", "b"]

    def test_wrap_record_title_then_sorted_fields(self):
        lines = wrap_record("db", {"user": "admin", "password": "pw"}, 40)

        assert lines == ["db", "", "password: pw", "user: admin"]

    def test_wrap_record_without_fields(self):
        assert wrap_record("empty", {}, 40) == ["empty", ""]


class TestWindows:
    def test_list_window_keeps_cursor_visible(self):
        assert list_window(0, 10, 4) == (0, 4)
        assert list_window(5, 10, 4) == (2, 6)
        assert list_window(9, 10, 4) == (6, 10)

    def test_list_window_short_list(self):
        assert list_window(1, 3, 10) == (0, 3)

    def test_list_window_degenerate(self):
        assert list_window(0, 0, 5) == (0, 0)
        assert list_window(3, 10, 0) == (0, 0)

    def test_max_scroll(self):
        assert max_scroll(10, 4) == 6
        assert max_scroll(3, 4) == 0
        assert max_scroll(3, 0) == 3
