"""
Tests for responsive column layout and text fitting.
"""

import pytest

from vtuos.tui.layout import (
    Align,
    Breakpoint,
    ColumnSpec,
    align_cell,
    calculate_column_widths,
    content_height,
    content_width,
    get_breakpoint,
    progress_bar,
    render_row,
    row_width,
    side_by_side,
    truncate,
)


class TestColumnWidths:
    def test_all_columns_fit(self):
        specs = [ColumnSpec("A", 10, priority=3), ColumnSpec("B", 10, priority=2), ColumnSpec("C", 10, priority=1)]

        assert calculate_column_widths(specs, 100) == [10, 10, 10]

    def test_drops_lowest_priority(self):
        specs = [ColumnSpec("A", 20, priority=3), ColumnSpec("B", 20, priority=2), ColumnSpec("C", 20, priority=1)]

        widths = calculate_column_widths(specs, 50)

        assert widths[2] == 0
        assert widths[0] >= 20
        assert widths[1] >= 20

    def test_proportional_weights(self):
        specs = [
            ColumnSpec("Fixed", 10, priority=3),
            ColumnSpec("Flex1", 5, weight=1.0, priority=2),
            ColumnSpec("Flex2", 5, weight=2.0, priority=1),
        ]

        widths = calculate_column_widths(specs, 100)

        assert widths[0] == 10
        # remaining = 100 - 10 - 6 - 2 = 82
        assert widths[1:] == [27, 54]
        assert 1.5 <= widths[2] / widths[1] <= 2.5

    def test_weighted_columns_clamped_to_minimum(self):
        specs = [ColumnSpec("Fixed", 30, priority=2), ColumnSpec("Flex", 12, weight=1.0, priority=1)]

        # remaining = 40 - 30 - 3 - 2 = 5, below the flex minimum
        assert calculate_column_widths(specs, 40) == [30, 12]

    def test_ties_drop_first_in_input_order(self):
        specs = [ColumnSpec("A", 20, priority=1), ColumnSpec("B", 20, priority=1), ColumnSpec("C", 20, priority=5)]

        assert calculate_column_widths(specs, 50) == [0, 20, 20]

    def test_zero_priority_is_dropped_first(self):
        specs = [ColumnSpec("Keep", 20, priority=1), ColumnSpec("Zero", 20, priority=0)]

        assert calculate_column_widths(specs, 30) == [20, 0]

    def test_keeps_last_column_even_without_room(self):
        specs = [ColumnSpec("A", 30, priority=2), ColumnSpec("B", 30, weight=1.0, priority=1)]

        widths = calculate_column_widths(specs, 10)

        assert widths == [30, 0]

    def test_negative_remainder_gives_weighted_minimum(self):
        specs = [ColumnSpec("Only", 8, weight=1.0)]

        assert calculate_column_widths(specs, 3) == [8]

    @pytest.mark.parametrize("width", [0, 1, 15, 40, 80, 200])
    def test_output_matches_input_length(self, width):
        specs = [ColumnSpec(str(i), 5 + i, weight=float(i % 2), priority=i % 3) for i in range(7)]

        widths = calculate_column_widths(specs, width)

        assert len(widths) == len(specs)
        assert any(w > 0 for w in widths)

    def test_empty_column_list(self):
        assert calculate_column_widths([], 80) == []

    def test_rendered_row_fits_available_width(self):
        specs = [ColumnSpec("A", 10, priority=3), ColumnSpec("B", 10, weight=1.0, priority=2)]

        widths = calculate_column_widths(specs, 60)

        assert row_width(widths) <= 60


class TestBreakpoints:
    @pytest.mark.parametrize(
        "width,expected",
        [(40, Breakpoint.NARROW), (59, Breakpoint.NARROW), (60, Breakpoint.MEDIUM),
         (99, Breakpoint.MEDIUM), (100, Breakpoint.WIDE), (200, Breakpoint.WIDE)],
    )
    def test_get_breakpoint(self, width, expected):
        assert get_breakpoint(width) is expected


class TestTextFitting:
    def test_truncate_short_text_unchanged(self):
        assert truncate("Vault", 10) == "Vault"

    def test_truncate_adds_ellipsis(self):
        assert truncate("Overseer", 5) == "Over…"

    def test_truncate_tiny_widths_slice(self):
        assert truncate("Overseer", 3) == "Ove"
        assert truncate("Overseer", 0) == ""

    def test_align_cell_left_right_center(self):
        assert align_cell("42", 5) == "42   "
        assert align_cell("42", 5, Align.RIGHT) == "   42"
        assert align_cell("42", 6, Align.CENTER) == "  42  "

    def test_align_cell_replaces_last_char_with_ellipsis(self):
        assert align_cell("Washington", 6) == "Washi…"
        assert align_cell("abc", 2) == "a…"

    def test_render_row_skips_hidden_columns(self):
        specs = [ColumnSpec("ID", 3), ColumnSpec("Name", 6), ColumnSpec("Age", 3, Align.RIGHT)]

        row = render_row(["001", "Alexander", "7"], specs, [3, 0, 3])

        assert row == " 001 |   7 "

    def test_render_row_missing_cells_are_blank(self):
        specs = [ColumnSpec("ID", 3), ColumnSpec("Name", 4)]

        assert render_row(["001"], specs, [3, 4]) == " 001 |      "


class TestContentSizing:
    def test_content_width_clamps(self):
        assert content_width(200, 40, 120) == 120
        assert content_width(30, 40, 120) == 40
        assert content_width(200, 40, 0) == 200

    def test_content_height_minimum(self):
        assert content_height(10, 8) == 5
        assert content_height(40, 8) == 32

    def test_side_by_side_fits(self):
        out = side_by_side("AB\nCD", "XY", 20)
        assert out.split("\n")[0] == "AB" + " " * 8 + "XY"
        assert out.split("\n")[1] == "CD"

    def test_side_by_side_stacks_when_narrow(self):
        assert side_by_side("A" * 15, "B" * 15, 20) == "A" * 15 + "\n\n" + "B" * 15

    def test_progress_bar(self):
        assert progress_bar(5, 10, 10) == "[████░░░░]"
        assert progress_bar(20, 10, 6) == "[████]"
        assert progress_bar(3, 0, 6) == "[████]"
        assert progress_bar(0, 10, 2) == "[░░░░]"
