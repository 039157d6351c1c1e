"""
Tests for the table component: navigation, pagination and rendering.
"""

import pytest
from rich.text import Text

from vtuos.tui.layout import Align, ColumnSpec
from vtuos.tui.styles import THEMES, get_theme
from vtuos.tui.table import Table


@pytest.fixture
def columns():
    return [ColumnSpec("ID", 5, priority=2), ColumnSpec("Name", 10, priority=1)]


@pytest.fixture
def table(columns):
    t = Table(columns, visible_rows=3, theme=get_theme("green_phosphor"))
    t.set_rows([[str(i), f"Row {i}"] for i in range(10)])
    return t


class TestNavigation:
    def test_move_down_scrolls_window(self, table):
        for _ in range(4):
            table.move_down()

        assert table.selected == 4
        assert table.offset == 2

    def test_move_up_stops_at_top(self, table):
        table.move_up()
        assert table.selected == 0

        table.move_down()
        table.move_up()
        assert table.selected == 0
        assert table.offset == 0

    def test_move_down_stops_at_bottom(self, table):
        for _ in range(20):
            table.move_down()
        assert table.selected == 9

    def test_page_down_and_up(self, table):
        table.page_down()
        assert table.selected == 3
        assert table.offset == 1

        table.page_up()
        assert table.selected == 0
        assert table.offset == 0

    def test_page_down_clamps(self, table):
        for _ in range(5):
            table.page_down()
        assert table.selected == 9
        assert table.offset == 7

    def test_top_and_bottom(self, table):
        table.go_to_bottom()
        assert table.selected == 9
        assert table.offset == 7

        table.go_to_top()
        assert table.selected == 0
        assert table.offset == 0

    def test_selected_row(self, table):
        table.move_down()
        assert table.selected_row == ["1", "Row 1"]

    def test_empty_table(self, columns):
        t = Table(columns)

        t.page_down()
        t.go_to_bottom()

        assert t.empty
        assert t.row_count == 0
        assert t.selected == 0
        assert t.selected_row is None

    def test_set_rows_keeps_selection_in_range(self, table):
        table.go_to_bottom()
        table.set_rows([["1", "Only"]])

        assert table.selected == 0
        assert table.offset == 0


class TestRendering:
    def test_contains_headers_and_rows(self, table):
        lines = table.render_lines(80)

        assert "ID" in lines[0]
        assert "Name" in lines[0]
        assert set(lines[1]) == {"-"}
        assert any("Row 0" in line for line in lines)

    def test_only_visible_window_is_rendered(self, table):
        table.go_to_bottom()
        body = "\n".join(table.render_lines(80)[2:])

        assert "Row 9" in body
        assert "Row 6" not in body

    def test_pagination_footer(self, table):
        table.set_pagination(1, 5, 100)

        lines = table.render_lines(80)

        assert lines[-1] == "Page 1/5 | 100 total"

    def test_no_footer_without_pagination(self, table):
        assert not any("total" in line for line in table.render_lines(80))

    def test_hides_low_priority_column_when_narrow(self):
        t = Table([ColumnSpec("ID", 15, priority=2), ColumnSpec("Extra", 15, priority=1)])
        t.set_rows([["001", "Details"]])

        output = "\n".join(t.render_lines(20))

        assert "ID" in output
        assert "Details" not in output

    def test_unknown_width_uses_minimums(self, columns):
        t = Table(columns)
        t.set_rows([["1", "Alice"]])

        lines = t.render_lines(0)

        assert lines[2] == " 1     | Alice      "

    def test_right_aligned_cell(self):
        t = Table([ColumnSpec("Value", 10, Align.RIGHT)])
        t.set_rows([["42"]])

        assert t.render_lines(80)[2] == " " + " " * 8 + "42 "

    def test_styled_render_matches_plain_lines(self, table):
        table.focus(True)
        table.set_pagination(2, 4, 40)

        text = table.render(60)

        assert isinstance(text, Text)
        assert text.plain == "\n".join(table.render_lines(60))

    def test_selected_row_is_highlighted_when_focused(self, table):
        table.focus(True)
        text = table.render(60)

        selected_style = table.theme.selected
        assert any(span.style == selected_style for span in text.spans)


def test_every_configured_scheme_has_a_theme():
    from config.settings import COLOR_SCHEMES

    assert set(THEMES) == set(COLOR_SCHEMES)


def test_unknown_theme_rejected():
    with pytest.raises(ValueError):
        get_theme("ultraviolet")


def test_theme_render_returns_styled_text():
    theme = get_theme("amber")

    text = theme.render("VAULT-TEC", "header")

    assert text.plain == "VAULT-TEC"
    assert text.style == theme.header
