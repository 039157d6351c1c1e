"""
VT-UOS Population Console - Table Component
Scrollable, paginated table rendered through the responsive layout engine
"""

from typing import List, Optional, Sequence

from rich.text import Text

from vtuos.tui.layout import ColumnSpec, calculate_column_widths, render_row, row_width
from vtuos.tui.styles import Theme, get_theme


class Table:
    """
    A selectable table of string cells.

    Rows beyond ``visible_rows`` scroll; the selection only highlights while
    the table is focused. Pagination info is display-only, the caller loads
    each page.
    """

    def __init__(self, columns: Sequence[ColumnSpec], visible_rows: int = 10, theme: Optional[Theme] = None):
        self.columns = list(columns)
        self.rows: List[List[str]] = []
        self.selected = 0
        self.offset = 0
        self.visible_rows = visible_rows
        self.focused = False
        self.theme = theme or get_theme()

        self.current_page = 0
        self.total_pages = 0
        self.total_rows = 0

    def set_rows(self, rows: Sequence[Sequence[str]]) -> None:
        self.rows = [list(row) for row in rows]
        self.selected = min(self.selected, max(len(self.rows) - 1, 0))
        self.offset = min(self.offset, self.selected)

    def set_pagination(self, page: int, total_pages: int, total_rows: int) -> None:
        self.current_page = page
        self.total_pages = total_pages
        self.total_rows = total_rows

    def focus(self, focused: bool = True) -> None:
        self.focused = focused

    @property
    def empty(self) -> bool:
        return len(self.rows) == 0

    @property
    def row_count(self) -> int:
        return len(self.rows)

    @property
    def selected_row(self) -> Optional[List[str]]:
        if 0 <= self.selected < len(self.rows):
            return self.rows[self.selected]
        return None

    # Navigation

    def move_up(self) -> None:
        if self.selected > 0:
            self.selected -= 1
            if self.selected < self.offset:
                self.offset = self.selected

    def move_down(self) -> None:
        if self.selected < len(self.rows) - 1:
            self.selected += 1
            if self.selected >= self.offset + self.visible_rows:
                self.offset = self.selected - self.visible_rows + 1

    def page_up(self) -> None:
        self.selected = max(self.selected - self.visible_rows, 0)
        self.offset = self.selected

    def page_down(self) -> None:
        self.selected = min(self.selected + self.visible_rows, len(self.rows) - 1)
        self.selected = max(self.selected, 0)
        self.offset = max(self.selected - self.visible_rows + 1, 0)

    def go_to_top(self) -> None:
        self.selected = 0
        self.offset = 0

    def go_to_bottom(self) -> None:
        if self.rows:
            self.selected = len(self.rows) - 1
            self.offset = max(self.selected - self.visible_rows + 1, 0)

    # Rendering

    def column_widths(self, width: int) -> List[int]:
        # Unknown terminal width: every column at its minimum
        if width <= 0:
            return [c.min_width for c in self.columns]
        return calculate_column_widths(self.columns, width)

    def footer(self) -> str:
        return f"Page {self.current_page}/{self.total_pages} | {self.total_rows} total"

    def render_lines(self, width: int) -> List[str]:
        """Plain-text lines: header, rule, visible rows, then the pagination footer."""
        widths = self.column_widths(width)
        rule = "-" * row_width(widths)

        lines = [render_row([c.title for c in self.columns], self.columns, widths), rule]
        end = min(self.offset + self.visible_rows, len(self.rows))
        for i in range(self.offset, end):
            lines.append(render_row(self.rows[i], self.columns, widths))

        if self.total_pages > 0:
            lines.append(rule)
            lines.append(self.footer())
        return lines

    def render(self, width: int) -> Text:
        """Styled rendering of ``render_lines``."""
        lines = self.render_lines(width)
        out = Text()

        out.append(lines[0], style=self.theme.header)
        out.append("\n")
        out.append(lines[1], style=self.theme.border)

        body = lines[2:-2] if self.total_pages > 0 else lines[2:]
        for n, line in enumerate(body):
            index = self.offset + n
            if self.focused and index == self.selected:
                style = self.theme.selected
            elif n % 2 == 1:
                style = self.theme.row_alt
            else:
                style = self.theme.row
            out.append("\n")
            out.append(line, style=style)

        if self.total_pages > 0:
            for line in lines[-2:]:
                out.append("\n")
                out.append(line, style=self.theme.border)
        return out
