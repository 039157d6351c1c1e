"""
VT-UOS Population Console - Responsive Layout
Column-width allocation and text fitting for variable-width terminals

Column widths are allocated by greedy elimination:
1. Fixed columns (weight 0) take exactly their minimum width
2. Separators (3 chars between visible columns) and row padding (2 chars) are reserved
3. While the remainder is negative and more than one column is visible,
   the visible column with the lowest drop priority is hidden
   (ties: the first such column in input order)
4. Weighted columns share the remainder in proportion to their weight,
   never dropping below their minimum width

Hidden columns get width 0 and are not rendered.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import List, Sequence

from rich.cells import cell_len

SEPARATOR = " | "
ROW_PADDING = 2  # Leading + trailing space
ELLIPSIS = "…"


class Align(str, Enum):
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"


class Breakpoint(IntEnum):
    """Terminal width thresholds"""
    NARROW = 60  # Under 60 columns (e.g. Pi Zero consoles)
    MEDIUM = 100
    WIDE = 140


@dataclass(frozen=True)
class ColumnSpec:
    """
    A table column descriptor.

    ``weight`` 0 makes the column fixed at ``min_width``; ``priority`` decides
    drop order when space runs out (lower is dropped first, 0 included).
    """
    title: str
    min_width: int
    align: Align = Align.LEFT
    weight: float = 0.0
    priority: int = 0

    @property
    def is_fixed(self) -> bool:
        return self.weight <= 0


def get_breakpoint(width: int) -> Breakpoint:
    if width < Breakpoint.NARROW:
        return Breakpoint.NARROW
    if width < Breakpoint.MEDIUM:
        return Breakpoint.MEDIUM
    return Breakpoint.WIDE


def calculate_column_widths(
    specs: Sequence[ColumnSpec], available_width: int, separator: int = len(SEPARATOR)
) -> List[int]:
    """Render width per column, 1:1 with ``specs``; 0 means hidden."""
    visible = [True] * len(specs)

    while True:
        shown = [i for i, is_visible in enumerate(visible) if is_visible]
        fixed_total = sum(specs[i].min_width for i in shown if specs[i].is_fixed)
        weight_total = sum(specs[i].weight for i in shown if not specs[i].is_fixed)
        separators = separator * (len(shown) - 1) if len(shown) > 1 else 0

        remaining = available_width - fixed_total - separators - ROW_PADDING
        if remaining >= 0 or len(shown) <= 1:
            break

        # min() keeps the first index among equal priorities
        drop = min(shown, key=lambda i: specs[i].priority)
        visible[drop] = False

    remaining = max(remaining, 0)

    widths = []
    for i, spec in enumerate(specs):
        if not visible[i]:
            widths.append(0)
        elif spec.is_fixed:
            widths.append(spec.min_width)
        else:
            share = int(remaining * spec.weight / weight_total)
            widths.append(max(share, spec.min_width))
    return widths


def _chop(text: str, width: int) -> str:
    out = []
    used = 0
    for ch in text:
        w = cell_len(ch)
        if used + w > width:
            break
        out.append(ch)
        used += w
    return "".join(out)


def truncate(text: str, max_width: int) -> str:
    """Shorten text to ``max_width`` cells, ending in an ellipsis when cut."""
    if max_width <= 0:
        return ""
    if cell_len(text) <= max_width:
        return text
    if max_width <= 3:
        return _chop(text, max_width)
    return _chop(text, max_width - 1) + ELLIPSIS


def pad_right(text: str, width: int) -> str:
    gap = width - cell_len(text)
    return text + " " * gap if gap > 0 else text


def pad_left(text: str, width: int) -> str:
    gap = width - cell_len(text)
    return " " * gap + text if gap > 0 else text


def align_cell(text: str, width: int, align: Align = Align.LEFT) -> str:
    """Fit ``text`` to exactly ``width`` cells; an over-long cell ends in an ellipsis."""
    if width <= 0:
        return ""
    if cell_len(text) > width:
        text = _chop(text, width - 1) + ELLIPSIS
    if align is Align.RIGHT:
        return pad_left(text, width)
    if align is Align.CENTER:
        gap = max(width - cell_len(text), 0)
        left = gap // 2
        return " " * left + text + " " * (gap - left)
    return pad_right(text, width)


def render_row(cells: Sequence[str], specs: Sequence[ColumnSpec], widths: Sequence[int]) -> str:
    """Join the visible cells of a row, each fitted to its assigned width."""
    parts = []
    for i, spec in enumerate(specs):
        if widths[i] <= 0:
            continue
        cell = cells[i] if i < len(cells) else ""
        parts.append(align_cell(cell, widths[i], spec.align))
    return " " + SEPARATOR.join(parts) + " "


def row_width(widths: Sequence[int]) -> int:
    shown = [w for w in widths if w > 0]
    if not shown:
        return ROW_PADDING
    return sum(shown) + len(SEPARATOR) * (len(shown) - 1) + ROW_PADDING


def content_width(term_width: int, min_width: int, max_width: int) -> int:
    """Usable width, at least ``min_width`` and at most ``max_width`` (0 = no cap)."""
    width = max(term_width, min_width)
    if max_width > 0:
        width = min(width, max_width)
    return width


def content_height(term_height: int, chrome_lines: int) -> int:
    return max(term_height - chrome_lines, 5)


def side_by_side(left: str, right: str, total_width: int, gap: int = 2) -> str:
    """Two blocks next to each other, or stacked when they do not fit."""
    left_lines = left.split("\n")
    right_lines = right.split("\n")
    left_width = max(cell_len(line) for line in left_lines)
    right_width = max(cell_len(line) for line in right_lines)

    if left_width + right_width + gap > total_width:
        return left + "\n\n" + right

    column = max(total_width // 2, left_width + gap)
    lines = []
    for i in range(max(len(left_lines), len(right_lines))):
        l = left_lines[i] if i < len(left_lines) else ""
        r = right_lines[i] if i < len(right_lines) else ""
        lines.append((pad_right(l, column) + r).rstrip())
    return "\n".join(lines)


def progress_bar(value: float, maximum: float, width: int) -> str:
    """[████░░░░] bar; the inner width is at least 4."""
    ratio = bar_ratio(value, maximum)
    inner = max(width - 2, 4)
    filled = int(ratio * inner)
    return "[" + "█" * filled + "░" * (inner - filled) + "]"


def bar_ratio(value: float, maximum: float) -> float:
    if maximum <= 0:
        maximum = 1
    return min(max(value / maximum, 0.0), 1.0)
