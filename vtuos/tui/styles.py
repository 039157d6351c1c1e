"""
VT-UOS Population Console - Display Themes
Terminal colour schemes built on rich styles
"""

from dataclasses import dataclass
from typing import Dict

from rich.style import Style
from rich.text import Text

from config.settings import get_settings
from vtuos.tui.layout import bar_ratio, progress_bar


@dataclass(frozen=True)
class Theme:
    """Named styles for one colour scheme."""
    name: str
    primary: Style
    secondary: Style
    muted: Style
    header: Style
    title: Style
    row: Style
    row_alt: Style
    selected: Style
    border: Style
    success: Style
    warning: Style
    error: Style

    def render(self, text: str, style_name: str = "primary") -> Text:
        """Text carrying the named style of this theme."""
        return Text(text, style=getattr(self, style_name))

    def level_style(self, ratio: float) -> Style:
        """Bar colour: error below 25%, warning below 50%, success otherwise."""
        if ratio < 0.25:
            return self.error
        if ratio < 0.5:
            return self.warning
        return self.success

    def progress_bar(self, value: float, maximum: float, width: int) -> Text:
        return Text(
            progress_bar(value, maximum, width),
            style=self.level_style(bar_ratio(value, maximum)),
        )


def _phosphor(name: str, bright: str, normal: str, dim: str, dark: str) -> Theme:
    return Theme(
        name=name,
        primary=Style(color=normal),
        secondary=Style(color=dim),
        muted=Style(color=dim, dim=True),
        header=Style(color=bright, bold=True),
        title=Style(color=bright, bold=True, underline=True),
        row=Style(color=normal),
        row_alt=Style(color=dim),
        selected=Style(color=dark, bgcolor=bright, bold=True),
        border=Style(color=dim),
        success=Style(color=bright),
        warning=Style(color="#ffb000", bold=True),
        error=Style(color="#ff3333", bold=True),
    )


THEMES: Dict[str, Theme] = {
    "green_phosphor": _phosphor("green_phosphor", "#33ff33", "#20c020", "#0f7f0f", "#002200"),
    "amber": _phosphor("amber", "#ffb000", "#cc8c00", "#805800", "#221800"),
    "white": _phosphor("white", "#ffffff", "#d0d0d0", "#808080", "#1a1a1a"),
}


def get_theme(name: str = None) -> Theme:
    """Theme for ``name`` or for the configured COLOR_SCHEME."""
    name = name or get_settings().COLOR_SCHEME
    try:
        return THEMES[name]
    except KeyError:
        raise ValueError(f"Unknown colour scheme: {name}") from None
