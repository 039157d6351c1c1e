"""
VT-UOS Population Console - Facility Systems View
Paginated infrastructure listing with category filter and system detail
"""

from datetime import date
from typing import List, Optional

from rich.style import Style
from rich.text import Text

from config.settings import get_settings
from vtuos.facilities.service import FacilityService
from vtuos.models.common import Pagination
from vtuos.models.facility import (
    FacilitySystem,
    FacilitySystemFilter,
    SystemCategory,
    SystemStatus,
)
from vtuos.tui.layout import Align, ColumnSpec
from vtuos.tui.styles import Theme, get_theme
from vtuos.tui.table import Table
from vtuos.utils.logging import get_logger
from vtuos.utils.time import format_date

logger = get_logger(__name__)
settings = get_settings()

EFFICIENCY_WARNING = 80.0
EFFICIENCY_CRITICAL = 50.0

SYSTEM_COLUMNS = [
    ColumnSpec("Code", 16, priority=10),
    ColumnSpec("Name", 20, weight=2.0, priority=9),
    ColumnSpec("Category", 12, priority=5),
    ColumnSpec("Status", 12, priority=8),
    ColumnSpec("Efficiency", 10, Align.RIGHT, priority=7),
    ColumnSpec("Sector", 6, priority=4),
    ColumnSpec("Level", 5, Align.RIGHT, priority=3),
    ColumnSpec("Maint Due", 10, priority=6),
]


def maintenance_due_cell(system: FacilitySystem, as_of: date) -> str:
    if system.next_maintenance_due is None:
        return "-"
    if system.is_overdue_for_maintenance(as_of):
        return "OVERDUE"
    return format_date(system.next_maintenance_due)


def system_row(system: FacilitySystem, as_of: date) -> List[str]:
    return [
        system.system_code,
        system.name,
        system.category.value,
        system.status.value,
        f"{system.efficiency_percent:.0f}%",
        system.location_sector,
        str(system.location_level),
        maintenance_due_cell(system, as_of),
    ]


class SystemsView:
    """Facility systems screen."""

    def __init__(self, service: FacilityService, as_of: date, theme: Optional[Theme] = None):
        self.service = service
        self.as_of = as_of
        self.theme = theme or get_theme()

        self.page = Pagination(page=1, page_size=settings.FACILITIES_PAGE_SIZE)
        self.filter = FacilitySystemFilter(overdue_as_of=as_of)
        self.systems: List[FacilitySystem] = []
        self.error: Optional[Exception] = None

        self.table = Table(SYSTEM_COLUMNS, visible_rows=self.page.limit, theme=self.theme)
        self.table.focus(True)

    def load(self) -> None:
        self.error = None
        try:
            result = self.service.list_systems(self.filter, self.page)
        except Exception as e:
            self.error = e
            logger.error(f"Failed to load facility systems page {self.page.page}: {e}")
            raise

        self.systems = result.systems
        self.table.set_rows([system_row(s, self.as_of) for s in self.systems])
        self.table.set_pagination(result.page, result.total_pages, result.total)

    def set_category_filter(self, category: Optional[SystemCategory]) -> None:
        self.filter.category = category
        self.page = Pagination(page=1, page_size=self.page.page_size)

    def set_overdue_only(self, overdue_only: bool) -> None:
        self.filter.overdue_only = overdue_only
        self.page = Pagination(page=1, page_size=self.page.page_size)

    def next_page(self) -> None:
        if self.table.total_pages and self.page.page >= self.table.total_pages:
            return
        self.page = self.page.next_page()

    def prev_page(self) -> None:
        if self.page.page > 1:
            self.page = Pagination(page=self.page.page - 1, page_size=self.page.page_size)

    def move_up(self) -> None:
        self.table.move_up()

    def move_down(self) -> None:
        self.table.move_down()

    @property
    def selected_system(self) -> Optional[FacilitySystem]:
        if 0 <= self.table.selected < len(self.systems):
            return self.systems[self.table.selected]
        return None

    def render(self, width: int) -> Text:
        t = self.theme
        out = Text()
        out.append("=== FACILITY SYSTEMS ===", style=t.title)
        out.append("\n\n")

        if self.filter.category:
            out.append("Category: ", style=t.secondary)
            out.append(self.filter.category.value, style=t.primary)
            out.append("\n")
        if self.filter.overdue_only:
            out.append("Overdue maintenance only", style=t.warning)
            out.append("\n")
        if self.filter.category or self.filter.overdue_only:
            out.append("\n")

        if self.error is not None:
            out.append(f"Error: {self.error}", style=t.error)
            out.append("\n")
        elif self.table.empty:
            out.append("No facility systems found.", style=t.secondary)
            out.append("\n")
        else:
            out.append_text(self.table.render(width))
        return out

    def status_style(self, status: SystemStatus) -> Style:
        if status in (SystemStatus.FAILED, SystemStatus.DESTROYED):
            return self.theme.error
        if status in (SystemStatus.DEGRADED, SystemStatus.OFFLINE, SystemStatus.MAINTENANCE):
            return self.theme.warning
        return self.theme.primary

    def efficiency_style(self, efficiency: float) -> Style:
        if efficiency < EFFICIENCY_CRITICAL:
            return self.theme.error
        if efficiency < EFFICIENCY_WARNING:
            return self.theme.warning
        return self.theme.primary

    def render_detail(self, system: Optional[FacilitySystem] = None) -> Text:
        system = system or self.selected_system
        t = self.theme
        out = Text()
        if system is None:
            out.append("No system selected", style=t.secondary)
            return out

        def line(label: str, value: str, style: Optional[Style] = None) -> None:
            out.append(f"{label:<14}", style=t.secondary)
            out.append(value, style=style or t.primary)
            out.append("\n")

        out.append("=== SYSTEM DETAILS ===", style=t.title)
        out.append("\n\nIDENTIFICATION\n", style=t.header)
        line("Code:", system.system_code)
        line("Name:", system.name)
        line("Category:", system.category.value)
        line("Location:", f"Sector {system.location_sector}, Level {system.location_level}")

        out.append("\nSTATUS\n", style=t.header)
        line("Status:", system.status.value, self.status_style(system.status))
        line(
            "Efficiency:",
            f"{system.efficiency_percent:.1f}%",
            self.efficiency_style(system.efficiency_percent),
        )
        if system.current_output is not None:
            line("Output:", f"{system.current_output:.1f} {system.capacity_unit}".rstrip())
        if system.capacity_rating is not None:
            line("Capacity:", f"{system.capacity_rating:.1f} {system.capacity_unit}".rstrip())

        out.append("\nMAINTENANCE\n", style=t.header)
        line("Installed:", format_date(system.install_date))
        if system.last_maintenance_date:
            line("Last Service:", format_date(system.last_maintenance_date))
        due = maintenance_due_cell(system, self.as_of)
        line("Next Due:", due, t.error if due == "OVERDUE" else None)
        line("Interval:", f"{system.maintenance_interval_days} days")

        if system.notes:
            out.append("\nNOTES\n", style=t.header)
            out.append(system.notes, style=t.primary)
            out.append("\n")
        return out
