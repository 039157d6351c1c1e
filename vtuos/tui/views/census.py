"""
VT-UOS Population Console - Census View
Paginated resident listing with search and status filtering
"""

from datetime import date
from typing import List, Optional

from rich.text import Text

from config.settings import get_settings
from vtuos.models.common import Pagination
from vtuos.models.resident import Resident, ResidentFilter, ResidentStatus
from vtuos.population.service import PopulationService
from vtuos.tui.layout import Align, ColumnSpec
from vtuos.tui.styles import Theme, get_theme
from vtuos.tui.table import Table
from vtuos.utils.logging import get_logger
from vtuos.utils.time import format_date

logger = get_logger(__name__)
settings = get_settings()

# Identity columns outlive the rest as the terminal narrows
CENSUS_COLUMNS = [
    ColumnSpec("Registry #", 10, priority=10),
    ColumnSpec("Surname", 10, weight=1.0, priority=9),
    ColumnSpec("Given Names", 12, weight=1.5, priority=8),
    ColumnSpec("Age", 3, Align.RIGHT, priority=7),
    ColumnSpec("Sex", 3, priority=6),
    ColumnSpec("Blood", 5, priority=3),
    ColumnSpec("Status", 15, priority=5),
    ColumnSpec("Entry", 10, priority=2),
    ColumnSpec("Clr", 3, Align.RIGHT, priority=1),
]


def resident_row(resident: Resident, as_of: date) -> List[str]:
    return [
        resident.registry_number,
        resident.surname,
        resident.given_names,
        str(resident.age(as_of)),
        resident.sex.value if resident.sex else "-",
        resident.blood_type.value if resident.blood_type else "-",
        resident.status.value,
        resident.entry_type.value,
        str(resident.clearance_level),
    ]


class CensusView:
    """Population census screen."""

    def __init__(self, service: PopulationService, as_of: date, theme: Optional[Theme] = None):
        self.service = service
        self.as_of = as_of
        self.theme = theme or get_theme()

        self.page = Pagination(page=1, page_size=settings.CENSUS_PAGE_SIZE)
        self.filter = ResidentFilter()
        self.residents: List[Resident] = []
        self.error: Optional[Exception] = None

        self.table = Table(CENSUS_COLUMNS, visible_rows=self.page.limit, theme=self.theme)
        self.table.focus(True)

    def load(self) -> None:
        """Fetch the current page; record-store errors are kept for display and re-raised."""
        self.error = None
        try:
            result = self.service.list_residents(self.filter, self.page)
        except Exception as e:
            self.error = e
            logger.error(f"Failed to load census page {self.page.page}: {e}")
            raise

        self.residents = result.residents
        self.table.set_rows([resident_row(r, self.as_of) for r in self.residents])
        self.table.set_pagination(result.page, result.total_pages, result.total)

    def set_search(self, term: str) -> None:
        self.filter.search_term = term or ""
        self.page = Pagination(page=1, page_size=self.page.page_size)

    def set_status_filter(self, status: Optional[ResidentStatus]) -> None:
        self.filter.status = status
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
    def selected_resident(self) -> Optional[Resident]:
        if 0 <= self.table.selected < len(self.residents):
            return self.residents[self.table.selected]
        return None

    def render(self, width: int) -> Text:
        t = self.theme
        out = Text()
        out.append("=== POPULATION CENSUS ===", style=t.title)
        out.append("\n\n")

        if self.filter.search_term:
            out.append("Search: ", style=t.secondary)
            out.append(self.filter.search_term, style=t.primary)
            out.append("\n")
        if self.filter.status:
            out.append("Status: ", style=t.secondary)
            out.append(self.filter.status.value, style=t.primary)
            out.append("\n")
        if self.filter.search_term or self.filter.status:
            out.append("\n")

        if self.error is not None:
            out.append(f"Error: {self.error}", style=t.error)
            out.append("\n")
        elif self.table.empty:
            out.append("No residents found.", style=t.secondary)
            out.append("\n")
        else:
            out.append_text(self.table.render(width))
        return out

    def render_detail(self, resident: Optional[Resident] = None) -> Text:
        resident = resident or self.selected_resident
        t = self.theme
        out = Text()
        if resident is None:
            out.append("No resident selected", style=t.secondary)
            return out

        def line(label: str, value: str) -> None:
            out.append(f"{label:<18}", style=t.secondary)
            out.append(value, style=t.primary)
            out.append("\n")

        out.append("=== RESIDENT DETAILS ===", style=t.title)
        out.append("\n\nIDENTITY\n", style=t.header)
        line("Registry #:", resident.registry_number)
        line("Name:", resident.full_name)
        line("Sex:", resident.sex.label if resident.sex else "Unknown")
        if resident.blood_type:
            line("Blood Type:", resident.blood_type.value)

        out.append("\nDATES\n", style=t.header)
        line("Date of Birth:", format_date(resident.date_of_birth))
        line("Age:", f"{resident.age(self.as_of)} years")
        line("Entry Type:", resident.entry_type.value)
        if resident.entry_date:
            line("Entry Date:", format_date(resident.entry_date))
        if resident.date_of_death:
            line("Date of Death:", format_date(resident.date_of_death))

        out.append("\nSTATUS\n", style=t.header)
        line("Status:", resident.status.value)
        line("Clearance:", str(resident.clearance_level))
        if resident.household_id:
            line("Household:", resident.household_id[-8:])

        if resident.notes:
            out.append("\nNOTES\n", style=t.header)
            out.append(resident.notes, style=t.primary)
            out.append("\n")
        return out
