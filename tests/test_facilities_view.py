"""
Tests for the facility systems screen.
"""

from datetime import date

import pytest
from rich.text import Text

from vtuos.facilities.service import CreateSystemInput, UpdateSystemInput
from vtuos.models.facility import FacilitySystem, SystemCategory, SystemStatus
from vtuos.tui.styles import get_theme
from vtuos.tui.views.facilities import (
    SYSTEM_COLUMNS,
    SystemsView,
    maintenance_due_cell,
    system_row,
)
from vtuos.utils.ids import new_id

from tests.conftest import AS_OF


def _system(**kwargs):
    values = dict(
        id=new_id(),
        system_code="WTR-PURIFIER-01",
        name="Water Purifier",
        category=SystemCategory.WATER,
        location_sector="C",
        location_level=2,
        install_date=date(2077, 1, 1),
        efficiency_percent=87.4,
        next_maintenance_due=date(2102, 11, 30),
    )
    values.update(kwargs)
    return FacilitySystem(**values)


@pytest.fixture
def populated(facility_service):
    categories = [SystemCategory.POWER, SystemCategory.WATER, SystemCategory.HVAC]
    for i in range(30):
        facility_service.create_system(
            CreateSystemInput(
                system_code=f"SYS-{i:02d}",
                name=f"System {i:02d}",
                category=categories[i % 3],
                location_sector="A",
                location_level=1 + i % 4,
                install_date=date(2102, 9, 1),
            )
        )
    return facility_service


def test_system_row():
    row = system_row(_system(), AS_OF)

    assert len(row) == len(SYSTEM_COLUMNS)
    assert row == [
        "WTR-PURIFIER-01", "Water Purifier", "WATER", "OPERATIONAL",
        "87%", "C", "2", "2102-11-30",
    ]


def test_maintenance_due_cell():
    assert maintenance_due_cell(_system(next_maintenance_due=None), AS_OF) == "-"
    assert maintenance_due_cell(_system(next_maintenance_due=date(2102, 10, 1)), AS_OF) == "OVERDUE"
    assert maintenance_due_cell(_system(next_maintenance_due=AS_OF), AS_OF) == "2102-10-23"


class TestSystemsView:
    def test_render_first_page(self, populated):
        view = SystemsView(populated, AS_OF, get_theme("amber"))
        view.load()

        text = view.render(120)

        assert isinstance(text, Text)
        assert text.plain.startswith("=== FACILITY SYSTEMS ===")
        assert "Maint Due" in text.plain
        assert "Page 1/2 | 30 total" in text.plain

    def test_paging(self, populated):
        view = SystemsView(populated, AS_OF)
        view.load()

        view.next_page()
        view.load()
        assert "Page 2/2" in view.render(120).plain
        assert len(view.systems) == 5

        view.next_page()
        assert view.page.page == 2

        view.prev_page()
        view.prev_page()
        assert view.page.page == 1

    def test_category_filter_resets_to_first_page(self, populated):
        view = SystemsView(populated, AS_OF)
        view.load()
        view.next_page()

        view.set_category_filter(SystemCategory.HVAC)
        view.load()

        assert view.page.page == 1
        assert len(view.systems) == 10
        assert {s.category for s in view.systems} == {SystemCategory.HVAC}
        assert "Category: HVAC" in view.render(120).plain

    def test_overdue_filter(self, populated):
        view = SystemsView(populated, date(2103, 1, 1))
        view.set_overdue_only(True)
        view.load()

        plain = view.render(120).plain
        assert "Overdue maintenance only" in plain
        assert "OVERDUE" in plain
        assert len(view.systems) == 25

    def test_narrow_render_hides_low_priority_columns(self, populated):
        view = SystemsView(populated, AS_OF)
        view.load()

        header = view.render(50).plain.splitlines()[2]

        assert "Code" in header
        assert "Level" not in header
        assert "Sector" not in header

    def test_empty_result(self, facility_service):
        view = SystemsView(facility_service, AS_OF)
        view.load()

        assert "No facility systems found." in view.render(80).plain
        assert view.selected_system is None
        assert view.render_detail().plain == "No system selected"

    def test_load_error_is_shown_and_raised(self, facility_service, monkeypatch):
        def broken(flt, page):
            raise RuntimeError("telemetry bus down")

        monkeypatch.setattr(facility_service, "list_systems", broken)
        view = SystemsView(facility_service, AS_OF)

        with pytest.raises(RuntimeError):
            view.load()
        assert "Error: telemetry bus down" in view.render(80).plain

    def test_selection_and_detail(self, populated):
        view = SystemsView(populated, AS_OF)
        view.load()

        view.move_down()
        selected = view.selected_system
        detail = view.render_detail().plain

        assert selected is view.systems[1]
        assert "IDENTIFICATION" in detail
        assert selected.system_code in detail
        assert f"Sector A, Level {selected.location_level}" in detail
        assert "100.0%" in detail
        assert "Interval:" in detail

    def test_detail_styles_follow_status_and_efficiency(self, facility_service):
        theme = get_theme("green_phosphor")
        view = SystemsView(facility_service, AS_OF, theme)

        assert view.status_style(SystemStatus.OPERATIONAL) == theme.primary
        assert view.status_style(SystemStatus.MAINTENANCE) == theme.warning
        assert view.status_style(SystemStatus.DESTROYED) == theme.error
        assert view.efficiency_style(92.0) == theme.primary
        assert view.efficiency_style(79.9) == theme.warning
        assert view.efficiency_style(49.9) == theme.error

    def test_detail_shows_output_and_overdue(self, facility_service):
        system = facility_service.create_system(
            CreateSystemInput(
                system_code="PWR-01",
                name="Reactor",
                category=SystemCategory.POWER,
                location_sector="A",
                location_level=3,
                install_date=date(2100, 1, 1),
                capacity_rating=500.0,
                capacity_unit="MW",
            )
        )
        facility_service.update_system(system.id, UpdateSystemInput(current_output=412.5))
        view = SystemsView(facility_service, AS_OF)

        detail = view.render_detail(facility_service.get_system(system.id)).plain

        assert "412.5 MW" in detail
        assert "500.0 MW" in detail
        assert "OVERDUE" in detail
