from datetime import date, datetime

import pytest

from vtuos.models.common import Pagination
from vtuos.models.facility import (
    FacilitySystem,
    MaintenanceOutcome,
    MaintenanceRecord,
    MaintenanceType,
    SystemCategory,
    SystemStatus,
)
from vtuos.models.household import Household, HouseholdStatus, HouseholdType
from vtuos.models.resident import EntryType, ResidentStatus, Sex
from vtuos.utils.errors import ValidationError

from tests.conftest import AS_OF


class TestResident:
    def test_full_name_and_age(self, make_resident):
        resident = make_resident(age=30, surname="Garcia", given_names="Maria Rose")

        assert resident.full_name == "Garcia, Maria Rose"
        assert resident.age(AS_OF) == 30
        assert resident.is_adult(AS_OF)
        assert resident.is_working_age(AS_OF)

    def test_age_helpers_at_boundaries(self, make_resident):
        assert not make_resident(age=17).is_adult(AS_OF)
        assert make_resident(age=16).is_working_age(AS_OF)
        assert not make_resident(age=66).is_working_age(AS_OF)

    def test_is_alive_follows_status(self, make_resident):
        assert make_resident().is_alive
        assert make_resident(status=ResidentStatus.EXILED).is_alive
        assert not make_resident(status=ResidentStatus.DECEASED).is_alive

    def test_sex_label(self):
        assert Sex.MALE.label == "Male"
        assert Sex.FEMALE.label == "Female"

    def test_valid_resident_passes(self, make_resident):
        make_resident().validate()

    @pytest.mark.parametrize(
        "changes,message",
        [
            ({"surname": ""}, "surname"),
            ({"given_names": ""}, "given_names"),
            ({"sex": "X"}, "sex"),
            ({"clearance_level": 0}, "clearance_level"),
            ({"clearance_level": 11}, "clearance_level"),
            ({"entry_date": None}, "entry_date"),
        ],
    )
    def test_invalid_fields(self, make_resident, changes, message):
        resident = make_resident(**changes)

        with pytest.raises(ValidationError, match=message):
            resident.validate()

    def test_vault_born_needs_both_parents(self, make_resident):
        resident = make_resident(entry_type=EntryType.VAULT_BORN, biological_parent_1_id="p1")

        with pytest.raises(ValidationError, match="parents"):
            resident.validate()

    def test_deceased_needs_date_of_death(self, make_resident):
        resident = make_resident(status=ResidentStatus.DECEASED, date_of_death=None)

        with pytest.raises(ValidationError, match="date_of_death"):
            resident.validate()

    def test_validation_error_is_value_error(self, make_resident):
        with pytest.raises(ValueError):
            make_resident(surname="").validate()


class TestHousehold:
    def test_dissolved_needs_date(self):
        household = Household(
            id="h1",
            designation="H-0001",
            household_type=HouseholdType.FAMILY,
            formed_date=date(2077, 10, 23),
            status=HouseholdStatus.DISSOLVED,
        )

        assert not household.is_active
        with pytest.raises(ValidationError, match="dissolved_date"):
            household.validate()


class TestPagination:
    def test_offset_and_limit(self):
        page = Pagination(page=3, page_size=25)

        assert page.limit == 25
        assert page.offset == 50

    def test_limit_bounds(self):
        assert Pagination(page_size=0).limit == 25
        assert Pagination(page_size=500).limit == 100

    def test_total_pages(self):
        page = Pagination(page_size=10)

        assert page.total_pages(0) == 1
        assert page.total_pages(10) == 1
        assert page.total_pages(11) == 2

    def test_next_page(self):
        assert Pagination(page=1, page_size=10).next_page() == Pagination(page=2, page_size=10)

    def test_page_below_one_starts_at_zero_offset(self):
        assert Pagination(page=0).offset == 0


def _facility_system(**kwargs):
    values = dict(
        id="sys-1",
        system_code="HVAC-AIR-01",
        name="Primary Air Handler",
        category=SystemCategory.HVAC,
        location_sector="B",
        install_date=date(2077, 1, 1),
    )
    values.update(kwargs)
    return FacilitySystem(**values)


class TestFacilitySystem:
    def test_operational_statuses(self):
        assert SystemStatus.OPERATIONAL.is_operational
        assert SystemStatus.DEGRADED.is_operational
        assert not SystemStatus.MAINTENANCE.is_operational
        assert not _facility_system(status=SystemStatus.FAILED).is_operational

    def test_overdue_only_after_due_date(self):
        system = _facility_system(next_maintenance_due=AS_OF)

        assert not system.is_overdue_for_maintenance(AS_OF)
        assert system.is_overdue_for_maintenance(date(2102, 10, 24))
        assert system.is_overdue_for_maintenance(datetime(2102, 10, 24, 0, 1))
        assert not _facility_system().is_overdue_for_maintenance(AS_OF)

    def test_valid_system_passes(self):
        _facility_system().validate()

    @pytest.mark.parametrize(
        "changes,message",
        [
            ({"system_code": ""}, "system_code"),
            ({"name": ""}, "name"),
            ({"category": "LAUNDRY"}, "category"),
            ({"status": "BROKEN"}, "status"),
            ({"efficiency_percent": 100.5}, "efficiency_percent"),
            ({"efficiency_percent": -1.0}, "efficiency_percent"),
            ({"install_date": None}, "install_date"),
            ({"maintenance_interval_days": 0}, "maintenance_interval_days"),
        ],
    )
    def test_invalid_system_rejected(self, changes, message):
        with pytest.raises(ValidationError, match=message):
            _facility_system(**changes).validate()


class TestMaintenanceRecord:
    def test_is_complete(self):
        record = MaintenanceRecord("rec-1", "sys-1", MaintenanceType.INSPECTION, "Walkdown")

        assert not record.is_complete
        record.outcome = MaintenanceOutcome.PARTIAL
        assert not record.is_complete
        record.outcome = MaintenanceOutcome.COMPLETED
        assert record.is_complete

    def test_invalid_outcome_rejected(self):
        record = MaintenanceRecord(
            "rec-1", "sys-1", MaintenanceType.UPGRADE, "Firmware", outcome="DONE"
        )

        with pytest.raises(ValidationError, match="outcome"):
            record.validate()
