"""
Pytest configuration and shared fixtures for VT-UOS Population Console tests.
"""

import itertools
from datetime import date, datetime, timezone
from typing import Dict, List

import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from config.database import build_engine, init_db
from vtuos.facilities.service import FacilityService
from vtuos.models.common import Pagination
from vtuos.models.resident import (
    EntryType,
    Resident,
    ResidentList,
    ResidentStatus,
    Sex,
)
from vtuos.population.demographics import DemographicParameters
from vtuos.population.service import PopulationService
from vtuos.repository.facility_repo import FacilityRepository
from vtuos.repository.household_repo import HouseholdRepository
from vtuos.repository.resident_repo import ResidentRepository
from vtuos.utils.ids import format_registry_number, new_id

AS_OF = date(2102, 10, 23)
VAULT_NUMBER = 76


class InMemoryResidentSource:
    """Paginated resident store backed by a list, for engine tests."""

    def __init__(self, residents: List[Resident]):
        self.residents = list(residents)
        self.list_calls = 0

    def list_active(self, page: Pagination) -> ResidentList:
        self.list_calls += 1
        matching = [r for r in self.residents if r.status is ResidentStatus.ACTIVE]
        start = page.offset
        return ResidentList(
            residents=matching[start : start + page.limit],
            total=len(matching),
            page=page.page,
            page_size=page.limit,
            total_pages=page.total_pages(len(matching)),
        )

    def count_by_status(self) -> Dict[ResidentStatus, int]:
        counts = {status: 0 for status in ResidentStatus}
        for r in self.residents:
            counts[r.status] += 1
        return counts


class FailingResidentSource:
    """Record source whose every read fails."""

    def list_active(self, page):
        raise RuntimeError("record store offline")

    def count_by_status(self):
        raise RuntimeError("record store offline")


@pytest.fixture
def as_of() -> date:
    return AS_OF


@pytest.fixture
def make_resident():
    """Factory building valid residents aged ``age`` on AS_OF."""
    sequence = itertools.count(1)

    def _make(
        age: int = 30,
        sex: Sex = Sex.MALE,
        status: ResidentStatus = ResidentStatus.ACTIVE,
        surname: str = "Smith",
        given_names: str = "John",
        **kwargs,
    ) -> Resident:
        values = dict(
            id=new_id(),
            registry_number=format_registry_number(VAULT_NUMBER, next(sequence)),
            surname=surname,
            given_names=given_names,
            date_of_birth=date(AS_OF.year - age, 1, 15),
            sex=sex,
            entry_type=EntryType.ORIGINAL,
            entry_date=datetime(2077, 10, 23, 9, 47, tzinfo=timezone.utc),
            status=status,
        )
        if status is ResidentStatus.DECEASED:
            values["date_of_death"] = date(AS_OF.year - 1, 6, 1)
        values.update(kwargs)
        return Resident(**values)

    return _make


@pytest.fixture
def params() -> DemographicParameters:
    return DemographicParameters()


@pytest.fixture
def engine():
    """In-memory SQLite record store with the schema applied."""
    eng = build_engine("sqlite://", poolclass=StaticPool)
    init_db(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autoflush=False, bind=engine)


@pytest.fixture
def resident_repo(session_factory) -> ResidentRepository:
    return ResidentRepository(session_factory)


@pytest.fixture
def household_repo(session_factory) -> HouseholdRepository:
    return HouseholdRepository(session_factory)


@pytest.fixture
def service(session_factory) -> PopulationService:
    return PopulationService(session_factory, vault_number=VAULT_NUMBER, params=DemographicParameters())


@pytest.fixture
def facility_repo(session_factory) -> FacilityRepository:
    return FacilityRepository(session_factory)


@pytest.fixture
def facility_service(session_factory) -> FacilityService:
    return FacilityService(session_factory)
