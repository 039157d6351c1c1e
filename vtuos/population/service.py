"""
VT-UOS Population Console - Population Service
Resident and household management plus demographic analysis entry points
"""

from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import sessionmaker

from config.database import SessionLocal, session_scope
from config.settings import get_settings
from vtuos.models.common import Pagination
from vtuos.models.household import (
    Household,
    HouseholdFilter,
    HouseholdList,
    HouseholdStatus,
    HouseholdType,
    RationClass,
)
from vtuos.models.resident import (
    BloodType,
    EntryType,
    Resident,
    ResidentFilter,
    ResidentList,
    ResidentStatus,
    Sex,
)
from vtuos.population.demographics import (
    AgeDistribution,
    DemographicParameters,
    DemographicsEngine,
    DemographicsReport,
    PopulationProjection,
    PopulationStats,
    SexDistribution,
    WorkforceStats,
)
from vtuos.population.genetics import calculate_coi
from vtuos.repository.household_repo import HouseholdRepository
from vtuos.repository.resident_repo import ResidentRepository
from vtuos.utils.errors import InvalidOperationError, NotFoundError
from vtuos.utils.ids import new_id
from vtuos.utils.logging import get_logger
from vtuos.utils.time import DateLike

logger = get_logger(__name__)
settings = get_settings()


@dataclass
class CreateResidentInput:
    surname: str
    given_names: str
    date_of_birth: date
    sex: Sex
    entry_type: EntryType = EntryType.ORIGINAL
    entry_date: Optional[datetime] = None
    blood_type: Optional[BloodType] = None
    biological_parent_1_id: Optional[str] = None
    biological_parent_2_id: Optional[str] = None
    household_id: Optional[str] = None
    clearance_level: int = 1
    notes: str = ""


@dataclass
class UpdateResidentInput:
    """Fields left as None are not changed"""
    surname: Optional[str] = None
    given_names: Optional[str] = None
    blood_type: Optional[BloodType] = None
    status: Optional[ResidentStatus] = None
    date_of_death: Optional[date] = None
    household_id: Optional[str] = None
    clearance_level: Optional[int] = None
    notes: Optional[str] = None


@dataclass
class BirthRegistration:
    surname: str
    given_names: str
    date_of_birth: date
    sex: Sex
    parent1_id: str
    parent2_id: str
    household_id: Optional[str] = None
    blood_type: Optional[BloodType] = None
    notes: str = ""


@dataclass
class DeathRegistration:
    date_of_death: date
    cause: str = ""  # Appended to the resident's notes


@dataclass
class CreateHouseholdInput:
    household_type: HouseholdType
    formed_date: date
    head_of_household_id: Optional[str] = None
    ration_class: RationClass = RationClass.STANDARD


class PopulationService:
    """Population management operations for one vault."""

    def __init__(
        self,
        session_factory: Optional[sessionmaker] = None,
        vault_number: Optional[int] = None,
        params: Optional[DemographicParameters] = None,
    ):
        self._session_factory = session_factory or SessionLocal
        self.vault_number = vault_number or settings.VAULT_NUMBER
        self.residents = ResidentRepository(self._session_factory)
        self.households = HouseholdRepository(self._session_factory)
        self.demographics = DemographicsEngine(self.residents, params)

    # ------------------------------------------------------------------
    # Residents
    # ------------------------------------------------------------------

    def create_resident(self, data: CreateResidentInput) -> Resident:
        resident = Resident(
            id=new_id(),
            registry_number=self.residents.next_registry_number(self.vault_number),
            surname=data.surname,
            given_names=data.given_names,
            date_of_birth=data.date_of_birth,
            sex=data.sex,
            entry_type=data.entry_type,
            entry_date=data.entry_date or datetime.now(timezone.utc),
            status=ResidentStatus.ACTIVE,
            blood_type=data.blood_type,
            biological_parent_1_id=data.biological_parent_1_id,
            biological_parent_2_id=data.biological_parent_2_id,
            household_id=data.household_id,
            clearance_level=max(data.clearance_level, 1),
            notes=data.notes,
        )
        self.residents.create(resident)
        logger.info(f"Registered resident {resident.registry_number} ({resident.full_name})")
        return resident

    def get_resident(self, resident_id: str) -> Resident:
        return self.residents.get_by_id(resident_id)

    def get_resident_by_registry_number(self, registry_number: str) -> Resident:
        return self.residents.get_by_registry_number(registry_number)

    def update_resident(self, resident_id: str, changes: UpdateResidentInput) -> Resident:
        resident = self.residents.get_by_id(resident_id)

        for name in (
            "surname", "given_names", "blood_type", "status", "date_of_death",
            "household_id", "clearance_level", "notes",
        ):
            value = getattr(changes, name)
            if value is not None:
                setattr(resident, name, value)

        self.residents.update(resident)
        return resident

    def list_residents(self, flt: ResidentFilter, page: Pagination) -> ResidentList:
        return self.residents.list(flt, page)

    def register_birth(self, data: BirthRegistration) -> Resident:
        """Register a vault-born resident; both parents must be alive."""
        for label, parent_id in (("parent 1", data.parent1_id), ("parent 2", data.parent2_id)):
            try:
                parent = self.residents.get_by_id(parent_id)
            except NotFoundError as e:
                raise NotFoundError("resident", f"{label} {parent_id}") from e
            if not parent.is_alive:
                raise InvalidOperationError(f"{label} is deceased")

        coi = calculate_coi(self.residents, data.parent1_id, data.parent2_id)
        if coi > settings.COI_WARNING_THRESHOLD:
            logger.warning(
                f"High coefficient of inbreeding for birth to {data.parent1_id} x "
                f"{data.parent2_id}: {coi:.4f}"
            )

        # Number allocation and insert share one transaction
        with session_scope(self._session_factory) as db:
            resident = Resident(
                id=new_id(),
                registry_number=self.residents.next_registry_number(self.vault_number, db=db),
                surname=data.surname,
                given_names=data.given_names,
                date_of_birth=data.date_of_birth,
                sex=data.sex,
                entry_type=EntryType.VAULT_BORN,
                entry_date=datetime.combine(data.date_of_birth, datetime.min.time(), timezone.utc),
                status=ResidentStatus.ACTIVE,
                blood_type=data.blood_type,
                biological_parent_1_id=data.parent1_id,
                biological_parent_2_id=data.parent2_id,
                household_id=data.household_id,
                clearance_level=1,
                notes=data.notes,
            )
            self.residents.create(resident, db=db)

        logger.info(f"Registered birth {resident.registry_number} (COI {coi:.4f})")
        return resident

    def register_death(self, resident_id: str, data: DeathRegistration) -> Resident:
        resident = self.residents.get_by_id(resident_id)
        if not resident.is_alive:
            raise InvalidOperationError("resident is already deceased")

        resident.status = ResidentStatus.DECEASED
        resident.date_of_death = data.date_of_death
        if data.cause:
            if resident.notes:
                resident.notes += "\n"
            resident.notes += f"Cause of death: {data.cause}"

        self.residents.update(resident)
        logger.info(f"Registered death of {resident.registry_number}")
        return resident

    def get_children(self, resident_id: str) -> List[Resident]:
        return self.residents.get_children(resident_id)

    def get_parents(self, resident_id: str) -> List[Resident]:
        return self.residents.get_parents(resident_id)

    def calculate_coi(self, parent1_id: str, parent2_id: str) -> float:
        return calculate_coi(self.residents, parent1_id, parent2_id)

    # ------------------------------------------------------------------
    # Households
    # ------------------------------------------------------------------

    def create_household(self, data: CreateHouseholdInput) -> Household:
        household = Household(
            id=new_id(),
            designation=self.households.next_designation(),
            household_type=data.household_type,
            formed_date=data.formed_date,
            head_of_household_id=data.head_of_household_id,
            ration_class=data.ration_class,
            status=HouseholdStatus.ACTIVE,
        )
        self.households.create(household)
        return household

    def get_household(self, household_id: str) -> Household:
        return self.households.get_by_id(household_id)

    def list_households(self, flt: HouseholdFilter, page: Pagination) -> HouseholdList:
        return self.households.list(flt, page)

    def get_household_members(self, household_id: str) -> List[Resident]:
        return self.residents.get_by_household(household_id)

    def assign_to_household(self, resident_id: str, household_id: str) -> Resident:
        resident = self.residents.get_by_id(resident_id)
        self.households.get_by_id(household_id)

        resident.household_id = household_id
        self.residents.update(resident)
        return resident

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def get_population_stats(self) -> PopulationStats:
        return self.demographics.population_stats()

    def get_age_distribution(self, as_of: DateLike) -> AgeDistribution:
        return self.demographics.age_distribution(as_of)

    def get_sex_distribution(self) -> SexDistribution:
        return self.demographics.sex_distribution()

    def get_workforce_stats(self, as_of: DateLike) -> WorkforceStats:
        return self.demographics.workforce_stats(as_of)

    def project_population(self, as_of: DateLike, years: int) -> PopulationProjection:
        return self.demographics.project_population(as_of, years)

    def demographics_report(self, as_of: DateLike, years: int) -> DemographicsReport:
        return self.demographics.report(as_of, years)
