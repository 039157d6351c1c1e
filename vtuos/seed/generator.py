"""
VT-UOS Population Console - Seed Data Generator
Populates an empty vault with a deterministic founding population

Composition:
- Family households: two adults (25-59, partner within ±5 years, at least 20)
  plus 0-4 vault-born children aged 0-17
- Single households: one adult aged 18-64
- Further single households until the target population is reached

The same seed always produces the same residents.
"""

import random
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import List, Optional

from sqlalchemy.orm import Session, sessionmaker

from config.database import SessionLocal, session_scope
from config.settings import get_settings
from vtuos.models.household import Household, HouseholdStatus, HouseholdType, RationClass
from vtuos.models.resident import BloodType, EntryType, Resident, ResidentStatus, Sex
from vtuos.repository.household_repo import HouseholdRepository
from vtuos.repository.resident_repo import ResidentRepository
from vtuos.seed.names import (
    BLOOD_TYPE_WEIGHTS,
    FEMALE_GIVEN_NAMES,
    MALE_GIVEN_NAMES,
    MIDDLE_NAMES,
    SURNAMES,
)
from vtuos.utils.errors import InvalidOperationError
from vtuos.utils.ids import RegistryNumberGenerator, new_id
from vtuos.utils.logging import get_logger
from vtuos.utils.time import parse_iso8601

logger = get_logger(__name__)


@dataclass
class SeedConfig:
    vault_number: int
    seal_date: datetime
    target_population: int = 500
    family_households: int = 100
    single_households: int = 80
    random_seed: int = 2077

    @classmethod
    def from_settings(cls, **overrides) -> "SeedConfig":
        settings = get_settings()
        values = dict(
            vault_number=settings.VAULT_NUMBER,
            seal_date=parse_iso8601(settings.VAULT_START_DATE),
            target_population=settings.DESIGNED_CAPACITY,
        )
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


@dataclass
class SeedSummary:
    residents: int
    households: int


class SeedGenerator:
    """Generates households and residents inside a single transaction."""

    def __init__(self, config: SeedConfig, session_factory: Optional[sessionmaker] = None):
        self.config = config
        self.session_factory = session_factory or SessionLocal
        self.rng = random.Random(config.random_seed)
        self.registry = RegistryNumberGenerator(config.vault_number)

        self.resident_repo = ResidentRepository(self.session_factory)
        self.household_repo = HouseholdRepository(self.session_factory)

        self.residents: List[Resident] = []
        self.households: List[Household] = []

    @property
    def seal_date(self) -> date:
        return self.config.seal_date.date()

    def generate(self) -> SeedSummary:
        """Seed the vault. Refuses to run against a vault that already has records."""
        existing = sum(self.resident_repo.count_by_status().values())
        if existing:
            raise InvalidOperationError(f"vault already has {existing} residents on record")

        logger.info(
            f"Starting seed generation for vault {self.config.vault_number:03d} "
            f"(target population {self.config.target_population}, seed {self.config.random_seed})"
        )

        with session_scope(self.session_factory) as db:
            for _ in range(self.config.family_households):
                if self._full():
                    break
                self._family_household(db)

            for _ in range(self.config.single_households):
                if self._full():
                    break
                self._single_household(db)

            while not self._full():
                self._single_household(db)

        logger.info(
            f"Seed generation complete: {len(self.residents)} residents, "
            f"{len(self.households)} households"
        )
        return SeedSummary(residents=len(self.residents), households=len(self.households))

    def _full(self) -> bool:
        return len(self.residents) >= self.config.target_population

    # ------------------------------------------------------------------
    # Households
    # ------------------------------------------------------------------

    def _family_household(self, db: Session) -> None:
        num_children = self.rng.randrange(5)

        husband_age = 25 + self.rng.randrange(35)
        wife_age = max(husband_age - 5 + self.rng.randrange(11), 20)
        surname = self.rng.choice(SURNAMES)

        husband = self._resident(surname, Sex.MALE, husband_age)
        wife = self._resident(surname, Sex.FEMALE, wife_age)
        household = self._household(db, HouseholdType.FAMILY, husband.id)

        for adult in (husband, wife):
            adult.household_id = household.id
            self._insert(db, adult)

        for _ in range(num_children):
            if self._full():
                break
            max_child_age = husband_age - 18
            if max_child_age < 1:
                continue
            child_age = min(self.rng.randrange(max_child_age), 17)
            sex = Sex.FEMALE if self.rng.random() < 0.5 else Sex.MALE

            child = self._resident(surname, sex, child_age, husband.id, wife.id)
            child.household_id = household.id
            self._insert(db, child)

    def _single_household(self, db: Session) -> None:
        surname = self.rng.choice(SURNAMES)
        age = 18 + self.rng.randrange(47)
        sex = Sex.FEMALE if self.rng.random() < 0.5 else Sex.MALE

        resident = self._resident(surname, sex, age)
        household = self._household(db, HouseholdType.INDIVIDUAL, resident.id)
        resident.household_id = household.id
        self._insert(db, resident)

    def _household(self, db: Session, household_type: HouseholdType, head_id: str) -> Household:
        # Inserted before its members so their household reference resolves
        household = Household(
            id=new_id(),
            designation=f"H-{len(self.households) + 1:04d}",
            household_type=household_type,
            formed_date=self.seal_date,
            head_of_household_id=head_id,
            ration_class=RationClass.STANDARD,
            status=HouseholdStatus.ACTIVE,
        )
        self.household_repo.create(household, db=db)
        self.households.append(household)
        return household

    # ------------------------------------------------------------------
    # Residents
    # ------------------------------------------------------------------

    def _resident(
        self,
        surname: str,
        sex: Sex,
        age: int,
        parent1_id: Optional[str] = None,
        parent2_id: Optional[str] = None,
    ) -> Resident:
        names = MALE_GIVEN_NAMES if sex is Sex.MALE else FEMALE_GIVEN_NAMES
        given_names = self.rng.choice(names)
        if self.rng.random() < 0.6:
            given_names = f"{given_names} {self.rng.choice(MIDDLE_NAMES)}"

        clearance = 1
        if 18 <= age < 65:
            clearance = 1 + self.rng.randrange(3)

        return Resident(
            id=new_id(),
            registry_number=self.registry.next(),
            surname=surname,
            given_names=given_names,
            date_of_birth=self._birth_date(age),
            sex=sex,
            entry_type=EntryType.VAULT_BORN if parent1_id else EntryType.ORIGINAL,
            entry_date=self.config.seal_date,
            status=ResidentStatus.ACTIVE,
            blood_type=self._blood_type(),
            biological_parent_1_id=parent1_id,
            biological_parent_2_id=parent2_id,
            clearance_level=clearance,
        )

    def _birth_date(self, age: int) -> date:
        """A birth date ``age`` years and up to 11 months, 27 days before sealing."""
        seal = self.seal_date
        year = seal.year - age
        month = seal.month - self.rng.randrange(12)
        if month < 1:
            month += 12
            year -= 1
        day = min(seal.day, 28)
        return date(year, month, day) - timedelta(days=self.rng.randrange(28))

    def _blood_type(self) -> BloodType:
        types = [BloodType(code) for code, _ in BLOOD_TYPE_WEIGHTS]
        weights = [weight for _, weight in BLOOD_TYPE_WEIGHTS]
        return self.rng.choices(types, weights=weights)[0]

    def _insert(self, db: Session, resident: Resident) -> None:
        self.resident_repo.create(resident, db=db)
        self.residents.append(resident)
