"""
VT-UOS Population Console - Resident Model
Vault dwellers, their enumerated attributes and list/query types
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from vtuos.utils.errors import ValidationError
from vtuos.utils.time import DateLike, calculate_age


class Sex(str, Enum):
    """Biological sex as recorded at registration"""
    MALE = "M"
    FEMALE = "F"

    @property
    def label(self) -> str:
        return "Male" if self is Sex.MALE else "Female"


class BloodType(str, Enum):
    A_POS = "A+"
    A_NEG = "A-"
    B_POS = "B+"
    B_NEG = "B-"
    AB_POS = "AB+"
    AB_NEG = "AB-"
    O_POS = "O+"
    O_NEG = "O-"


class EntryType(str, Enum):
    """How a resident entered the vault"""
    ORIGINAL = "ORIGINAL"
    VAULT_BORN = "VAULT_BORN"
    ADMITTED = "ADMITTED"


class ResidentStatus(str, Enum):
    ACTIVE = "ACTIVE"
    DECEASED = "DECEASED"
    EXILED = "EXILED"
    SURFACE_MISSION = "SURFACE_MISSION"
    QUARANTINE = "QUARANTINE"

    @property
    def is_alive(self) -> bool:
        return self is not ResidentStatus.DECEASED


@dataclass
class Resident:
    """
    A vault dweller.

    ``sex`` is normally a ``Sex`` member; records imported from elsewhere may
    carry ``None``, which the demographics engine excludes from sex counts.
    """
    id: str
    registry_number: str
    surname: str
    given_names: str
    date_of_birth: date
    sex: Optional[Sex]
    entry_type: EntryType = EntryType.ORIGINAL
    entry_date: Optional[datetime] = None
    status: ResidentStatus = ResidentStatus.ACTIVE
    date_of_death: Optional[date] = None
    blood_type: Optional[BloodType] = None
    biological_parent_1_id: Optional[str] = None
    biological_parent_2_id: Optional[str] = None
    household_id: Optional[str] = None
    clearance_level: int = 1
    notes: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def full_name(self) -> str:
        return f"{self.surname}, {self.given_names}"

    def age(self, as_of: DateLike) -> int:
        return calculate_age(self.date_of_birth, as_of)

    def is_adult(self, as_of: DateLike) -> bool:
        return self.age(as_of) >= 18

    def is_working_age(self, as_of: DateLike) -> bool:
        return 16 <= self.age(as_of) <= 65

    @property
    def is_alive(self) -> bool:
        return self.status.is_alive

    def validate(self) -> None:
        """Raise ValidationError describing the first invalid field."""
        if not self.id:
            raise ValidationError("id is required")
        if not self.registry_number:
            raise ValidationError("registry_number is required")
        if not self.surname:
            raise ValidationError("surname is required")
        if not self.given_names:
            raise ValidationError("given_names is required")
        if self.date_of_birth is None:
            raise ValidationError("date_of_birth is required")
        if not isinstance(self.sex, Sex):
            raise ValidationError(f"invalid sex: {self.sex}")
        if self.blood_type is not None and not isinstance(self.blood_type, BloodType):
            raise ValidationError(f"invalid blood_type: {self.blood_type}")
        if not isinstance(self.entry_type, EntryType):
            raise ValidationError(f"invalid entry_type: {self.entry_type}")
        if self.entry_date is None:
            raise ValidationError("entry_date is required")
        if not isinstance(self.status, ResidentStatus):
            raise ValidationError(f"invalid status: {self.status}")
        if not 1 <= self.clearance_level <= 10:
            raise ValidationError("clearance_level must be between 1 and 10")

        if self.entry_type is EntryType.VAULT_BORN and not (
            self.biological_parent_1_id and self.biological_parent_2_id
        ):
            raise ValidationError("vault-born residents must have both biological parents")

        if self.status is ResidentStatus.DECEASED and self.date_of_death is None:
            raise ValidationError("deceased residents must have date_of_death")


@dataclass
class ResidentFilter:
    """Filtering options for resident queries; unset fields do not filter"""
    status: Optional[ResidentStatus] = None
    household_id: Optional[str] = None
    sex: Optional[Sex] = None
    entry_type: Optional[EntryType] = None
    search_term: str = ""  # Matches surname or given names
    min_age: Optional[int] = None
    max_age: Optional[int] = None
    age_as_of: Optional[date] = None  # Reference date for min/max age


@dataclass
class ResidentList:
    """One page of residents"""
    residents: List[Resident] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 25
    total_pages: int = 1
