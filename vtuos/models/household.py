"""
VT-UOS Population Console - Household Model
Groups of residents sharing quarters and a ration class
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from vtuos.utils.errors import ValidationError


class HouseholdType(str, Enum):
    FAMILY = "FAMILY"
    INDIVIDUAL = "INDIVIDUAL"
    COMMUNAL = "COMMUNAL"
    TEMPORARY = "TEMPORARY"


class RationClass(str, Enum):
    MINIMAL = "MINIMAL"
    STANDARD = "STANDARD"
    ENHANCED = "ENHANCED"
    MEDICAL = "MEDICAL"
    LABOR_INTENSIVE = "LABOR_INTENSIVE"


class HouseholdStatus(str, Enum):
    ACTIVE = "ACTIVE"
    DISSOLVED = "DISSOLVED"
    MERGED = "MERGED"


@dataclass
class Household:
    id: str
    designation: str
    household_type: HouseholdType
    formed_date: date
    head_of_household_id: Optional[str] = None
    ration_class: RationClass = RationClass.STANDARD
    status: HouseholdStatus = HouseholdStatus.ACTIVE
    dissolved_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    member_count: int = 0  # Computed, not stored

    @property
    def is_active(self) -> bool:
        return self.status is HouseholdStatus.ACTIVE

    def validate(self) -> None:
        if not self.id:
            raise ValidationError("id is required")
        if not self.designation:
            raise ValidationError("designation is required")
        if not isinstance(self.household_type, HouseholdType):
            raise ValidationError(f"invalid household_type: {self.household_type}")
        if not isinstance(self.ration_class, RationClass):
            raise ValidationError(f"invalid ration_class: {self.ration_class}")
        if not isinstance(self.status, HouseholdStatus):
            raise ValidationError(f"invalid status: {self.status}")
        if self.formed_date is None:
            raise ValidationError("formed_date is required")
        if self.status is HouseholdStatus.DISSOLVED and self.dissolved_date is None:
            raise ValidationError("dissolved households must have dissolved_date")


@dataclass
class HouseholdFilter:
    status: Optional[HouseholdStatus] = None
    household_type: Optional[HouseholdType] = None
    ration_class: Optional[RationClass] = None
    search_term: str = ""  # Matches designation


@dataclass
class HouseholdList:
    households: List[Household] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 25
    total_pages: int = 1
