"""
VT-UOS Population Console - Facility Model
Vault infrastructure systems and their maintenance history
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import List, Optional

from vtuos.utils.errors import ValidationError
from vtuos.utils.time import DateLike


class SystemCategory(str, Enum):
    POWER = "POWER"
    WATER = "WATER"
    HVAC = "HVAC"
    SECURITY = "SECURITY"
    MEDICAL = "MEDICAL"
    FOOD_PRODUCTION = "FOOD_PRODUCTION"
    WASTE = "WASTE"
    COMMUNICATIONS = "COMMUNICATIONS"
    STRUCTURAL = "STRUCTURAL"


class SystemStatus(str, Enum):
    OPERATIONAL = "OPERATIONAL"
    DEGRADED = "DEGRADED"
    MAINTENANCE = "MAINTENANCE"
    OFFLINE = "OFFLINE"
    FAILED = "FAILED"
    DESTROYED = "DESTROYED"

    @property
    def is_operational(self) -> bool:
        """Still producing output, even if degraded"""
        return self in (SystemStatus.OPERATIONAL, SystemStatus.DEGRADED)


class MaintenanceType(str, Enum):
    PREVENTIVE = "PREVENTIVE"
    CORRECTIVE = "CORRECTIVE"
    EMERGENCY = "EMERGENCY"
    INSPECTION = "INSPECTION"
    UPGRADE = "UPGRADE"


class MaintenanceOutcome(str, Enum):
    COMPLETED = "COMPLETED"
    PARTIAL = "PARTIAL"
    FAILED = "FAILED"
    DEFERRED = "DEFERRED"
    CANCELLED = "CANCELLED"


@dataclass
class FacilitySystem:
    """
    A piece of vault infrastructure (reactor, purifier, air handler...).

    ``next_maintenance_due`` is a calendar date; the system is overdue once
    the reference date has passed it.
    """
    id: str
    system_code: str
    name: str
    category: SystemCategory
    location_sector: str
    install_date: date
    location_level: int = 1
    status: SystemStatus = SystemStatus.OPERATIONAL
    efficiency_percent: float = 100.0
    capacity_rating: Optional[float] = None
    capacity_unit: str = ""
    current_output: Optional[float] = None
    last_maintenance_date: Optional[date] = None
    next_maintenance_due: Optional[date] = None
    maintenance_interval_days: int = 90
    mtbf_hours: Optional[int] = None
    total_runtime_hours: float = 0.0
    notes: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_operational(self) -> bool:
        return self.status.is_operational

    def is_overdue_for_maintenance(self, as_of: DateLike) -> bool:
        if self.next_maintenance_due is None:
            return False
        ref = as_of.date() if isinstance(as_of, datetime) else as_of
        return ref > self.next_maintenance_due

    def validate(self) -> None:
        if not self.id:
            raise ValidationError("id is required")
        if not self.system_code:
            raise ValidationError("system_code is required")
        if not self.name:
            raise ValidationError("name is required")
        if not isinstance(self.category, SystemCategory):
            raise ValidationError(f"invalid category: {self.category}")
        if not self.location_sector:
            raise ValidationError("location_sector is required")
        if not isinstance(self.status, SystemStatus):
            raise ValidationError(f"invalid status: {self.status}")
        if not 0 <= self.efficiency_percent <= 100:
            raise ValidationError("efficiency_percent must be between 0 and 100")
        if self.install_date is None:
            raise ValidationError("install_date is required")
        if self.maintenance_interval_days < 1:
            raise ValidationError("maintenance_interval_days must be at least 1")


@dataclass
class MaintenanceRecord:
    """Scheduled or completed work on a facility system"""
    id: str
    system_id: str
    maintenance_type: MaintenanceType
    description: str
    work_performed: str = ""
    parts_consumed: str = ""
    lead_technician_id: Optional[str] = None
    scheduled_date: Optional[date] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    estimated_hours: Optional[float] = None
    actual_hours: Optional[float] = None
    outcome: Optional[MaintenanceOutcome] = None
    system_status_before: Optional[SystemStatus] = None
    system_status_after: Optional[SystemStatus] = None
    efficiency_before: Optional[float] = None
    efficiency_after: Optional[float] = None
    notes: str = ""
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_complete(self) -> bool:
        return self.outcome is MaintenanceOutcome.COMPLETED

    def validate(self) -> None:
        if not self.id:
            raise ValidationError("id is required")
        if not self.system_id:
            raise ValidationError("system_id is required")
        if not isinstance(self.maintenance_type, MaintenanceType):
            raise ValidationError(f"invalid maintenance_type: {self.maintenance_type}")
        if not self.description:
            raise ValidationError("description is required")
        if self.outcome is not None and not isinstance(self.outcome, MaintenanceOutcome):
            raise ValidationError(f"invalid outcome: {self.outcome}")


@dataclass
class FacilitySystemFilter:
    """Filtering options for system queries; unset fields do not filter"""
    category: Optional[SystemCategory] = None
    status: Optional[SystemStatus] = None
    sector: str = ""
    search_term: str = ""  # Matches name or system code
    overdue_only: bool = False
    overdue_as_of: Optional[date] = None  # Reference date for overdue_only


@dataclass
class FacilitySystemList:
    systems: List[FacilitySystem] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 25
    total_pages: int = 1


@dataclass
class MaintenanceRecordFilter:
    system_id: Optional[str] = None
    maintenance_type: Optional[MaintenanceType] = None
    outcome: Optional[MaintenanceOutcome] = None
    search_term: str = ""  # Matches description or work performed


@dataclass
class MaintenanceRecordList:
    records: List[MaintenanceRecord] = field(default_factory=list)
    total: int = 0
    page: int = 1
    page_size: int = 25
    total_pages: int = 1
