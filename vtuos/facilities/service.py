"""
VT-UOS Population Console - Facilities Service
Infrastructure system registry, maintenance scheduling and status summary
"""

from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from sqlalchemy.orm import sessionmaker

from config.database import SessionLocal, session_scope
from config.settings import get_settings
from vtuos.models.common import Pagination
from vtuos.models.facility import (
    FacilitySystem,
    FacilitySystemFilter,
    FacilitySystemList,
    MaintenanceOutcome,
    MaintenanceRecord,
    MaintenanceRecordFilter,
    MaintenanceRecordList,
    MaintenanceType,
    SystemCategory,
    SystemStatus,
)
from vtuos.repository.facility_repo import FacilityRepository
from vtuos.utils.errors import InvalidOperationError
from vtuos.utils.ids import new_id
from vtuos.utils.logging import get_logger
from vtuos.utils.time import DateLike

logger = get_logger(__name__)
settings = get_settings()


@dataclass
class CreateSystemInput:
    system_code: str
    name: str
    category: SystemCategory
    location_sector: str
    location_level: int
    install_date: date
    capacity_rating: Optional[float] = None
    capacity_unit: str = ""
    maintenance_interval_days: int = 0  # Below 1 means MAINTENANCE_INTERVAL_DAYS
    mtbf_hours: Optional[int] = None
    notes: str = ""


@dataclass
class UpdateSystemInput:
    """Fields left as None are not changed"""
    name: Optional[str] = None
    status: Optional[SystemStatus] = None
    efficiency_percent: Optional[float] = None
    current_output: Optional[float] = None
    notes: Optional[str] = None


@dataclass
class ScheduleMaintenanceInput:
    system_id: str
    maintenance_type: MaintenanceType
    description: str
    scheduled_date: Optional[date] = None
    estimated_hours: Optional[float] = None
    lead_technician_id: Optional[str] = None
    notes: str = ""


@dataclass
class CompleteMaintenanceInput:
    outcome: MaintenanceOutcome
    new_status: SystemStatus
    new_efficiency: float
    work_performed: str = ""
    parts_consumed: str = ""
    actual_hours: Optional[float] = None
    notes: str = ""
    completed_at: Optional[datetime] = None  # Defaults to now (UTC)


@dataclass(frozen=True)
class FacilityStats:
    """Facility-wide status summary"""
    total_systems: int
    operational: int
    degraded: int
    in_maintenance: int
    offline: int
    failed: int
    avg_efficiency: float  # Over operational and degraded systems
    overdue_maintenance: int


class FacilityService:
    """Facility system operations for one vault."""

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self._session_factory = session_factory or SessionLocal
        self.facilities = FacilityRepository(self._session_factory)

    # ------------------------------------------------------------------
    # Systems
    # ------------------------------------------------------------------

    def create_system(self, data: CreateSystemInput) -> FacilitySystem:
        interval = data.maintenance_interval_days
        if interval < 1:
            interval = settings.MAINTENANCE_INTERVAL_DAYS

        system = FacilitySystem(
            id=new_id(),
            system_code=data.system_code,
            name=data.name,
            category=data.category,
            location_sector=data.location_sector,
            location_level=data.location_level,
            install_date=data.install_date,
            status=SystemStatus.OPERATIONAL,
            efficiency_percent=100.0,
            capacity_rating=data.capacity_rating,
            capacity_unit=data.capacity_unit,
            next_maintenance_due=data.install_date + timedelta(days=interval),
            maintenance_interval_days=interval,
            mtbf_hours=data.mtbf_hours,
            total_runtime_hours=0.0,
            notes=data.notes,
        )
        self.facilities.create(system)
        logger.info(f"Registered facility system {system.system_code} ({system.name})")
        return system

    def get_system(self, system_id: str) -> FacilitySystem:
        return self.facilities.get_by_id(system_id)

    def get_system_by_code(self, system_code: str) -> FacilitySystem:
        return self.facilities.get_by_code(system_code)

    def list_systems(self, flt: FacilitySystemFilter, page: Pagination) -> FacilitySystemList:
        return self.facilities.list(flt, page)

    def update_system(self, system_id: str, changes: UpdateSystemInput) -> FacilitySystem:
        system = self.facilities.get_by_id(system_id)

        for name in ("name", "status", "efficiency_percent", "current_output", "notes"):
            value = getattr(changes, name)
            if value is not None:
                setattr(system, name, value)

        self.facilities.update(system)
        return system

    # ------------------------------------------------------------------
    # Maintenance
    # ------------------------------------------------------------------

    def schedule_maintenance(self, data: ScheduleMaintenanceInput) -> MaintenanceRecord:
        """Open a maintenance record capturing the system's current state."""
        system = self.facilities.get_by_id(data.system_id)

        record = MaintenanceRecord(
            id=new_id(),
            system_id=system.id,
            maintenance_type=data.maintenance_type,
            description=data.description,
            lead_technician_id=data.lead_technician_id,
            scheduled_date=data.scheduled_date,
            estimated_hours=data.estimated_hours,
            system_status_before=system.status,
            efficiency_before=system.efficiency_percent,
            notes=data.notes,
        )
        self.facilities.create_maintenance_record(record)
        logger.info(
            f"Scheduled {record.maintenance_type.value} maintenance on {system.system_code}"
        )
        return record

    def complete_maintenance(self, record_id: str, data: CompleteMaintenanceInput) -> MaintenanceRecord:
        """
        Close a maintenance record and apply its result to the system.

        The record and the system are written in one transaction. The next
        due date restarts from the completion date.
        """
        completed_at = data.completed_at or datetime.now(timezone.utc)

        with session_scope(self._session_factory) as db:
            record = self.facilities.get_maintenance_record(record_id, db=db)
            if record.completed_at is not None:
                raise InvalidOperationError("maintenance record is already closed")

            system = self.facilities.get_by_id(record.system_id, db=db)
            system.status = data.new_status
            system.efficiency_percent = data.new_efficiency
            system.last_maintenance_date = completed_at.date()
            system.next_maintenance_due = completed_at.date() + timedelta(
                days=system.maintenance_interval_days
            )
            self.facilities.update(system, db=db)

            record.outcome = data.outcome
            record.completed_at = completed_at
            record.work_performed = data.work_performed
            record.parts_consumed = data.parts_consumed
            record.actual_hours = data.actual_hours
            record.system_status_after = data.new_status
            record.efficiency_after = data.new_efficiency
            if data.notes:
                record.notes = f"{record.notes}\n{data.notes}" if record.notes else data.notes
            self.facilities.update_maintenance_record(record, db=db)

        logger.info(
            f"Completed maintenance on {system.system_code}: {data.outcome.value}, "
            f"{system.status.value} at {system.efficiency_percent:.1f}%"
        )
        return record

    def get_maintenance_record(self, record_id: str) -> MaintenanceRecord:
        return self.facilities.get_maintenance_record(record_id)

    def list_maintenance_records(
        self, flt: MaintenanceRecordFilter, page: Pagination
    ) -> MaintenanceRecordList:
        return self.facilities.list_maintenance_records(flt, page)

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------

    def get_facility_stats(self, as_of: DateLike) -> FacilityStats:
        ref = as_of.date() if isinstance(as_of, datetime) else as_of
        counts = self.facilities.count_by_status()

        return FacilityStats(
            total_systems=sum(counts.values()),
            operational=counts[SystemStatus.OPERATIONAL],
            degraded=counts[SystemStatus.DEGRADED],
            in_maintenance=counts[SystemStatus.MAINTENANCE],
            offline=counts[SystemStatus.OFFLINE],
            failed=counts[SystemStatus.FAILED],
            avg_efficiency=self.facilities.average_efficiency(),
            overdue_maintenance=self.facilities.overdue_count(ref),
        )
