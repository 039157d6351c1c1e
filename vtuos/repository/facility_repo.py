"""
VT-UOS Population Console - Facility Repository
Data access for facility systems and their maintenance records
"""

from datetime import date, datetime, timezone
from typing import Dict, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from vtuos.db.tables import FacilitySystemRow, MaintenanceRecordRow
from vtuos.models.common import Pagination
from vtuos.models.facility import (
    FacilitySystem,
    FacilitySystemFilter,
    FacilitySystemList,
    MaintenanceRecord,
    MaintenanceRecordFilter,
    MaintenanceRecordList,
    SystemStatus,
)
from vtuos.repository.base import Repository
from vtuos.utils.errors import NotFoundError
from vtuos.utils.logging import get_logger

logger = get_logger(__name__)

_SYSTEM_FIELDS = (
    "system_code", "name", "category", "location_sector", "location_level",
    "status", "efficiency_percent", "capacity_rating", "capacity_unit",
    "current_output", "install_date", "last_maintenance_date",
    "next_maintenance_due", "maintenance_interval_days", "mtbf_hours",
    "total_runtime_hours", "notes",
)

_RECORD_FIELDS = (
    "system_id", "maintenance_type", "description", "work_performed",
    "parts_consumed", "lead_technician_id", "scheduled_date", "started_at",
    "completed_at", "estimated_hours", "actual_hours", "outcome",
    "system_status_before", "system_status_after", "efficiency_before",
    "efficiency_after", "notes",
)


def _to_system(row: FacilitySystemRow) -> FacilitySystem:
    return FacilitySystem(
        id=row.id,
        system_code=row.system_code,
        name=row.name,
        category=row.category,
        location_sector=row.location_sector,
        location_level=row.location_level,
        status=row.status,
        efficiency_percent=row.efficiency_percent,
        capacity_rating=row.capacity_rating,
        capacity_unit=row.capacity_unit or "",
        current_output=row.current_output,
        install_date=row.install_date,
        last_maintenance_date=row.last_maintenance_date,
        next_maintenance_due=row.next_maintenance_due,
        maintenance_interval_days=row.maintenance_interval_days,
        mtbf_hours=row.mtbf_hours,
        total_runtime_hours=row.total_runtime_hours,
        notes=row.notes or "",
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _to_record(row: MaintenanceRecordRow) -> MaintenanceRecord:
    return MaintenanceRecord(
        id=row.id,
        system_id=row.system_id,
        maintenance_type=row.maintenance_type,
        description=row.description,
        work_performed=row.work_performed or "",
        parts_consumed=row.parts_consumed or "",
        lead_technician_id=row.lead_technician_id,
        scheduled_date=row.scheduled_date,
        started_at=row.started_at,
        completed_at=row.completed_at,
        estimated_hours=row.estimated_hours,
        actual_hours=row.actual_hours,
        outcome=row.outcome,
        system_status_before=row.system_status_before,
        system_status_after=row.system_status_after,
        efficiency_before=row.efficiency_before,
        efficiency_after=row.efficiency_after,
        notes=row.notes or "",
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _apply_system_filter(stmt, flt: FacilitySystemFilter):
    if flt.category is not None:
        stmt = stmt.where(FacilitySystemRow.category == flt.category)
    if flt.status is not None:
        stmt = stmt.where(FacilitySystemRow.status == flt.status)
    if flt.sector:
        stmt = stmt.where(FacilitySystemRow.location_sector == flt.sector)
    if flt.search_term:
        pattern = f"%{flt.search_term}%"
        stmt = stmt.where(
            or_(FacilitySystemRow.name.like(pattern), FacilitySystemRow.system_code.like(pattern))
        )
    if flt.overdue_only:
        as_of = flt.overdue_as_of or date.today()
        stmt = stmt.where(FacilitySystemRow.next_maintenance_due < as_of)
    return stmt


def _apply_record_filter(stmt, flt: MaintenanceRecordFilter):
    if flt.system_id is not None:
        stmt = stmt.where(MaintenanceRecordRow.system_id == flt.system_id)
    if flt.maintenance_type is not None:
        stmt = stmt.where(MaintenanceRecordRow.maintenance_type == flt.maintenance_type)
    if flt.outcome is not None:
        stmt = stmt.where(MaintenanceRecordRow.outcome == flt.outcome)
    if flt.search_term:
        pattern = f"%{flt.search_term}%"
        stmt = stmt.where(
            or_(
                MaintenanceRecordRow.description.like(pattern),
                MaintenanceRecordRow.work_performed.like(pattern),
            )
        )
    return stmt


class FacilityRepository(Repository):
    """Handles facility system and maintenance record data access."""

    # ------------------------------------------------------------------
    # Systems
    # ------------------------------------------------------------------

    def create(self, system: FacilitySystem, db: Optional[Session] = None) -> None:
        system.validate()

        now = datetime.now(timezone.utc)
        system.created_at = now
        system.updated_at = now

        with self._scope(db) as session:
            row = FacilitySystemRow(id=system.id, created_at=now, updated_at=now)
            for name in _SYSTEM_FIELDS:
                setattr(row, name, getattr(system, name))
            session.add(row)
            session.flush()

    def get_by_id(self, system_id: str, db: Optional[Session] = None) -> FacilitySystem:
        with self._scope(db) as session:
            row = session.get(FacilitySystemRow, system_id)
            if row is None:
                raise NotFoundError("facility system", system_id)
            return _to_system(row)

    def get_by_code(self, system_code: str) -> FacilitySystem:
        with self._scope() as session:
            row = session.scalars(
                select(FacilitySystemRow).where(FacilitySystemRow.system_code == system_code)
            ).first()
            if row is None:
                raise NotFoundError("facility system", system_code)
            return _to_system(row)

    def update(self, system: FacilitySystem, db: Optional[Session] = None) -> None:
        system.validate()
        system.updated_at = datetime.now(timezone.utc)

        with self._scope(db) as session:
            row = session.get(FacilitySystemRow, system.id)
            if row is None:
                raise NotFoundError("facility system", system.id)
            for name in _SYSTEM_FIELDS:
                setattr(row, name, getattr(system, name))
            row.updated_at = system.updated_at
            session.flush()

    def delete(self, system_id: str, db: Optional[Session] = None) -> None:
        with self._scope(db) as session:
            row = session.get(FacilitySystemRow, system_id)
            if row is None:
                raise NotFoundError("facility system", system_id)
            session.delete(row)
            session.flush()

    def list(self, flt: FacilitySystemFilter, page: Pagination) -> FacilitySystemList:
        """One page of systems ordered by category, then name."""
        with self._scope() as session:
            count_stmt = _apply_system_filter(select(func.count()).select_from(FacilitySystemRow), flt)
            total = session.scalar(count_stmt) or 0

            stmt = (
                _apply_system_filter(select(FacilitySystemRow), flt)
                .order_by(FacilitySystemRow.category, FacilitySystemRow.name, FacilitySystemRow.id)
                .limit(page.limit)
                .offset(page.offset)
            )
            systems = [_to_system(row) for row in session.scalars(stmt)]

        return FacilitySystemList(
            systems=systems,
            total=total,
            page=page.page,
            page_size=page.limit,
            total_pages=page.total_pages(total),
        )

    def count_by_status(self) -> Dict[SystemStatus, int]:
        with self._scope() as session:
            stmt = select(FacilitySystemRow.status, func.count()).group_by(FacilitySystemRow.status)
            counts = {status: 0 for status in SystemStatus}
            for status, count in session.execute(stmt):
                counts[status] = count
            return counts

    def average_efficiency(self) -> float:
        """Mean efficiency of systems still producing output; 0 when there are none."""
        with self._scope() as session:
            value = session.scalar(
                select(func.coalesce(func.avg(FacilitySystemRow.efficiency_percent), 0.0)).where(
                    FacilitySystemRow.status.in_([SystemStatus.OPERATIONAL, SystemStatus.DEGRADED])
                )
            )
            return float(value or 0.0)

    def overdue_count(self, as_of: date) -> int:
        with self._scope() as session:
            return session.scalar(
                select(func.count())
                .select_from(FacilitySystemRow)
                .where(FacilitySystemRow.next_maintenance_due.is_not(None))
                .where(FacilitySystemRow.next_maintenance_due < as_of)
            ) or 0

    # ------------------------------------------------------------------
    # Maintenance records
    # ------------------------------------------------------------------

    def create_maintenance_record(self, record: MaintenanceRecord, db: Optional[Session] = None) -> None:
        record.validate()

        now = datetime.now(timezone.utc)
        record.created_at = now
        record.updated_at = now

        with self._scope(db) as session:
            row = MaintenanceRecordRow(id=record.id, created_at=now, updated_at=now)
            for name in _RECORD_FIELDS:
                setattr(row, name, getattr(record, name))
            session.add(row)
            session.flush()

    def get_maintenance_record(self, record_id: str, db: Optional[Session] = None) -> MaintenanceRecord:
        with self._scope(db) as session:
            row = session.get(MaintenanceRecordRow, record_id)
            if row is None:
                raise NotFoundError("maintenance record", record_id)
            return _to_record(row)

    def update_maintenance_record(self, record: MaintenanceRecord, db: Optional[Session] = None) -> None:
        record.validate()
        record.updated_at = datetime.now(timezone.utc)

        with self._scope(db) as session:
            row = session.get(MaintenanceRecordRow, record.id)
            if row is None:
                raise NotFoundError("maintenance record", record.id)
            for name in _RECORD_FIELDS:
                setattr(row, name, getattr(record, name))
            row.updated_at = record.updated_at
            session.flush()

    def list_maintenance_records(
        self, flt: MaintenanceRecordFilter, page: Pagination
    ) -> MaintenanceRecordList:
        """One page of maintenance records, newest first."""
        with self._scope() as session:
            count_stmt = _apply_record_filter(
                select(func.count()).select_from(MaintenanceRecordRow), flt
            )
            total = session.scalar(count_stmt) or 0

            stmt = (
                _apply_record_filter(select(MaintenanceRecordRow), flt)
                .order_by(MaintenanceRecordRow.created_at.desc(), MaintenanceRecordRow.id)
                .limit(page.limit)
                .offset(page.offset)
            )
            records = [_to_record(row) for row in session.scalars(stmt)]

        return MaintenanceRecordList(
            records=records,
            total=total,
            page=page.page,
            page_size=page.limit,
            total_pages=page.total_pages(total),
        )
