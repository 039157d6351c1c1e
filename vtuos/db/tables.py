"""
VT-UOS Population Console - ORM Tables
Storage layout for residents, households and facility systems
"""

from datetime import datetime, timezone

from sqlalchemy import Column, Date, DateTime, Enum, Float, ForeignKey, Integer, String, Text

from config.database import Base
from vtuos.models.facility import (
    MaintenanceOutcome,
    MaintenanceType,
    SystemCategory,
    SystemStatus,
)
from vtuos.models.household import HouseholdStatus, HouseholdType, RationClass
from vtuos.models.resident import BloodType, EntryType, ResidentStatus, Sex


def _enum(enum_cls, length: int = 20) -> Enum:
    # Store enum values ("M", "ACTIVE") rather than member names
    return Enum(
        enum_cls,
        values_callable=lambda members: [m.value for m in members],
        native_enum=False,
        length=length,
        validate_strings=True,
    )


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class HouseholdRow(Base):
    __tablename__ = "households"

    id = Column(String(36), primary_key=True)
    designation = Column(String(16), unique=True, nullable=False)
    household_type = Column(_enum(HouseholdType), nullable=False)
    head_of_household_id = Column(String(36))
    ration_class = Column(_enum(RationClass), nullable=False, default=RationClass.STANDARD)
    status = Column(_enum(HouseholdStatus), nullable=False, default=HouseholdStatus.ACTIVE, index=True)
    formed_date = Column(Date, nullable=False)
    dissolved_date = Column(Date)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)


class ResidentRow(Base):
    __tablename__ = "residents"

    id = Column(String(36), primary_key=True)
    registry_number = Column(String(16), unique=True, nullable=False, index=True)
    surname = Column(String(80), nullable=False, index=True)
    given_names = Column(String(120), nullable=False)
    date_of_birth = Column(Date, nullable=False)
    date_of_death = Column(Date)
    sex = Column(_enum(Sex, length=1), nullable=False)
    blood_type = Column(_enum(BloodType, length=3))
    entry_type = Column(_enum(EntryType), nullable=False)
    entry_date = Column(DateTime(timezone=True), nullable=False)
    status = Column(_enum(ResidentStatus), nullable=False, default=ResidentStatus.ACTIVE, index=True)
    biological_parent_1_id = Column(String(36), ForeignKey("residents.id"))
    biological_parent_2_id = Column(String(36), ForeignKey("residents.id"))
    household_id = Column(String(36), ForeignKey("households.id"), index=True)
    clearance_level = Column(Integer, nullable=False, default=1)
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)


class FacilitySystemRow(Base):
    __tablename__ = "facility_systems"

    id = Column(String(36), primary_key=True)
    system_code = Column(String(32), unique=True, nullable=False)
    name = Column(String(120), nullable=False)
    category = Column(_enum(SystemCategory), nullable=False, index=True)
    location_sector = Column(String(16), nullable=False)
    location_level = Column(Integer, nullable=False, default=1)
    status = Column(_enum(SystemStatus), nullable=False, default=SystemStatus.OPERATIONAL, index=True)
    efficiency_percent = Column(Float, nullable=False, default=100.0)
    capacity_rating = Column(Float)
    capacity_unit = Column(String(16))
    current_output = Column(Float)
    install_date = Column(Date, nullable=False)
    last_maintenance_date = Column(Date)
    next_maintenance_due = Column(Date)
    maintenance_interval_days = Column(Integer, nullable=False, default=90)
    mtbf_hours = Column(Integer)
    total_runtime_hours = Column(Float, nullable=False, default=0.0)
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)


class MaintenanceRecordRow(Base):
    __tablename__ = "maintenance_records"

    id = Column(String(36), primary_key=True)
    system_id = Column(String(36), ForeignKey("facility_systems.id"), nullable=False, index=True)
    maintenance_type = Column(_enum(MaintenanceType), nullable=False, index=True)
    description = Column(Text, nullable=False)
    work_performed = Column(Text)
    parts_consumed = Column(Text)
    lead_technician_id = Column(String(36), ForeignKey("residents.id"))
    scheduled_date = Column(Date)
    started_at = Column(DateTime(timezone=True))
    completed_at = Column(DateTime(timezone=True))
    estimated_hours = Column(Float)
    actual_hours = Column(Float)
    outcome = Column(_enum(MaintenanceOutcome))
    system_status_before = Column(_enum(SystemStatus))
    system_status_after = Column(_enum(SystemStatus))
    efficiency_before = Column(Float)
    efficiency_after = Column(Float)
    notes = Column(Text)
    created_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow)
