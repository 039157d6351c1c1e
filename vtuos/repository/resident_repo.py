"""
VT-UOS Population Console - Resident Repository
Data access for residents, including the paginated census query
"""

from datetime import date, datetime, timezone
from typing import Dict, List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from vtuos.db.tables import ResidentRow
from vtuos.models.common import Pagination
from vtuos.models.resident import Resident, ResidentFilter, ResidentList, ResidentStatus
from vtuos.repository.base import Repository, years_before
from vtuos.utils.errors import NotFoundError
from vtuos.utils.ids import format_registry_number, parse_registry_number
from vtuos.utils.logging import get_logger

logger = get_logger(__name__)

_FIELDS = (
    "registry_number", "surname", "given_names", "date_of_birth", "date_of_death",
    "sex", "blood_type", "entry_type", "entry_date", "status",
    "biological_parent_1_id", "biological_parent_2_id", "household_id",
    "clearance_level", "notes",
)


def _to_resident(row: ResidentRow) -> Resident:
    return Resident(
        id=row.id,
        registry_number=row.registry_number,
        surname=row.surname,
        given_names=row.given_names,
        date_of_birth=row.date_of_birth,
        sex=row.sex,
        entry_type=row.entry_type,
        entry_date=row.entry_date,
        status=row.status,
        date_of_death=row.date_of_death,
        blood_type=row.blood_type,
        biological_parent_1_id=row.biological_parent_1_id,
        biological_parent_2_id=row.biological_parent_2_id,
        household_id=row.household_id,
        clearance_level=row.clearance_level,
        notes=row.notes or "",
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _apply_filter(stmt, flt: ResidentFilter):
    if flt.status is not None:
        stmt = stmt.where(ResidentRow.status == flt.status)
    if flt.household_id is not None:
        stmt = stmt.where(ResidentRow.household_id == flt.household_id)
    if flt.sex is not None:
        stmt = stmt.where(ResidentRow.sex == flt.sex)
    if flt.entry_type is not None:
        stmt = stmt.where(ResidentRow.entry_type == flt.entry_type)
    if flt.search_term:
        pattern = f"%{flt.search_term}%"
        stmt = stmt.where(
            or_(ResidentRow.surname.like(pattern), ResidentRow.given_names.like(pattern))
        )
    if flt.min_age is not None or flt.max_age is not None:
        as_of = flt.age_as_of or date.today()
        if flt.min_age is not None:
            stmt = stmt.where(ResidentRow.date_of_birth <= years_before(as_of, flt.min_age))
        if flt.max_age is not None:
            stmt = stmt.where(ResidentRow.date_of_birth > years_before(as_of, flt.max_age + 1))
    return stmt


class ResidentRepository(Repository):
    """Handles resident data access."""

    def create(self, resident: Resident, db: Optional[Session] = None) -> None:
        resident.validate()

        now = datetime.now(timezone.utc)
        resident.created_at = now
        resident.updated_at = now

        with self._scope(db) as session:
            row = ResidentRow(id=resident.id, created_at=now, updated_at=now)
            for name in _FIELDS:
                setattr(row, name, getattr(resident, name))
            session.add(row)
            session.flush()

    def get_by_id(self, resident_id: str) -> Resident:
        with self._scope() as session:
            row = session.get(ResidentRow, resident_id)
            if row is None:
                raise NotFoundError("resident", resident_id)
            return _to_resident(row)

    def get_by_registry_number(self, registry_number: str) -> Resident:
        with self._scope() as session:
            row = session.scalars(
                select(ResidentRow).where(ResidentRow.registry_number == registry_number)
            ).first()
            if row is None:
                raise NotFoundError("resident", registry_number)
            return _to_resident(row)

    def update(self, resident: Resident, db: Optional[Session] = None) -> None:
        resident.validate()
        resident.updated_at = datetime.now(timezone.utc)

        with self._scope(db) as session:
            row = session.get(ResidentRow, resident.id)
            if row is None:
                raise NotFoundError("resident", resident.id)
            for name in _FIELDS:
                setattr(row, name, getattr(resident, name))
            row.updated_at = resident.updated_at
            session.flush()

    def delete(self, resident_id: str, db: Optional[Session] = None) -> None:
        with self._scope(db) as session:
            row = session.get(ResidentRow, resident_id)
            if row is None:
                raise NotFoundError("resident", resident_id)
            session.delete(row)
            session.flush()

    def list(self, flt: ResidentFilter, page: Pagination) -> ResidentList:
        """One page of residents ordered by surname, then given names."""
        with self._scope() as session:
            count_stmt = _apply_filter(select(func.count()).select_from(ResidentRow), flt)
            total = session.scalar(count_stmt) or 0

            stmt = (
                _apply_filter(select(ResidentRow), flt)
                .order_by(ResidentRow.surname, ResidentRow.given_names, ResidentRow.id)
                .limit(page.limit)
                .offset(page.offset)
            )
            residents = [_to_resident(row) for row in session.scalars(stmt)]

        return ResidentList(
            residents=residents,
            total=total,
            page=page.page,
            page_size=page.limit,
            total_pages=page.total_pages(total),
        )

    def list_active(self, page: Pagination) -> ResidentList:
        """Active residents only; the demographics engine scans these."""
        return self.list(ResidentFilter(status=ResidentStatus.ACTIVE), page)

    def get_by_household(self, household_id: str) -> List[Resident]:
        with self._scope() as session:
            stmt = (
                select(ResidentRow)
                .where(ResidentRow.household_id == household_id)
                .order_by(ResidentRow.date_of_birth)
            )
            return [_to_resident(row) for row in session.scalars(stmt)]

    def get_children(self, parent_id: str) -> List[Resident]:
        with self._scope() as session:
            stmt = (
                select(ResidentRow)
                .where(
                    or_(
                        ResidentRow.biological_parent_1_id == parent_id,
                        ResidentRow.biological_parent_2_id == parent_id,
                    )
                )
                .order_by(ResidentRow.date_of_birth)
            )
            return [_to_resident(row) for row in session.scalars(stmt)]

    def get_parents(self, resident_id: str) -> List[Resident]:
        resident = self.get_by_id(resident_id)
        parent_ids = [
            pid
            for pid in (resident.biological_parent_1_id, resident.biological_parent_2_id)
            if pid
        ]
        if not parent_ids:
            return []
        with self._scope() as session:
            stmt = select(ResidentRow).where(ResidentRow.id.in_(parent_ids))
            return [_to_resident(row) for row in session.scalars(stmt)]

    def count_by_status(self) -> Dict[ResidentStatus, int]:
        with self._scope() as session:
            stmt = select(ResidentRow.status, func.count()).group_by(ResidentRow.status)
            counts = {status: 0 for status in ResidentStatus}
            for status, count in session.execute(stmt):
                counts[status] = count
            return counts

    def next_registry_number(self, vault_number: int, db: Optional[Session] = None) -> str:
        """Next free registry number for this vault (V076-00001 when empty)."""
        with self._scope(db) as session:
            last = session.scalar(
                select(ResidentRow.registry_number)
                .order_by(ResidentRow.registry_number.desc())
                .limit(1)
            )
            if last is None:
                return format_registry_number(vault_number, 1)

            try:
                _, sequence = parse_registry_number(last)
            except ValueError:
                logger.warning(f"Unparseable registry number {last!r}, falling back to count")
                sequence = session.scalar(select(func.count()).select_from(ResidentRow)) or 0

            return format_registry_number(vault_number, sequence + 1)
