"""
VT-UOS Population Console - Household Repository
"""

import re
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from vtuos.db.tables import HouseholdRow, ResidentRow
from vtuos.models.common import Pagination
from vtuos.models.household import Household, HouseholdFilter, HouseholdList
from vtuos.repository.base import Repository
from vtuos.utils.errors import NotFoundError

DESIGNATION_PATTERN = re.compile(r"^H-(\d+)$")

_FIELDS = (
    "designation", "household_type", "head_of_household_id", "ration_class",
    "status", "formed_date", "dissolved_date",
)


def _to_household(row: HouseholdRow, member_count: int = 0) -> Household:
    return Household(
        id=row.id,
        designation=row.designation,
        household_type=row.household_type,
        formed_date=row.formed_date,
        head_of_household_id=row.head_of_household_id,
        ration_class=row.ration_class,
        status=row.status,
        dissolved_date=row.dissolved_date,
        created_at=row.created_at,
        updated_at=row.updated_at,
        member_count=member_count,
    )


def _apply_filter(stmt, flt: HouseholdFilter):
    if flt.status is not None:
        stmt = stmt.where(HouseholdRow.status == flt.status)
    if flt.household_type is not None:
        stmt = stmt.where(HouseholdRow.household_type == flt.household_type)
    if flt.ration_class is not None:
        stmt = stmt.where(HouseholdRow.ration_class == flt.ration_class)
    if flt.search_term:
        stmt = stmt.where(HouseholdRow.designation.like(f"%{flt.search_term}%"))
    return stmt


class HouseholdRepository(Repository):
    """Handles household data access."""

    def create(self, household: Household, db: Optional[Session] = None) -> None:
        household.validate()

        now = datetime.now(timezone.utc)
        household.created_at = now
        household.updated_at = now

        with self._scope(db) as session:
            row = HouseholdRow(id=household.id, created_at=now, updated_at=now)
            for name in _FIELDS:
                setattr(row, name, getattr(household, name))
            session.add(row)
            session.flush()

    def get_by_id(self, household_id: str) -> Household:
        with self._scope() as session:
            row = session.get(HouseholdRow, household_id)
            if row is None:
                raise NotFoundError("household", household_id)
            return _to_household(row, self._member_count(session, row.id))

    def get_by_designation(self, designation: str) -> Household:
        with self._scope() as session:
            row = session.scalars(
                select(HouseholdRow).where(HouseholdRow.designation == designation)
            ).first()
            if row is None:
                raise NotFoundError("household", designation)
            return _to_household(row, self._member_count(session, row.id))

    def update(self, household: Household, db: Optional[Session] = None) -> None:
        household.validate()
        household.updated_at = datetime.now(timezone.utc)

        with self._scope(db) as session:
            row = session.get(HouseholdRow, household.id)
            if row is None:
                raise NotFoundError("household", household.id)
            for name in _FIELDS:
                setattr(row, name, getattr(household, name))
            row.updated_at = household.updated_at
            session.flush()

    def list(self, flt: HouseholdFilter, page: Pagination) -> HouseholdList:
        with self._scope() as session:
            total = session.scalar(
                _apply_filter(select(func.count()).select_from(HouseholdRow), flt)
            ) or 0
            stmt = (
                _apply_filter(select(HouseholdRow), flt)
                .order_by(HouseholdRow.designation)
                .limit(page.limit)
                .offset(page.offset)
            )
            households = [
                _to_household(row, self._member_count(session, row.id))
                for row in session.scalars(stmt)
            ]

        return HouseholdList(
            households=households,
            total=total,
            page=page.page,
            page_size=page.limit,
            total_pages=page.total_pages(total),
        )

    def count_members(self, household_id: str) -> int:
        with self._scope() as session:
            return self._member_count(session, household_id)

    def next_designation(self) -> str:
        """Next free designation (H-0001 when no households exist)."""
        with self._scope() as session:
            last = session.scalar(
                select(HouseholdRow.designation)
                .order_by(HouseholdRow.designation.desc())
                .limit(1)
            )
            if last is None:
                return "H-0001"

            match = DESIGNATION_PATTERN.match(last)
            if match:
                number = int(match.group(1))
            else:
                number = session.scalar(select(func.count()).select_from(HouseholdRow)) or 0
            return f"H-{number + 1:04d}"

    @staticmethod
    def _member_count(session: Session, household_id: str) -> int:
        return session.scalar(
            select(func.count())
            .select_from(ResidentRow)
            .where(ResidentRow.household_id == household_id)
        ) or 0
