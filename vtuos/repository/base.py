"""Session handling shared by the repositories."""

from contextlib import contextmanager
from datetime import date
from typing import Generator, Optional

from sqlalchemy.orm import Session, sessionmaker

from config.database import SessionLocal, session_scope


class Repository:
    """
    Base for repositories bound to a session factory.

    Write methods accept an optional ``db`` session so several writes can
    share one transaction; without it each call runs in its own scope.
    """

    def __init__(self, session_factory: Optional[sessionmaker] = None):
        self._session_factory = session_factory or SessionLocal

    @contextmanager
    def _scope(self, db: Optional[Session] = None) -> Generator[Session, None, None]:
        if db is not None:
            yield db
            return
        with session_scope(self._session_factory) as session:
            yield session


def years_before(reference: date, years: int) -> date:
    """The same calendar day ``years`` years earlier (Feb 29 → Feb 28)."""
    try:
        return reference.replace(year=reference.year - years)
    except ValueError:
        return reference.replace(year=reference.year - years, day=28)
