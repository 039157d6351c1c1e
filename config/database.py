"""
VT-UOS Population Console - Database Connection Management
SQLAlchemy configuration for the vault record store
"""

import logging
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from config.settings import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


def _engine_connect_args(database_url: str) -> dict:
    # SQLite connections are handed between the CLI and view layers
    if database_url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


def build_engine(database_url: str, **kwargs) -> Engine:
    """Create an engine with the vault's connection defaults applied."""
    engine = create_engine(
        database_url,
        echo=settings.DEBUG,
        connect_args=_engine_connect_args(database_url),
        **kwargs,
    )
    if database_url.startswith("sqlite"):
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def _enable_sqlite_foreign_keys(dbapi_conn, connection_record):
    """Lineage and household references rely on enforced foreign keys"""
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# SQLAlchemy engine
engine = build_engine(settings.DATABASE_URL)

# Session factory
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for ORM models
Base = declarative_base()


@contextmanager
def session_scope(factory: sessionmaker) -> Generator[Session, None, None]:
    """
    Transactional scope around a series of operations.

    Commits on success, rolls back and re-raises on any error.
    """
    db = factory()
    try:
        yield db
        db.commit()
    except Exception as e:
        db.rollback()
        logger.error(f"Database error: {e}")
        raise
    finally:
        db.close()


@contextmanager
def get_db() -> Generator[Session, None, None]:
    """
    Context manager for database sessions.

    Usage:
        with get_db() as db:
            db.execute(...)
    """
    with session_scope(SessionLocal) as db:
        yield db


def test_connection(factory: sessionmaker = None) -> bool:
    """
    Test database connectivity.

    Returns:
        bool: True if connection successful, False otherwise
    """
    try:
        with session_scope(factory or SessionLocal) as db:
            result = db.execute(text("SELECT 1"))
            assert result.scalar() == 1

            result = db.execute(text("SELECT COUNT(*) FROM residents"))
            logger.info(f"Database connection successful. Residents on record: {result.scalar()}")
            return True

    except Exception as e:
        logger.error(f"Database connection failed: {e}")
        return False


def init_db(bind: Engine = None):
    """
    Initialize database with schema.
    Safe to run repeatedly; existing tables are left untouched.
    """
    # Registers the ORM tables on Base.metadata
    import vtuos.db.tables  # noqa: F401

    logger.info("Initializing database schema...")
    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database schema initialized")


if __name__ == "__main__":
    # Test connection when run directly
    logging.basicConfig(level=logging.INFO)
    if test_connection():
        print("✅ Database connection successful")
    else:
        print("❌ Database connection failed")
