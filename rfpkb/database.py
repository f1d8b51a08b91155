"""
Database Configuration and Session Management

This module handles SQLAlchemy setup. Every request gets its own session
through the get_db dependency.

NOTE: Sessions here are raw. Tenant isolation is enforced by
rfpkb.services.record_store, which is the only place record tables
are queried.
"""
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, Session, declarative_base
from typing import Iterator

from rfpkb.config import get_settings
import logging

logger = logging.getLogger(__name__)
settings = get_settings()


def _engine_options(url: str) -> dict:
    """Engine keyword arguments for the configured backend."""
    if url.startswith("sqlite"):
        # FastAPI may run sync dependencies in a threadpool
        return {"connect_args": {"check_same_thread": False}}
    return {
        "pool_size": settings.DATABASE_POOL_SIZE,
        "max_overflow": settings.DATABASE_MAX_OVERFLOW,
        "pool_pre_ping": True,  # Handles stale connections
    }


engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.DEBUG,  # Log SQL in debug mode
    **_engine_options(settings.DATABASE_URL),
)

# expire_on_commit=False lets handlers serialize rows after commit
# without another round trip.
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    expire_on_commit=False,
)

# Base class for all models
Base = declarative_base()

# Largest values the Integer and BigInteger columns hold on every
# supported backend (Postgres int4/int8, SQLite 64-bit INTEGER)
INT_MAX = 2**31 - 1
BIGINT_MAX = 2**63 - 1


@event.listens_for(engine, "connect")
def configure_connection(dbapi_connection, connection_record):
    """Set connection-level configuration on new connections."""
    cursor = dbapi_connection.cursor()
    if settings.DATABASE_URL.startswith("postgresql"):
        cursor.execute("SET TIME ZONE 'UTC'")
    elif settings.DATABASE_URL.startswith("sqlite"):
        # SQLite ignores ON DELETE clauses unless asked
        cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
    logger.debug("New database connection established")


def get_db() -> Iterator[Session]:
    """
    Dependency function that provides a database session.

    The session is automatically closed after the request completes.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind=None):
    """
    Create all tables.

    Used on startup in development and by the test suite. Safe to call
    repeatedly.
    """
    # Import models so they register with Base.metadata
    import rfpkb.models  # noqa: F401

    logger.info("Creating database tables")
    Base.metadata.create_all(bind=bind or engine)
