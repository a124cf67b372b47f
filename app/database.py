"""
Database Configuration Module

This module sets up SQLAlchemy 2.0 for the Library API.

We use SYNCHRONOUS SQLAlchemy sessions. Every resolver in this service does
at most a handful of short queries, and Strawberry runs sync resolvers
without extra ceremony.

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives → create a new session
2. Use session for all database operations in that request
3. Commit on success, rollback on failure
4. Close session when request ends

The GraphQL context receives its session from the get_db dependency, so
tests can swap the session with app.dependency_overrides.
"""

import logging
import time
from collections.abc import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from app.config import get_settings

logger = logging.getLogger(__name__)

settings = get_settings()


# =============================================================================
# Database Engine
# =============================================================================
# - pool_size / max_overflow: connection pool sizing (server databases only)
# - pool_pre_ping: test connection health before using it
# - echo: log all SQL statements in debug mode

if settings.is_sqlite:
    # SQLite connections are used from the server's worker threads
    engine = create_engine(
        settings.database_url,
        connect_args={"check_same_thread": False},
        echo=settings.debug,
    )
else:
    engine = create_engine(
        settings.database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
        echo=settings.debug,
    )


# =============================================================================
# Session Factory
# =============================================================================
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
)


# =============================================================================
# Base Model Class
# =============================================================================
class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Every model registers its table on Base.metadata, which is what
    create_tables() uses to build the schema.
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Creates a session for the request, yields it, and closes it once the
    request is finished (the finally block runs even if the request failed).

    Yields:
        SQLAlchemy Session instance
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# =============================================================================
# Utility Functions
# =============================================================================
def wait_for_database(retries: int | None = None, delay: float | None = None) -> None:
    """
    Block until the database accepts connections.

    Tries ``retries`` times, sleeping ``delay`` seconds between attempts,
    and re-raises the last connection error when every attempt failed.
    """
    retries = retries or settings.db_connect_retries
    delay = settings.db_connect_retry_delay if delay is None else delay

    for attempt in range(1, retries + 1):
        try:
            with engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            logger.info("Database connection established")
            return
        except OperationalError as e:
            if attempt == retries:
                logger.error(f"Database unreachable after {retries} attempts: {e}")
                raise
            logger.warning(
                f"Database connection attempt {attempt}/{retries} failed, "
                f"retrying in {delay}s"
            )
            time.sleep(delay)


def create_tables() -> None:
    """
    Create all database tables.

    Tables that already exist are left untouched.
    """
    # Import models so they are registered on Base.metadata
    import app.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
