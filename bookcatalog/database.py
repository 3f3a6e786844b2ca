"""
Database Configuration Module

SQLAlchemy 2.0 setup for the SQL-backed catalog store.

Session Management Pattern
==========================
We use the "session per request" pattern:
1. Request arrives -> create a new session
2. Use session for all store operations in that request
3. Commit on success, rollback on failure
4. Close session when request ends

This is implemented by the get_db() generator, which FastAPI's dependency
injection drives (see bookcatalog.dependencies.get_store).
"""

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from bookcatalog.config import get_settings

settings = get_settings()


def build_engine(database_url: str) -> Engine:
    """
    Create an engine for the given URL.

    SQLite does not take the pool sizing arguments used for PostgreSQL,
    so they are only passed to server databases.
    """
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            echo=settings.debug,
        )
    return create_engine(
        database_url,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,  # Verify connections are alive before using
        echo=settings.debug,  # Log SQL in debug mode
    )


# =============================================================================
# Database Engine
# =============================================================================
engine = build_engine(settings.database_url)


# =============================================================================
# Session Factory
# =============================================================================
# - autocommit=False: the store decides when to commit
# - autoflush=False: don't auto-flush before queries (more predictable behavior)
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

    Alembic uses Base.metadata to discover tables for migrations.
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency.

    Code before yield creates the session, code after yield closes it.
    The finally block ensures cleanup happens even if an exception occurs.

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
def create_tables() -> None:
    """
    Create all database tables.

    Useful for development and tests. In production, use Alembic migrations.
    """
    import bookcatalog.models  # noqa: F401 - registers tables on Base.metadata

    Base.metadata.create_all(bind=engine)
