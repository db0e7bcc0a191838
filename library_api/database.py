"""
Database Configuration Module

This module sets up SQLAlchemy 2.0 for the Library Catalog API.

We use synchronous SQLAlchemy with the "session per request" pattern:
1. Request arrives → create a new session
2. Use session for all database operations in that request
3. Commit on success, rollback on failure
4. Close session when request ends

For GraphQL, the session is created by the get_db dependency that the
context getter declares, so it lives exactly as long as the HTTP request
or WebSocket connection.
"""

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from library_api.config import get_settings

settings = get_settings()


# =============================================================================
# Database Engine
# =============================================================================
# - pool_size / max_overflow: connection pool sizing (server databases only)
# - pool_pre_ping: Test connection health before using
# - echo: Log all SQL statements in debug mode

def _engine_options(database_url: str) -> dict:
    """Build create_engine() keyword arguments for the configured backend."""
    if make_url(database_url).get_backend_name() == "sqlite":
        # SQLite connections are shared across the threadpool in dev setups
        return {"connect_args": {"check_same_thread": False}}

    return {
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_pre_ping": True,
    }


engine = create_engine(
    settings.database_url,
    echo=settings.debug,
    **_engine_options(settings.database_url),
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

    Alembic reads Base.metadata to discover tables for migrations.
    """
    pass


# =============================================================================
# Dependency Injection
# =============================================================================
def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI.

    Code before yield creates the session, code after yield closes it,
    even if the request raised.

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

    Useful for local development and the seed script. In production,
    use Alembic migrations instead.
    """
    Base.metadata.create_all(bind=engine)


def drop_tables() -> None:
    """
    Drop all database tables.

    DANGER: This deletes all data! Development and testing only.
    """
    Base.metadata.drop_all(bind=engine)
