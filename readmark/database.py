"""Database configuration and session management."""

from collections.abc import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from readmark.config import Settings


class Base(DeclarativeBase):
    """Base class for all database models."""


# Module-level singletons (application-scoped)
_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:  # noqa: ANN001
    # SQLite ignores ON DELETE CASCADE unless foreign keys are switched on per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(database_url: str) -> Engine:
    """Create an engine for the given URL with per-backend pool settings."""
    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_recycle=3600,
    )


def initialize_database(settings: Settings) -> None:
    """Initialize database engine and session factory once at startup."""
    global _engine, _session_factory  # noqa: PLW0603

    _engine = build_engine(settings.DATABASE_URL)
    _session_factory = sessionmaker(autocommit=False, autoflush=False, bind=_engine)


def get_engine() -> Engine:
    """Get the singleton database engine."""
    if _engine is None:
        raise RuntimeError("Database not initialized. Call initialize_database() first.")
    return _engine


def create_schema() -> None:
    """Create all tables on the initialized engine."""
    # Import models so they register on Base.metadata
    from readmark import models  # noqa: F401, PLC0415

    Base.metadata.create_all(bind=get_engine())


def dispose_engine() -> None:
    """Dispose database engine on shutdown."""
    global _engine, _session_factory  # noqa: PLW0603
    if _engine is not None:
        _engine.dispose()
        _engine = None
        _session_factory = None


def get_db() -> Generator[Session, None, None]:
    """Yield a session and close it afterwards."""
    if _session_factory is None:
        raise RuntimeError("Database not initialized. Call initialize_database() first.")

    db = _session_factory()
    try:
        yield db
    finally:
        db.close()
