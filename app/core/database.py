"""Database configuration and session management.

SQLite is the default store. Every mutation in the tasting ledgers relies
on the unique indexes declared on the tables, so the engine has to enforce
them and the foreign keys on every connection.

SQLite Configuration Choices:
    - **WAL (Write-Ahead Logging)**: Allows concurrent readers while a
      request is writing. Without WAL, SQLite uses rollback journals which
      block all readers during writes.

    - **Foreign Keys**: Disabled by default in SQLite. We enable it so that
      the restrict/cascade rules declared on the models are enforced (e.g. a
      user that owns events cannot be deleted).

    - **check_same_thread=False**: Required for FastAPI. Sync endpoints run
      in a threadpool, so a pooled connection may be used from a thread other
      than the one that created it.
"""

from sqlalchemy import event as sa_event
from sqlmodel import Session, SQLModel, create_engine

from app.core.config import settings

is_sqlite = settings.database_url.startswith("sqlite")

connect_args = {"check_same_thread": False} if is_sqlite else {}

engine = create_engine(
    settings.database_url,
    connect_args=connect_args,
    echo=settings.debug,  # Log SQL statements when DEBUG=true
)


def set_sqlite_pragma(dbapi_connection, connection_record):
    """Configure SQLite pragmas on each new connection.

    These settings are connection-level, not database-level, so they must
    be set each time a new connection is established from the pool.
    """
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


if is_sqlite:
    sa_event.listen(engine, "connect", set_sqlite_pragma)


def create_db_and_tables():
    """Create all database tables."""
    # Import models so they register on SQLModel.metadata
    import app.models  # noqa: F401

    SQLModel.metadata.create_all(engine)


def get_session():
    """Dependency for getting database session."""
    with Session(engine) as session:
        yield session
