"""Database configuration and session management.

The check-in desk is usually served by a single process backed by SQLite,
with several scanning stations hitting it at once. The engine is configured
accordingly:

    - **WAL (Write-Ahead Logging)**: readers keep listing attendees while a
      station writes a check-in. Rollback journals would block every reader
      for the duration of each write.

    - **Foreign Keys**: disabled by default in SQLite. Enabled so that
      submissions and order attendees always reference an existing event and
      ``checked_in_by`` always references an existing user.

    - **check_same_thread=False**: FastAPI runs sync dependencies in a thread
      pool, so a session may be used from a thread other than its creator.

Any other database URL (e.g. PostgreSQL) is passed through untouched and the
SQLite pragmas are skipped.
"""

from sqlalchemy import event as sa_event
from sqlmodel import Session, SQLModel, create_engine

from checkin.core.config import settings

is_sqlite = settings.database_url.startswith("sqlite")
connect_args = {"check_same_thread": False} if is_sqlite else {}

engine = create_engine(
    settings.database_url,
    connect_args=connect_args,
    echo=settings.debug,  # Log SQL statements when DEBUG=true
)


@sa_event.listens_for(engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Configure SQLite pragmas on each new connection.

    These settings are connection-level, not database-level, so they must
    be set each time a new connection is established from the pool.
    """
    if not is_sqlite:
        return
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_and_tables():
    """Create all database tables."""
    SQLModel.metadata.create_all(engine)


def get_session():
    """Dependency for getting database session."""
    with Session(engine) as session:
        yield session
