# netinfra/db/engine.py
"""
SQLModel engine and session management.
Uses SQLite (data/db/inventory.sqlite) unless DATABASE_URL points elsewhere.
SQLite connections run in WAL mode to let the WAN scheduler thread and the
request handlers write concurrently.
"""
import os
from typing import Generator

from sqlalchemy import event
from sqlmodel import Session, SQLModel, create_engine

from ..core.config import DATA_DIR, settings

DATABASE_URL = settings.database_url

if DATABASE_URL is None:
    DATABASE_FILE = os.path.join(DATA_DIR, "db", "inventory.sqlite")
    os.makedirs(os.path.dirname(DATABASE_FILE), exist_ok=True)
    DATABASE_URL = f"sqlite:///{DATABASE_FILE}"

_is_sqlite = DATABASE_URL.startswith("sqlite")

_connect_args = {"check_same_thread": False} if _is_sqlite else {}
sync_engine = create_engine(DATABASE_URL, echo=False, connect_args=_connect_args)


if _is_sqlite:
    @event.listens_for(sync_engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL;")
        cursor.close()


def get_sync_session() -> Generator[Session, None, None]:
    """
    Dependency for SQLModel session injection.
    Usage: session: Session = Depends(get_sync_session)
    """
    with Session(sync_engine) as session:
        yield session


def create_sync_db_and_tables(engine=None):
    """
    Create all tables defined in SQLModel models.
    Call this at application startup.
    """
    from .. import models  # noqa: F401  (registers the tables in SQLModel.metadata)

    SQLModel.metadata.create_all(engine or sync_engine)
