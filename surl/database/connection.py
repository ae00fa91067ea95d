"""
SQLAlchemy engine and declarative base for the SQLite-backed store.
"""

import os

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base

DB_FILENAME = "surl.sqlite3"

Base = declarative_base()


def create_sqlite_engine(
    store_path: str,
    journal_mode: str = "WAL",
    synchronous: str = "FULL"
) -> Engine:
    """
    Create an engine for the store file inside store_path.

    The directory is created if missing. journal_mode and synchronous are
    applied as pragmas on every new connection; they tune write throughput
    and fsync behaviour. synchronous=FULL keeps committed writes durable
    across power loss.

    Args:
        store_path: Directory holding the database file
        journal_mode: SQLite journal mode (WAL, DELETE, TRUNCATE, ...)
        synchronous: SQLite synchronous level (FULL, NORMAL, ...)
    """
    os.makedirs(store_path, exist_ok=True)
    db_file = os.path.join(store_path, DB_FILENAME)

    engine = create_engine(
        f"sqlite:///{db_file}",
        connect_args={"check_same_thread": False}
    )

    @event.listens_for(engine, "connect")
    def _apply_pragmas(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute(f"PRAGMA journal_mode={journal_mode}")
        cursor.execute(f"PRAGMA synchronous={synchronous}")
        cursor.close()

    return engine
