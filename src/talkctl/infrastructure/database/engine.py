"""Database engine setup.

SQLAlchemy Core (not ORM) is used because talkctl is a short-lived CLI
process — no benefit from session management or identity maps.
SQLite databases get WAL mode and foreign keys on every connection.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from sqlalchemy import Connection, create_engine, event
from sqlalchemy.engine import Engine, make_url

from talkctl.infrastructure.database.schema import metadata


def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(url: str) -> Engine:
    """Create an engine for *url*.

    For file-backed SQLite URLs the parent directory is created first.
    """
    parsed = make_url(url)
    is_sqlite = parsed.get_backend_name() == "sqlite"
    if is_sqlite and parsed.database and parsed.database != ":memory:":
        Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(url, echo=False)
    if is_sqlite:
        event.listen(engine, "connect", _set_sqlite_pragma)
    return engine


def ensure_schema(conn: Connection) -> None:
    """Create any missing tables on *conn*.  Idempotent."""
    metadata.create_all(conn, checkfirst=True)
