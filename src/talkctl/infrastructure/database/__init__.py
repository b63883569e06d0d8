"""Database engine and schema via SQLAlchemy Core."""

from talkctl.infrastructure.database.engine import create_db_engine, ensure_schema
from talkctl.infrastructure.database.schema import metadata, settings, users

__all__ = [
    "create_db_engine",
    "ensure_schema",
    "metadata",
    "settings",
    "users",
]
