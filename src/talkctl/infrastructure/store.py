"""Store — owns the database engine and the global settings record.

The Store is the single dependency injected into every service.  It is
acquired with :meth:`Store.open` and released when the ``with`` block
exits, on success and on failure alike.  Writes go through
:meth:`transaction`, which commits on success and rolls back on any
exception, so the settings record and the first administrator are
created together or not at all.
"""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from datetime import UTC, datetime
from typing import TYPE_CHECKING

from sqlalchemy import exists, func, insert, inspect, select

from talkctl.domain.settings import StoredSettings
from talkctl.infrastructure.database.engine import create_db_engine, ensure_schema
from talkctl.infrastructure.database.schema import SETTINGS_SINGLETON_ID, settings, users

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

    from talkctl.domain.settings import SettingsDraft

logger = logging.getLogger(__name__)


class SettingsNotInitialized(LookupError):
    """No settings record exists yet — the application was never installed."""


def utc_now() -> str:
    return datetime.now(UTC).isoformat()


class Store:
    """Database access for the installer.

    Usage::

        with Store.open(url) as store:
            with store.transaction() as conn:
                store.create_settings(conn, draft)
    """

    def __init__(self, engine: Engine, url: str) -> None:
        self._engine = engine
        self.url = url

    @classmethod
    @contextmanager
    def open(cls, url: str) -> Iterator[Store]:
        """Acquire an engine for *url* and dispose of it on exit."""
        engine = create_db_engine(url)
        logger.debug("Opened store at %s", engine.url.render_as_string(hide_password=True))
        try:
            yield cls(engine, url)
        finally:
            engine.dispose()
            logger.debug("Closed store")

    @property
    def engine(self) -> Engine:
        return self._engine

    @contextmanager
    def transaction(self) -> Iterator[Connection]:
        """One atomic unit of work; commits on success, rolls back on error."""
        with self._engine.begin() as conn:
            yield conn

    def has_table(self, name: str) -> bool:
        return inspect(self._engine).has_table(name)

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def retrieve_settings(self) -> StoredSettings:
        """Return the settings record.

        Raises:
            SettingsNotInitialized: The table or the row does not exist.
            Any other exception (driver errors, malformed JSON, invalid
            values) propagates unchanged: the record's state is unknown.
        """
        if not self.has_table(settings.name):
            raise SettingsNotInitialized("settings table does not exist")

        # A database that has not been migrated yet lacks columns added by
        # later revisions; read only what is there.
        present = {col["name"] for col in inspect(self._engine).get_columns(settings.name)}
        columns = [col for col in settings.c if col.name in present]

        with self._engine.connect() as conn:
            row = (
                conn.execute(select(*columns).where(settings.c.id == SETTINGS_SINGLETON_ID))
                .mappings()
                .first()
            )
        if row is None:
            raise SettingsNotInitialized("settings record does not exist")

        return StoredSettings.model_validate(
            {
                "organization_name": row["organization_name"],
                "moderation": row["moderation"],
                "require_email_confirmation": bool(row["require_email_confirmation"]),
                "domains": json.loads(row["domains"]),
                "created_at": row.get("created_at"),
                "updated_at": row.get("updated_at"),
            }
        )

    def create_settings(self, conn: Connection, draft: SettingsDraft) -> None:
        """Insert the singleton settings row on *conn*.

        Creates missing tables first.  A concurrent installer that already
        committed makes this raise ``IntegrityError``.
        """
        ensure_schema(conn)
        record = draft.to_record()
        now = utc_now()
        conn.execute(
            insert(settings).values(
                id=SETTINGS_SINGLETON_ID,
                organization_name=record["organization_name"],
                moderation=record["moderation"],
                require_email_confirmation=int(record["require_email_confirmation"]),
                domains=json.dumps(record["domains"]),
                created_at=now,
                updated_at=now,
            )
        )

    # ------------------------------------------------------------------
    # Users
    # ------------------------------------------------------------------

    def username_exists(self, username: str) -> bool:
        """Case-insensitive username lookup; False before the table exists."""
        if not self.has_table(users.name):
            return False
        with self._engine.connect() as conn:
            stmt = select(exists().where(func.lower(users.c.username) == username.lower()))
            return bool(conn.execute(stmt).scalar())

    def insert_user(
        self,
        conn: Connection,
        *,
        user_id: str,
        username: str,
        email: str,
        password_hash: str,
        role: str,
    ) -> None:
        ensure_schema(conn)
        conn.execute(
            insert(users).values(
                id=user_id,
                username=username,
                email=email,
                password_hash=password_hash,
                role=role,
                created_at=utc_now(),
            )
        )

    def count_users(self, *, role: str | None = None) -> int:
        if not self.has_table(users.name):
            return 0
        with self._engine.connect() as conn:
            stmt = select(func.count()).select_from(users)
            if role is not None:
                stmt = stmt.where(users.c.role == role)
            return int(conn.execute(stmt).scalar_one())
