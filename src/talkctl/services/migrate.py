"""MigrationService — schema migrations with Alembic.

Revision ids are the migration records: Alembic's version table marks
what has been applied, so running twice applies nothing the second time.
"""

from __future__ import annotations

import logging
from typing import Any

from alembic import command
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory

from talkctl.infrastructure.database.migrations import build_config
from talkctl.infrastructure.database.schema import settings
from talkctl.services.base import BaseService
from talkctl.services.errors import MigrationFailure
from talkctl.services.result import ServiceError, ServiceResult

logger = logging.getLogger(__name__)


class MigrationService(BaseService):
    """Lists and applies pending migrations on the store's database."""

    def _script(self) -> ScriptDirectory:
        return ScriptDirectory.from_config(build_config(self._store.url))

    def current_revision(self) -> str | None:
        with self._store.engine.connect() as conn:
            return MigrationContext.configure(conn).get_current_revision()

    def pending(self) -> list[dict[str, Any]]:
        """Pending revisions, oldest first."""
        script = self._script()
        head = script.get_current_head()
        current = self.current_revision()

        pending: list[dict[str, Any]] = []
        if current != head and head is not None:
            rev_obj = script.get_revision(head)
            while rev_obj is not None and rev_obj.revision != current:
                pending.append(
                    {
                        "revision": rev_obj.revision,
                        "description": (rev_obj.doc or "").strip(),
                    }
                )
                down = rev_obj.down_revision
                if down is None:
                    break
                rev_obj = script.get_revision(str(down))
        pending.reverse()
        return pending

    def run(self) -> dict[str, Any]:
        """Apply every pending migration.

        A database whose tables were created directly from the current
        schema (first-run install) but has no version row is stamped at
        head instead of replaying CREATE TABLE revisions.

        Raises:
            MigrationFailure: Listing or applying migrations failed.
        """
        try:
            pending = self.pending()
            head = self._script().get_current_head()
            if not pending:
                return {"applied": [], "applied_count": 0, "current": head, "stamped": False}

            stamp = self.current_revision() is None and self._store.has_table(settings.name)
            with self._store.transaction() as conn:
                cfg = build_config(self._store.url, connection=conn)
                if stamp:
                    command.stamp(cfg, "head")
                else:
                    command.upgrade(cfg, "head")
        except Exception as exc:
            raise MigrationFailure(
                f"Migration failed: {exc}. Settings are saved; run 'talkctl migrate' to retry.",
                cause=type(exc).__name__,
            ) from exc

        applied = [p["revision"] for p in pending]
        if stamp:
            logger.info("Schema stamped at %s", head)
        else:
            for revision in applied:
                logger.info("Migration %s applied", revision)
        return {
            "applied": applied,
            "applied_count": len(applied),
            "current": head,
            "stamped": stamp,
        }

    # ------------------------------------------------------------------
    # Operations behind ``talkctl migrate``
    # ------------------------------------------------------------------

    def check_pending(self) -> ServiceResult:
        """List pending migrations without applying."""
        op = "migrate"
        try:
            pending = self.pending()
            current = self.current_revision()
            head = self._script().get_current_head()
        except Exception as exc:
            return ServiceResult(
                ok=False,
                op=op,
                error=ServiceError(
                    code="CHECK_FAILED",
                    message=f"Failed to check migrations: {exc}",
                ),
            )
        return ServiceResult(
            ok=True,
            op=op,
            data={
                "pending_count": len(pending),
                "pending": pending,
                "current": current,
                "head": head,
            },
        )

    def apply(self) -> ServiceResult:
        op = "migrate"
        try:
            data = self.run()
        except MigrationFailure as exc:
            return ServiceResult.failure(op, exc)
        if not data["applied"]:
            data["message"] = "Database is already up to date"
        return ServiceResult(ok=True, op=op, data=data)
