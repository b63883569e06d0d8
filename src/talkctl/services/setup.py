"""SetupService — the first-run installation state machine.

Pipeline: GUARD → COLLECT → PERSIST → MIGRATE → DONE

Any failure moves the run to FAILED and stops it where it is:

- GUARD failures happen before any write.
- COLLECT failures happen before any write.
- PERSIST is one transaction: the settings row and the administrator are
  committed together or rolled back together.
- MIGRATE failures leave a committed installation with an incomplete
  schema; they are reported distinctly so the operator reruns migrations
  rather than the installer.

Only a run that reaches DONE produces a successful result.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError

from talkctl.config.logging import setup_run_context
from talkctl.domain.state import SetupStage, is_valid_transition
from talkctl.infrastructure.store import Store
from talkctl.services.accounts import AccountService
from talkctl.services.base import BaseService
from talkctl.services.collector import CollectMode, ConfigurationCollector
from talkctl.services.errors import AlreadyInstalled, PersistFailure, SetupError
from talkctl.services.guard import InstallationGuard
from talkctl.services.migrate import MigrationService
from talkctl.services.result import ServiceResult

if TYPE_CHECKING:
    from talkctl.config.settings import TalkSettings
    from talkctl.domain.accounts import AdminAccountDraft
    from talkctl.domain.questions import PromptSource
    from talkctl.domain.settings import SettingsDraft

logger = logging.getLogger(__name__)

INSTALL_LOCK_ENV_VAR = "TALK_INSTALL_LOCK"

# Step attempted from each non-terminal stage, for failure reports.
_STEP_FROM_STAGE: dict[SetupStage, str] = {
    SetupStage.START: "guard",
    SetupStage.GUARD_CHECKED: "collect",
    SetupStage.COLLECTED: "persist",
    SetupStage.PERSISTED: "migrate",
}


class SetupService(BaseService):
    """Runs one installation attempt against a store."""

    def __init__(self, store: Store, settings: TalkSettings) -> None:
        super().__init__(store)
        self.accounts = AccountService(store, settings.accounts)
        self.guard = InstallationGuard(store)
        self.collector = ConfigurationCollector(settings.setup, self.accounts)
        self.migrations = MigrationService(store)
        self.stage = SetupStage.START
        self.history: list[str] = [self.stage.value]

    @classmethod
    def install(
        cls,
        settings: TalkSettings,
        *,
        mode: CollectMode,
        prompts: PromptSource | None = None,
    ) -> ServiceResult:
        """Open the configured store, run setup, and release the store."""
        with Store.open(settings.database_url) as store:
            return cls(store, settings).run(mode, prompts)

    def run(self, mode: CollectMode, prompts: PromptSource | None = None) -> ServiceResult:
        """Drive the run from START to DONE or FAILED."""
        op = "setup"
        with setup_run_context(mode.value):
            try:
                self.guard.check_installable()
                self._advance(SetupStage.GUARD_CHECKED)

                settings_draft, account_draft = self.collector.collect(mode, prompts)
                self._advance(SetupStage.COLLECTED)

                user_id = self._persist(settings_draft, account_draft)
                self._advance(SetupStage.PERSISTED)

                migrations = self.migrations.run()
                self._advance(SetupStage.MIGRATED)
            except SetupError as exc:
                failed_at = self.stage
                exc.detail.setdefault("stage", failed_at.value)
                exc.detail.setdefault("step", _STEP_FROM_STAGE.get(failed_at, failed_at.value))
                self._advance(SetupStage.FAILED)
                logger.info("Setup failed after %s: %s", failed_at.value, exc)
                return ServiceResult.failure(op, exc, meta={"stages": self.history})

            self._advance(SetupStage.DONE)

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "stage": self.stage.value,
                "mode": mode.value,
                "settings": settings_draft.to_record(),
                "user_id": user_id,
                "migrations": migrations["applied"],
                "schema_stamped": migrations["stamped"],
                "schema_revision": migrations["current"],
                "install_lock_env": INSTALL_LOCK_ENV_VAR,
            },
            warnings=self._warnings(account_draft),
            meta={"stages": self.history},
        )

    # ------------------------------------------------------------------
    # Steps
    # ------------------------------------------------------------------

    def _persist(
        self,
        settings_draft: SettingsDraft,
        account_draft: AdminAccountDraft | None,
    ) -> str | None:
        """Create settings and the optional administrator in one transaction."""
        user_id: str | None = None
        try:
            with self._store.transaction() as conn:
                self._store.create_settings(conn, settings_draft)
                if account_draft is not None:
                    user_id = self.accounts.create_admin(conn, account_draft)
        except IntegrityError as exc:
            # Another installer committed the singleton row first.
            if self._store_has_settings():
                raise AlreadyInstalled(
                    "Talk was installed by a concurrent run", cause="IntegrityError"
                ) from exc
            raise PersistFailure(f"Failed to save settings: {exc.orig}") from exc
        except Exception as exc:
            raise PersistFailure(
                f"Failed to save settings: {exc}", cause=type(exc).__name__
            ) from exc

        logger.info("Settings created")
        if user_id is not None:
            logger.info("User %s created", user_id)
        return user_id

    def _store_has_settings(self) -> bool:
        status = self.guard.status()
        return not status.installable and status.error is None

    def _advance(self, target: SetupStage) -> None:
        if not is_valid_transition(self.stage.value, target.value):
            msg = f"Invalid setup transition {self.stage.value} -> {target.value}"
            raise RuntimeError(msg)
        logger.debug("Setup stage %s -> %s", self.stage.value, target.value)
        self.stage = target
        self.history.append(target.value)

    @staticmethod
    def _warnings(account_draft: AdminAccountDraft | None) -> list[str]:
        if account_draft is None:
            return ["No administrator account was created; add one before opening Talk to users"]
        return []
