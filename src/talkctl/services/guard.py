"""InstallationGuard — decides whether installation may proceed.

"Not found" and "don't know" are different answers: only a store that
positively reports the settings record as absent authorizes a first run.
"""

from __future__ import annotations

import logging

from talkctl.domain.state import InstallationState, InstallationStatus
from talkctl.infrastructure.store import SettingsNotInitialized
from talkctl.services.base import BaseService
from talkctl.services.errors import AlreadyInstalled, UnknownGuardError

logger = logging.getLogger(__name__)


class InstallationGuard(BaseService):
    """Reads the settings store to decide the installation state."""

    def status(self) -> InstallationStatus:
        """Classify the store without raising."""
        try:
            self._store.retrieve_settings()
        except SettingsNotInitialized:
            return InstallationStatus(InstallationState.UNINITIALIZED)
        except Exception as exc:
            logger.debug("Settings lookup failed", exc_info=True)
            return InstallationStatus(InstallationState.UNKNOWN, error=exc)
        return InstallationStatus(InstallationState.INITIALIZED)

    def check_installable(self) -> None:
        """Return normally only when the store is provably uninitialized.

        Raises:
            AlreadyInstalled: A settings record exists.
            UnknownGuardError: The store failed in any other way.
        """
        result = self.status()
        if result.state is InstallationState.INITIALIZED:
            raise AlreadyInstalled()
        if result.state is InstallationState.UNKNOWN:
            err = result.error
            raise UnknownGuardError(
                f"Could not determine installation state: {err}",
                cause=type(err).__name__,
            ) from err
