"""Installation state and the setup stage machine.

Installation state is derived, never stored: it is computed by probing
the settings store. Setup stages describe one run of the installer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class InstallationState(StrEnum):
    """Whether the application has been configured."""

    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class InstallationStatus:
    """What a read of the settings store says about the installation.

    ``error`` is only set for :attr:`InstallationState.UNKNOWN`.
    """

    state: InstallationState
    error: BaseException | None = None

    @property
    def installable(self) -> bool:
        return self.state is InstallationState.UNINITIALIZED


class SetupStage(StrEnum):
    """Stages of a single setup run."""

    START = "start"
    GUARD_CHECKED = "guard_checked"
    COLLECTED = "collected"
    PERSISTED = "persisted"
    MIGRATED = "migrated"
    DONE = "done"
    FAILED = "failed"


# --- Transition map ---

SETUP_TRANSITIONS: dict[str, list[str]] = {
    "start": ["guard_checked", "failed"],
    "guard_checked": ["collected", "failed"],
    "collected": ["persisted", "failed"],
    "persisted": ["migrated", "failed"],
    "migrated": ["done", "failed"],
    "done": [],
    "failed": [],
}

TERMINAL_STAGES = frozenset({SetupStage.DONE, SetupStage.FAILED})


def is_valid_transition(
    current: str,
    target: str,
    transitions: dict[str, list[str]] = SETUP_TRANSITIONS,
) -> bool:
    """Check if transitioning from *current* to *target* is allowed."""
    allowed = transitions.get(current, [])
    return target in allowed
