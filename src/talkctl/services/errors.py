"""Setup error taxonomy.

Every failure aborts the whole run; nothing here is retried in-process.
Each error carries a stable ``code`` for JSON output and a ``detail``
mapping with enough context to identify the failing stage.
"""

from __future__ import annotations

from typing import Any


class SetupError(Exception):
    """Base class for all installer failures."""

    code = "SETUP_FAILED"

    def __init__(self, message: str, **detail: Any) -> None:
        super().__init__(message)
        self.detail: dict[str, Any] = detail


class AlreadyInstalled(SetupError):
    """A settings record exists.  Expected when re-running on an installed system."""

    code = "ALREADY_INSTALLED"

    def __init__(self, message: str = "Talk is already installed", **detail: Any) -> None:
        super().__init__(message, **detail)


class UnknownGuardError(SetupError):
    """The store could not prove the application is uninstalled."""

    code = "UNKNOWN_GUARD_ERROR"


class InvalidField(SetupError):
    """An answer failed validation.  Rerun the installer with corrected input."""

    code = "INVALID_FIELD"

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"Invalid {field}: {reason}", field=field, reason=reason)
        self.field = field
        self.reason = reason


class PasswordMismatch(InvalidField):
    """Password confirmation differs from the password."""

    code = "PASSWORD_MISMATCH"

    def __init__(self) -> None:
        super().__init__("confirm_password", "Passwords don't match")


class PersistFailure(SetupError):
    """The atomic settings/account write failed and was rolled back."""

    code = "PERSIST_FAILED"


class MigrationFailure(SetupError):
    """Migrations failed after settings were committed.

    The installation exists but its schema is incomplete: run the
    migrations again, do not reinstall.
    """

    code = "MIGRATION_FAILED"


class CollectFailure(SetupError):
    """A validator could not reach a verdict (for example the store failed).

    Nothing has been written; rerun the installer once the store is healthy.
    """

    code = "COLLECT_FAILED"
