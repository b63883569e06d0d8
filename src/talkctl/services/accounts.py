"""AccountService — administrator validation and creation.

The ``validate_*`` methods follow the validator signature
``(value, answers) -> reason | None`` so the collector can call them
exactly like any other field validator.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from passlib.context import CryptContext

from talkctl.domain.accounts import UserRole
from talkctl.domain.validation import chain, matches, max_length, min_length, required
from talkctl.services.base import BaseService

if TYPE_CHECKING:
    from sqlalchemy import Connection

    from talkctl.config.models import AccountPolicyConfig
    from talkctl.domain.accounts import AdminAccountDraft
    from talkctl.infrastructure.store import Store

logger = logging.getLogger(__name__)

# Pure-python scheme; no native bcrypt backend needed on the install host.
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


class AccountService(BaseService):
    """Validates and creates user accounts."""

    def __init__(self, store: Store, policy: AccountPolicyConfig) -> None:
        super().__init__(store)
        self._policy = policy
        self._username_rules = chain(
            required("Username"),
            max_length("Username", policy.username_max_length),
            matches(
                policy.username_pattern,
                "Usernames can only contain letters, numbers and _",
            ),
        )
        self._email_rules = chain(
            required("Email"),
            min_length("Email", policy.email_min_length),
        )
        self._password_rules = chain(
            required("Password"),
            min_length("Password", policy.password_min_length),
        )

    def validate_username(self, value: str, answers: Mapping[str, Any]) -> str | None:
        reason = self._username_rules(value, answers)
        if reason is not None:
            return reason
        if self._store.username_exists(value):
            return f"Username {value!r} is already taken"
        return None

    def validate_email(self, value: str, answers: Mapping[str, Any]) -> str | None:
        return self._email_rules(value, answers)

    def validate_password(self, value: str, answers: Mapping[str, Any]) -> str | None:
        """Password strength policy."""
        return self._password_rules(value, answers)

    def create_admin(self, conn: Connection, draft: AdminAccountDraft) -> str:
        """Insert the administrator on *conn* and return the new user id.

        Runs inside the caller's transaction so it commits or rolls back
        together with the settings record.
        """
        user_id = uuid.uuid4().hex
        self._store.insert_user(
            conn,
            user_id=user_id,
            username=draft.username,
            email=draft.email.strip().lower(),
            password_hash=pwd_context.hash(draft.password),
            role=UserRole.ADMIN.value,
        )
        logger.debug("Administrator %s staged as %s", draft.username, user_id)
        return user_id
