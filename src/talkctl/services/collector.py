"""ConfigurationCollector — builds the settings and administrator drafts.

Two modes:

- ``defaults``: configured defaults, no administrator account.  The
  administrator is created later through a separate path.
- ``interactive``: one question at a time through a :class:`PromptSource`.
  Required free-text settings are re-asked until non-empty; account
  fields that fail validation abort the run.
"""

from __future__ import annotations

import logging
from enum import StrEnum
from typing import TYPE_CHECKING, Any

from talkctl.domain.accounts import AdminAccountDraft
from talkctl.domain.questions import Question, QuestionKind
from talkctl.domain.settings import DomainsDraft, ModerationMode, SettingsDraft
from talkctl.domain.validation import required
from talkctl.services.errors import CollectFailure, InvalidField, PasswordMismatch

if TYPE_CHECKING:
    from talkctl.config.models import SetupDefaultsConfig
    from talkctl.domain.questions import PromptSource
    from talkctl.domain.validation import Validator
    from talkctl.services.accounts import AccountService

logger = logging.getLogger(__name__)


class CollectMode(StrEnum):
    DEFAULTS = "defaults"
    INTERACTIVE = "interactive"


class ConfigurationCollector:
    """Gathers the drafts for one setup run."""

    def __init__(self, defaults: SetupDefaultsConfig, accounts: AccountService) -> None:
        self._defaults = defaults
        self._accounts = accounts

    def default_settings(self) -> SettingsDraft:
        """A fresh draft holding the configured defaults."""
        return SettingsDraft(
            organization_name=self._defaults.organization_name,
            moderation=self._defaults.moderation,
            require_email_confirmation=self._defaults.require_email_confirmation,
            domains=DomainsDraft(whitelist=list(self._defaults.whitelist)),
        )

    def collect(
        self,
        mode: CollectMode,
        prompts: PromptSource | None = None,
    ) -> tuple[SettingsDraft, AdminAccountDraft | None]:
        if mode is CollectMode.DEFAULTS:
            return self.default_settings(), None
        if prompts is None:
            msg = "interactive collection needs a prompt source"
            raise ValueError(msg)
        answers: dict[str, Any] = {}
        settings = self._collect_settings(prompts, answers)
        account = self._collect_account(prompts, answers)
        return settings, account

    # ------------------------------------------------------------------
    # Settings
    # ------------------------------------------------------------------

    def _collect_settings(self, prompts: PromptSource, answers: dict[str, Any]) -> SettingsDraft:
        draft = self.default_settings()

        draft.organization_name = self._ask_until_valid(
            prompts,
            Question(name="organization_name", message="Organization name"),
            required("Organization name"),
            answers,
        )

        moderation = self._ask(
            prompts,
            Question(
                name="moderation",
                message="Moderation mode",
                kind=QuestionKind.CHOICE,
                choices=tuple(m.value for m in ModerationMode),
                default=draft.moderation.value,
            ),
            answers,
        )
        if moderation not in {m.value for m in ModerationMode}:
            allowed = ", ".join(m.value for m in ModerationMode)
            raise InvalidField("moderation", f"must be one of {allowed}")
        draft.moderation = ModerationMode(moderation)

        draft.require_email_confirmation = bool(
            self._ask(
                prompts,
                Question(
                    name="require_email_confirmation",
                    message="Should users have to confirm their email address?",
                    kind=QuestionKind.CONFIRM,
                    default=draft.require_email_confirmation,
                ),
                answers,
            )
        )

        restrict = self._ask(
            prompts,
            Question(
                name="input_whitelisted_domains",
                message="Would you like to specify a whitelisted domain?",
                kind=QuestionKind.CONFIRM,
                default=False,
            ),
            answers,
        )
        if restrict:
            domain = self._ask_until_valid(
                prompts,
                Question(name="whitelisted_domain", message="Whitelisted domain"),
                required("Whitelisted domain"),
                answers,
            )
            draft.replace_whitelist(domain)

        return draft

    # ------------------------------------------------------------------
    # Administrator
    # ------------------------------------------------------------------

    def _collect_account(self, prompts: PromptSource, answers: dict[str, Any]) -> AdminAccountDraft:
        accounts = self._accounts

        username = self._ask_checked(
            prompts,
            Question(name="username", message="Admin username"),
            accounts.validate_username,
            answers,
        )
        email = self._ask_checked(
            prompts,
            Question(name="email", message="Admin email address"),
            accounts.validate_email,
            answers,
        )
        password = self._ask_checked(
            prompts,
            Question(name="password", message="Admin password", kind=QuestionKind.PASSWORD),
            accounts.validate_password,
            answers,
        )

        confirm = self._text(
            self._ask(
                prompts,
                Question(
                    name="confirm_password",
                    message="Confirm admin password",
                    kind=QuestionKind.PASSWORD,
                ),
                answers,
            )
        )
        # Equality first: a mismatched value is never strength-checked.
        if confirm != password:
            raise PasswordMismatch()
        reason = self._check("confirm_password", accounts.validate_password, confirm, answers)
        if reason is not None:
            raise InvalidField("confirm_password", reason)

        return AdminAccountDraft(
            username=username,
            email=email,
            password=password,
            confirm_password=confirm,
        )

    # ------------------------------------------------------------------
    # Prompt helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _text(value: Any) -> str:
        return "" if value is None else str(value)

    @staticmethod
    def _check(
        field: str, validate: Validator, value: str, answers: dict[str, Any]
    ) -> str | None:
        """Run *validate*; a validator that cannot decide aborts the run.

        Raises:
            CollectFailure: The validator raised (e.g. the username
                lookup hit a locked database).
        """
        try:
            return validate(value, answers)
        except Exception as exc:
            raise CollectFailure(
                f"Could not validate {field}: {exc}",
                field=field,
                cause=type(exc).__name__,
            ) from exc

    def _ask(self, prompts: PromptSource, question: Question, answers: dict[str, Any]) -> Any:
        value = prompts.ask(question)
        answers[question.name] = value
        logger.debug("Answered %s", question.name)
        return value

    def _ask_until_valid(
        self,
        prompts: PromptSource,
        question: Question,
        validate: Validator,
        answers: dict[str, Any],
    ) -> str:
        """Re-ask *question* until *validate* accepts the answer."""
        while True:
            value = self._text(self._ask(prompts, question, answers)).strip()
            reason = self._check(question.name, validate, value, answers)
            if reason is None:
                return value
            logger.debug("Re-asking %s: %s", question.name, reason)

    def _ask_checked(
        self,
        prompts: PromptSource,
        question: Question,
        validate: Validator,
        answers: dict[str, Any],
    ) -> str:
        """Ask once; raise :class:`InvalidField` if *validate* rejects the answer."""
        value = self._text(self._ask(prompts, question, answers))
        if question.kind is not QuestionKind.PASSWORD:
            value = value.strip()
        reason = self._check(question.name, validate, value, answers)
        if reason is not None:
            raise InvalidField(question.name, reason)
        return value
