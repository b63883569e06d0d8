"""Settings models — the in-memory draft and the stored record.

The draft is mutable and filled in field by field while answers arrive.
It is only ever persisted as a whole.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field


class ModerationMode(StrEnum):
    """Comment moderation strategies."""

    PRE = "PRE"
    POST = "POST"


class DomainsDraft(BaseModel):
    """``domains`` section of the settings record."""

    model_config = {"validate_assignment": True}

    whitelist: list[str] = Field(default_factory=list)


class SettingsDraft(BaseModel):
    """Candidate global settings, not yet persisted."""

    model_config = {"validate_assignment": True}

    organization_name: str = Field(min_length=1)
    moderation: ModerationMode = ModerationMode.POST
    require_email_confirmation: bool = False
    domains: DomainsDraft = Field(default_factory=DomainsDraft)

    def replace_whitelist(self, domain: str) -> None:
        """Make *domain* the only whitelisted domain."""
        self.domains.whitelist = [domain]

    def to_record(self) -> dict[str, Any]:
        """Return the JSON-friendly payload used by the store."""
        return self.model_dump(mode="json")


class StoredSettings(BaseModel):
    """The persisted settings record, as read back from the store."""

    model_config = {"frozen": True}

    organization_name: str = Field(min_length=1)
    moderation: ModerationMode
    require_email_confirmation: bool
    domains: DomainsDraft
    created_at: str | None = None
    updated_at: str | None = None
