"""Administrator account draft."""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, Field


class UserRole(StrEnum):
    ADMIN = "ADMIN"


class AdminAccountDraft(BaseModel):
    """Candidate administrator collected during interactive setup.

    Only built once every field has passed validation.  The plain-text
    passwords never leave the process: the account service stores a hash.
    """

    model_config = {"frozen": True}

    username: str
    email: str
    password: str = Field(repr=False)
    confirm_password: str = Field(repr=False)
