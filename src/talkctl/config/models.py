"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, talkctl.toml only contains overrides.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from talkctl.domain.settings import ModerationMode


class DatabaseConfig(BaseModel):
    """[database] section.

    ``url`` is any SQLAlchemy URL.  When unset the installer uses a SQLite
    file at ``{root}/.talk/talk.db``.
    """

    model_config = {"frozen": True}

    url: str | None = None


class SetupDefaultsConfig(BaseModel):
    """[setup] section — starting values for the settings draft."""

    model_config = {"frozen": True}

    organization_name: str = Field(default="Talk", min_length=1)
    moderation: ModerationMode = ModerationMode.POST
    require_email_confirmation: bool = False
    whitelist: tuple[str, ...] = ()


class AccountPolicyConfig(BaseModel):
    """[accounts] section — administrator validation policy."""

    model_config = {"frozen": True}

    username_pattern: str = r"[a-zA-Z0-9_]+"
    username_max_length: int = 30
    email_min_length: int = 3
    password_min_length: int = 8
