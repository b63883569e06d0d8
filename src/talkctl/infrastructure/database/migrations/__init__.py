"""Alembic migration infrastructure for talkctl.

Provides programmatic Alembic configuration — no alembic.ini needed.
The migration scripts live alongside this module.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from alembic.config import Config

if TYPE_CHECKING:
    from sqlalchemy import Connection


def build_config(db_url: str, *, connection: Connection | None = None) -> Config:
    """Build an Alembic Config pointing at our migration scripts.

    When *connection* is given, migrations run on it (and inside its
    transaction) instead of on a fresh engine built from *db_url*.
    """
    cfg = Config()
    cfg.set_main_option("script_location", str(Path(__file__).parent))
    # ConfigParser interpolation would choke on '%' in URL-encoded passwords.
    cfg.set_main_option("sqlalchemy.url", db_url.replace("%", "%%"))
    if connection is not None:
        cfg.attributes["connection"] = connection
    return cfg
