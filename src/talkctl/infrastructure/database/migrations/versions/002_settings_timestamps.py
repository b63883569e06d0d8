"""Track when the settings record was created and last changed.

Revision ID: 002_settings_timestamps
Revises: 001_baseline
Create Date: 2026-10-02
"""

from __future__ import annotations

from datetime import UTC, datetime

import sqlalchemy as sa
from alembic import op

revision: str = "002_settings_timestamps"
down_revision: str | None = "001_baseline"
branch_labels: tuple[str, ...] | None = None
depends_on: tuple[str, ...] | None = None


def upgrade() -> None:
    with op.batch_alter_table("settings") as batch:
        batch.add_column(sa.Column("created_at", sa.Text(), nullable=True))
        batch.add_column(sa.Column("updated_at", sa.Text(), nullable=True))

    # Installs that predate this revision have no creation time on record;
    # stamp them with the migration time so the columns are never empty.
    now = datetime.now(UTC).isoformat()
    settings = sa.table(
        "settings",
        sa.column("created_at", sa.Text()),
        sa.column("updated_at", sa.Text()),
    )
    op.execute(
        settings.update()
        .where(settings.c.created_at.is_(None))
        .values(created_at=now, updated_at=now)
    )


def downgrade() -> None:
    with op.batch_alter_table("settings") as batch:
        batch.drop_column("updated_at")
        batch.drop_column("created_at")
