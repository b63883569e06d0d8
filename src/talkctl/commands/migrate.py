"""Command: database schema migration."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from talkctl.commands._base import TalkCommand

if TYPE_CHECKING:
    from talkctl.commands._context import AppContext


@click.command(
    cls=TalkCommand,
    examples=(
        "talkctl migrate",
        "talkctl migrate --check",
        "talkctl --json migrate --check",
    ),
)
@click.option(
    "--check", "check_only", is_flag=True, help="Show pending migrations without applying."
)
@click.pass_obj
def migrate(app: AppContext, check_only: bool) -> None:
    """Run pending database migrations."""
    from talkctl.services.migrate import MigrationService

    with app.store() as store:
        svc = MigrationService(store)
        result = svc.check_pending() if check_only else svc.apply()
    app.emit(result)
