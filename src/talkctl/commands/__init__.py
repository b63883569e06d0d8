"""Subcommand modules for talkctl.

Provides register_commands() which uses deferred imports to keep
``talkctl --help`` fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from talkctl.commands.migrate import migrate
    from talkctl.commands.setup_cmd import setup_cmd

    cli.add_command(setup_cmd)
    cli.add_command(migrate)
