"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Configures logging and centralizes result emission
(stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING

import click

from talkctl.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from collections.abc import Iterator

    from talkctl.config.settings import TalkSettings
    from talkctl.infrastructure.store import Store
    from talkctl.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    No database connection is opened here, so ``--help`` and
    ``--version`` never touch storage.
    """

    def __init__(self, settings: TalkSettings) -> None:
        self.settings = settings

        from talkctl.config.logging import configure_logging

        configure_logging(verbose=settings.verbose, log_json=settings.log_json)

    @contextmanager
    def store(self) -> Iterator[Store]:
        """Open the configured store for the duration of a command."""
        from talkctl.infrastructure.store import Store

        with Store.open(self.settings.database_url) as store:
            yield store

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings are emitted to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            # In JSON mode, warnings are already in the serialized payload.
            if not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
