"""``talkctl`` entry point: global flags, settings resolution, subcommands."""

from __future__ import annotations

import click

from talkctl import __version__
from talkctl.commands import register_commands
from talkctl.commands._context import AppContext
from talkctl.config.settings import TalkSettings

_EPILOG = """\
Settings come from talkctl.toml (found by walking up from the current
directory, or named with --config / TALKCTL_CONFIG) and TALKCTL_* environment
variables, e.g. TALKCTL_DATABASE__URL."""


@click.group(invoke_without_command=True, epilog=_EPILOG)
@click.version_option(version=__version__, prog_name="talkctl")
@click.option("--json", "json_output", is_flag=True, help="Print the result as JSON.")
@click.option("-q", "--quiet", is_flag=True, help="Print only the essential result.")
@click.option("-v", "--verbose", is_flag=True, help="Show result details and debug logging.")
@click.option("--log-json", is_flag=True, help="Write log lines to stderr as JSON.")
@click.option("--no-interact", is_flag=True, help="Never prompt; setup uses configured defaults.")
@click.option("-c", "--config", "config_path", default=None, help="Use this talkctl.toml.")
@click.option(
    "--database-url",
    default=None,
    metavar="URL",
    help="SQLAlchemy URL of the Talk database, overriding [database] url.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    json_output: bool,
    quiet: bool,
    verbose: bool,
    log_json: bool,
    no_interact: bool,
    config_path: str | None,
    database_url: str | None,
) -> None:
    """talkctl — install Talk and keep its database schema current."""
    ctx.obj = AppContext(
        TalkSettings.from_cli(
            config_path=config_path,
            database_url=database_url,
            json_output=json_output,
            quiet=quiet,
            verbose=verbose,
            log_json=log_json,
            no_interact=no_interact,
        )
    )
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


register_commands(cli)
