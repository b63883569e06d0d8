"""Command: first-run installation."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from talkctl.commands._base import TalkCommand

if TYPE_CHECKING:
    from talkctl.commands._context import AppContext

_SETUP_EXAMPLES = (
    "talkctl setup",
    "talkctl setup --defaults",
    "talkctl --json --no-interact setup",
    "talkctl --database-url sqlite:////var/lib/talk/talk.db setup",
    "TALKCTL_CONFIG=/etc/talk/talkctl.toml talkctl setup",
)


@click.command("setup", cls=TalkCommand, examples=_SETUP_EXAMPLES)
@click.option(
    "-d",
    "--defaults",
    "use_defaults",
    is_flag=True,
    help="Use configured defaults without prompting (no admin account is created).",
)
@click.pass_obj
def setup_cmd(app: AppContext, use_defaults: bool) -> None:
    """Install Talk: save initial settings, create the admin, run migrations."""
    from talkctl.services.collector import CollectMode
    from talkctl.services.setup import SetupService

    if use_defaults or app.settings.no_interact:
        mode = CollectMode.DEFAULTS
        prompts = None
    else:
        from talkctl.commands._prompts import ClickPromptSource

        mode = CollectMode.INTERACTIVE
        prompts = ClickPromptSource()

    app.emit(SetupService.install(app.settings, mode=mode, prompts=prompts))
