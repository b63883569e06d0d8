"""TalkCommand: a Click command with an eager ``--examples`` flag.

``--help`` stays short; ``--examples`` prints sample invocations as
shell lines and exits before the command opens storage.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

if TYPE_CHECKING:
    from collections.abc import Sequence


def format_examples(examples: Sequence[str]) -> str:
    """One ``$ command`` line per example, indented under the heading."""
    return "\n".join(f"  $ {line}" for line in examples)


class TalkCommand(click.Command):
    """Click command taking ``examples=`` as a sequence of invocations."""

    def __init__(self, *args: Any, examples: Sequence[str] = (), **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.examples = tuple(examples)
        if self.examples:
            self.params.append(
                click.Option(
                    ["--examples"],
                    is_flag=True,
                    expose_value=False,
                    is_eager=True,
                    callback=self._show_examples,
                    help="Show usage examples and exit.",
                )
            )

    def _show_examples(self, ctx: click.Context, _param: click.Parameter, value: bool) -> None:
        if not value or ctx.resilient_parsing:
            return
        click.echo(f"Examples for '{ctx.command_path}':\n")
        click.echo(format_examples(self.examples))
        ctx.exit(0)
