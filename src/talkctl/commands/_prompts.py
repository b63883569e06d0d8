"""Terminal prompt source backed by ``click.prompt``."""

from __future__ import annotations

from typing import Any

import click

from talkctl.domain.questions import Question, QuestionKind


class ClickPromptSource:
    """Answers setup questions on the terminal, one at a time."""

    def ask(self, question: Question) -> Any:
        if question.kind is QuestionKind.CONFIRM:
            return click.confirm(question.message, default=bool(question.default))
        if question.kind is QuestionKind.CHOICE:
            return click.prompt(
                question.message,
                type=click.Choice(list(question.choices), case_sensitive=False),
                default=question.default,
            )
        if question.kind is QuestionKind.PASSWORD:
            return click.prompt(question.message, hide_input=True)
        return click.prompt(question.message, default=question.default)
