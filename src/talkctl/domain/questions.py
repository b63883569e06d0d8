"""Questions asked during interactive setup and the prompt source protocol.

The installer never renders prompts itself.  It hands a :class:`Question`
to a :class:`PromptSource` and receives the raw answer back; rendering,
key handling and terminal concerns belong to the source.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Protocol

from pydantic import BaseModel


class QuestionKind(StrEnum):
    TEXT = "text"
    PASSWORD = "password"
    CONFIRM = "confirm"
    CHOICE = "choice"


class Question(BaseModel):
    """A single prompt.

    Attributes:
        name: Answer key (e.g. ``"organization_name"``).
        message: Text shown to the operator.
        kind: How the answer should be captured.
        choices: Allowed values for :attr:`QuestionKind.CHOICE`.
        default: Value used when the operator just presses enter.
    """

    model_config = {"frozen": True}

    name: str
    message: str
    kind: QuestionKind = QuestionKind.TEXT
    choices: tuple[str, ...] = ()
    default: str | bool | None = None


class PromptSource(Protocol):
    """Anything able to answer a question, one at a time."""

    def ask(self, question: Question) -> Any: ...
