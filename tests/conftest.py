"""Shared pytest fixtures and test helpers for talkctl tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from talkctl.config.settings import TalkSettings
from talkctl.domain.questions import Question
from talkctl.infrastructure.store import Store


class ScriptedPrompts:
    """Prompt source that answers from a dict keyed by question name.

    A tuple value is consumed one item per ask, for questions that are
    expected to be asked more than once.
    """

    def __init__(self, answers: dict[str, Any]) -> None:
        self._answers = dict(answers)
        self.asked: list[str] = []
        self.questions: list[Question] = []

    def ask(self, question: Question) -> Any:
        self.asked.append(question.name)
        self.questions.append(question)
        if question.name not in self._answers:
            raise AssertionError(f"unexpected question: {question.name}")
        value = self._answers[question.name]
        if isinstance(value, tuple):
            head, *rest = value
            self._answers[question.name] = tuple(rest)
            return head
        return value


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment out of settings resolution."""
    for var in ("TALKCTL_CONFIG", "TALKCTL_DATABASE__URL", "TALKCTL_NO_INTERACT"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def settings(tmp_path: Path) -> TalkSettings:
    """Settings rooted at a temp directory (database under ``.talk/``)."""
    return TalkSettings.from_cli(root=tmp_path)


@pytest.fixture
def store(settings: TalkSettings) -> Iterator[Store]:
    """Open store on an empty database."""
    with Store.open(settings.database_url) as s:
        yield s


@pytest.fixture
def scripted_prompts() -> type[ScriptedPrompts]:
    return ScriptedPrompts


@pytest.fixture
def acme_answers() -> dict[str, Any]:
    """Answers for a complete interactive install."""
    return {
        "organization_name": "Acme",
        "moderation": "PRE",
        "require_email_confirmation": True,
        "input_whitelisted_domains": False,
        "username": "admin",
        "email": "a@b.com",
        "password": "Str0ngPass!",
        "confirm_password": "Str0ngPass!",
    }


@pytest.fixture
def installed_store(store: Store, settings: TalkSettings) -> Store:
    """Store on which a defaults-mode install already completed."""
    from talkctl.services.collector import CollectMode
    from talkctl.services.setup import SetupService

    result = SetupService(store, settings).run(CollectMode.DEFAULTS)
    assert result.ok, result.error
    return store


@pytest.fixture
def _isolated_root(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp directory so the CLI uses an isolated database.

    Use via ``@pytest.mark.usefixtures("_isolated_root")`` on command test
    classes.  Tests that need the path can also request ``tmp_path``.
    """
    monkeypatch.chdir(tmp_path)
