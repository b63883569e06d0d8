"""Tests for the setup CLI command."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from talkctl.cli import cli
from talkctl.infrastructure.store import Store

ACME_INPUT = "Acme\nPRE\ny\nn\nadmin\na@b.com\nStr0ngPass!\nStr0ngPass!\n"


def _json_tail(output: str) -> dict:
    """Parse the JSON document printed after the interactive prompts."""
    return json.loads(output[output.index("{") :])


def _db_url(root: Path) -> str:
    return f"sqlite:///{root / '.talk' / 'talk.db'}"


@pytest.mark.usefixtures("_isolated_root")
class TestSetupInteractive:
    def test_acme_install(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        result = cli_runner.invoke(cli, ["setup"], input=ACME_INPUT)
        assert result.exit_code == 0, result.output
        assert "Settings created." in result.stdout
        assert "Schema stamped at 002_settings_timestamps." in result.stdout
        assert "Migration 001_baseline applied." not in result.stdout
        assert "Talk is now installed!" in result.stdout
        assert "TALK_INSTALL_LOCK=TRUE" in result.stdout
        assert "Str0ngPass!" not in result.stdout

        with Store.open(_db_url(tmp_path)) as store:
            stored = store.retrieve_settings()
            assert stored.organization_name == "Acme"
            assert stored.moderation == "PRE"
            assert stored.require_email_confirmation is True
            assert store.count_users(role="ADMIN") == 1

    def test_json_output(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "setup"], input=ACME_INPUT)
        assert result.exit_code == 0, result.output
        data = _json_tail(result.stdout)
        assert data["ok"] is True
        assert data["op"] == "setup"
        assert data["data"]["settings"]["organization_name"] == "Acme"
        assert data["data"]["user_id"]

    def test_password_mismatch(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        bad = "Acme\nPRE\ny\nn\nadmin\na@b.com\nStr0ngPass!\ndifferent\n"
        result = cli_runner.invoke(cli, ["setup"], input=bad)
        assert result.exit_code == 1
        assert "Passwords don't match" in result.stderr
        assert "failed during: collect" in result.stderr

        with Store.open(_db_url(tmp_path)) as store:
            assert store.count_users() == 0

    def test_reasks_blank_organization(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "setup"], input=" \n" + ACME_INPUT)
        assert result.exit_code == 0, result.output
        assert _json_tail(result.stdout)["data"]["settings"]["organization_name"] == "Acme"


@pytest.mark.usefixtures("_isolated_root")
class TestSetupDefaults:
    def test_defaults_flag(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--json", "setup", "--defaults"])
        assert result.exit_code == 0, result.output
        data = json.loads(result.stdout)
        assert data["data"]["mode"] == "defaults"
        assert data["data"]["user_id"] is None
        assert data["warnings"]

    def test_no_interact_implies_defaults(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["--no-interact", "setup"])
        assert result.exit_code == 0, result.output
        assert "Talk is now installed!" in result.stdout
        assert "WARNING: No administrator account was created" in result.stderr

    def test_quiet(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["-q", "setup", "--defaults"])
        assert result.exit_code == 0
        assert result.stdout.strip() == "OK: setup"

    def test_config_defaults_applied(self, cli_runner: CliRunner, tmp_path: Path) -> None:
        (tmp_path / "talkctl.toml").write_text('[setup]\norganization_name = "Configured"\n')
        result = cli_runner.invoke(cli, ["--json", "setup", "--defaults"])
        assert result.exit_code == 0, result.output
        assert json.loads(result.stdout)["data"]["settings"]["organization_name"] == "Configured"

    def test_database_url_from_env(
        self, cli_runner: CliRunner, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        db = tmp_path / "elsewhere" / "talk.db"
        monkeypatch.setenv("TALKCTL_DATABASE__URL", f"sqlite:///{db}")
        result = cli_runner.invoke(cli, ["setup", "--defaults"])
        assert result.exit_code == 0, result.output
        assert db.is_file()
        assert not (tmp_path / ".talk").exists()


@pytest.mark.usefixtures("_isolated_root")
class TestSetupAlreadyInstalled:
    def test_second_run_fails(self, cli_runner: CliRunner) -> None:
        first = cli_runner.invoke(cli, ["setup", "--defaults"])
        assert first.exit_code == 0, first.output

        second = cli_runner.invoke(cli, ["setup"], input=ACME_INPUT)
        assert second.exit_code == 1
        assert "Talk is already installed" in second.stderr
        # Guard runs before any prompt.
        assert "Organization name" not in second.stdout

    def test_second_run_json(self, cli_runner: CliRunner) -> None:
        cli_runner.invoke(cli, ["setup", "--defaults"])
        result = cli_runner.invoke(cli, ["--json", "setup", "--defaults"])
        assert result.exit_code == 1
        data = json.loads(result.stderr)
        assert data["ok"] is False
        assert data["error"]["code"] == "ALREADY_INSTALLED"


@pytest.mark.usefixtures("_isolated_root")
class TestSetupHelp:
    def test_help(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["setup", "--help"])
        assert result.exit_code == 0
        assert "--defaults" in result.output

    def test_examples(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["setup", "--examples"])
        assert result.exit_code == 0
        assert "talkctl setup --defaults" in result.output
