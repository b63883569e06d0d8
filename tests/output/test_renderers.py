"""Tests for Rich renderers."""

from talkctl.output.renderers import render_quiet, render_result
from talkctl.services.result import ServiceError, ServiceResult


def _setup_result(user_id: str | None = "u123") -> ServiceResult:
    return ServiceResult(
        ok=True,
        op="setup",
        data={
            "stage": "done",
            "mode": "interactive",
            "settings": {"organization_name": "Acme"},
            "user_id": user_id,
            "migrations": ["001_baseline", "002_settings_timestamps"],
            "install_lock_env": "TALK_INSTALL_LOCK",
        },
        meta={"stages": ["start", "done"]},
    )


class TestRenderSetup:
    def test_progress_lines_in_order(self) -> None:
        out = render_result(_setup_result())
        lines = out.splitlines()
        assert lines[0] == "Settings created."
        assert lines[1] == "User u123 created."
        assert lines[2] == "Migration 001_baseline applied."
        assert lines[3] == "Migration 002_settings_timestamps applied."
        assert lines[4] == "Talk is now installed!"
        assert lines[5] == "To prevent this command from running again, set TALK_INSTALL_LOCK=TRUE"

    def test_stamped_install_reports_schema_revision(self) -> None:
        data = {
            **_setup_result().data,
            "schema_stamped": True,
            "schema_revision": "002_settings_timestamps",
        }
        out = render_result(ServiceResult(ok=True, op="setup", data=data))
        assert "Schema stamped at 002_settings_timestamps." in out
        assert "applied." not in out

    def test_no_user_line_without_admin(self) -> None:
        out = render_result(_setup_result(user_id=None))
        assert "User" not in out
        assert "Talk is now installed!" in out

    def test_verbose_shows_settings_and_stages(self) -> None:
        out = render_result(_setup_result(), verbose=True)
        assert '"organization_name":"Acme"' in out
        assert "start -> done" in out


class TestRenderError:
    def test_error_line_and_step(self) -> None:
        result = ServiceResult(
            ok=False,
            op="setup",
            error=ServiceError(
                code="PASSWORD_MISMATCH",
                message="Invalid confirm_password: Passwords don't match",
                detail={"step": "collect"},
            ),
        )
        out = render_result(result)
        assert out.splitlines()[0].split()[:4] == ["ERROR", "setup", "—", "Invalid"]
        assert "failed during: collect" in out
        assert "detail:" not in out

    def test_markup_in_message_is_literal(self) -> None:
        result = ServiceResult(
            ok=False,
            op="setup",
            error=ServiceError(code="PERSIST_FAILED", message="bad [bold]value[/bold]"),
        )
        assert "[bold]value[/bold]" in render_result(result)

    def test_verbose_shows_detail(self) -> None:
        result = ServiceResult(
            ok=False,
            op="migrate",
            error=ServiceError(
                code="MIGRATION_FAILED", message="x", detail={"cause": "RuntimeError"}
            ),
        )
        out = render_result(result, verbose=True)
        assert "cause: RuntimeError" in out


class TestRenderMigrate:
    def test_check(self) -> None:
        result = ServiceResult(
            ok=True,
            op="migrate",
            data={
                "pending_count": 1,
                "pending": [{"revision": "002_settings_timestamps", "description": "Track"}],
                "current": "001_baseline",
                "head": "002_settings_timestamps",
            },
        )
        out = render_result(result)
        assert out.splitlines()[0].split() == ["OK", "migrate"]
        assert "  pending_count: 1" in out
        assert "  current: 001_baseline" in out
        assert "002_settings_timestamps  Track" in out

    def test_apply_up_to_date(self) -> None:
        result = ServiceResult(
            ok=True,
            op="migrate",
            data={
                "applied": [],
                "applied_count": 0,
                "current": "002_settings_timestamps",
                "stamped": False,
                "message": "Database is already up to date",
            },
        )
        out = render_result(result)
        assert "Database is already up to date" in out
        assert "applied." not in out

    def test_apply_stamped(self) -> None:
        result = ServiceResult(
            ok=True,
            op="migrate",
            data={
                "applied": ["001_baseline", "002_settings_timestamps"],
                "applied_count": 2,
                "current": "002_settings_timestamps",
                "stamped": True,
            },
        )
        out = render_result(result)
        assert "  Schema stamped at 002_settings_timestamps." in out
        assert "applied." not in out
        assert "  current: 002_settings_timestamps" in out


class TestRenderQuiet:
    def test_setup_prints_user_id(self) -> None:
        assert render_quiet(_setup_result()) == "u123"

    def test_setup_without_user(self) -> None:
        assert render_quiet(_setup_result(user_id=None)) == "OK: setup"

    def test_error(self) -> None:
        result = ServiceResult(
            ok=False, op="setup", error=ServiceError(code="X", message="Talk is already installed")
        )
        assert render_quiet(result) == "ERROR: setup — Talk is already installed"
