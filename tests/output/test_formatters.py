"""Tests for output mode selection."""

import json

from talkctl.output.formatters import OutputSettings, format_result
from talkctl.services.result import ServiceResult


def _result() -> ServiceResult:
    return ServiceResult(ok=True, op="migrate", data={"applied": [], "current": "x"})


class TestFormatResult:
    def test_default_is_human(self) -> None:
        assert format_result(_result()).splitlines()[0].split() == ["OK", "migrate"]

    def test_json(self) -> None:
        out = format_result(_result(), settings=OutputSettings(json_output=True))
        parsed = json.loads(out)
        assert parsed["ok"] is True
        assert parsed["data"]["current"] == "x"

    def test_quiet(self) -> None:
        assert format_result(_result(), settings=OutputSettings(quiet=True)) == "OK: migrate"

    def test_json_wins_over_quiet(self) -> None:
        out = format_result(_result(), settings=OutputSettings(json_output=True, quiet=True))
        assert json.loads(out)["op"] == "migrate"
