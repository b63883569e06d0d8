"""Tests for ServiceResult and ServiceError."""

import json

import pytest
from pydantic import ValidationError

from talkctl.services.errors import InvalidField
from talkctl.services.result import ServiceError, ServiceResult


class TestServiceResult:
    def test_success_construction(self) -> None:
        result = ServiceResult(ok=True, op="setup", data={"user_id": "abc"})
        assert result.ok is True
        assert result.data == {"user_id": "abc"}
        assert result.warnings == []
        assert result.error is None
        assert result.meta is None

    def test_error_construction(self) -> None:
        error = ServiceError(code="PERSIST_FAILED", message="disk full")
        result = ServiceResult(ok=False, op="setup", error=error)
        assert result.error is not None
        assert result.error.detail == {}

    def test_json_serialization(self) -> None:
        result = ServiceResult(ok=True, op="migrate", data={"applied": []}, meta={"x": 1})
        parsed = json.loads(result.model_dump_json())
        assert parsed["ok"] is True
        assert parsed["op"] == "migrate"
        assert parsed["meta"]["x"] == 1

    def test_frozen(self) -> None:
        result = ServiceResult(ok=True, op="setup")
        with pytest.raises(ValidationError):
            result.ok = False  # type: ignore[misc]


class TestFailure:
    def test_from_setup_error(self) -> None:
        exc = InvalidField("username", "Username is required")
        result = ServiceResult.failure("setup", exc, meta={"stages": ["start", "failed"]})
        assert result.ok is False
        assert result.error is not None
        assert result.error.code == "INVALID_FIELD"
        assert result.error.message == "Invalid username: Username is required"
        assert result.error.detail == {"field": "username", "reason": "Username is required"}
        assert result.meta == {"stages": ["start", "failed"]}

    def test_detail_is_copied(self) -> None:
        exc = InvalidField("email", "Email is required")
        result = ServiceResult.failure("setup", exc)
        exc.detail["stage"] = "collected"
        assert result.error is not None
        assert "stage" not in result.error.detail
