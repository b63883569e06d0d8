"""Tests for installation state and the setup stage machine."""

from talkctl.domain.state import (
    SETUP_TRANSITIONS,
    TERMINAL_STAGES,
    InstallationState,
    InstallationStatus,
    SetupStage,
    is_valid_transition,
)


class TestInstallationStatus:
    def test_only_uninitialized_is_installable(self) -> None:
        assert InstallationStatus(InstallationState.UNINITIALIZED).installable is True
        assert InstallationStatus(InstallationState.INITIALIZED).installable is False

    def test_unknown_carries_error_and_blocks(self) -> None:
        err = RuntimeError("disk gone")
        status = InstallationStatus(InstallationState.UNKNOWN, error=err)
        assert status.installable is False
        assert status.error is err


class TestSetupTransitions:
    def test_happy_path_is_linear(self) -> None:
        path = ["start", "guard_checked", "collected", "persisted", "migrated", "done"]
        for current, target in zip(path, path[1:], strict=False):
            assert is_valid_transition(current, target)

    def test_every_running_stage_can_fail(self) -> None:
        for stage, allowed in SETUP_TRANSITIONS.items():
            if SetupStage(stage) in TERMINAL_STAGES:
                assert allowed == []
            else:
                assert "failed" in allowed

    def test_cannot_skip_stages(self) -> None:
        assert not is_valid_transition("start", "persisted")
        assert not is_valid_transition("guard_checked", "migrated")
        assert not is_valid_transition("collected", "done")

    def test_terminal_stages_are_final(self) -> None:
        assert not is_valid_transition("done", "start")
        assert not is_valid_transition("failed", "guard_checked")

    def test_unknown_stage(self) -> None:
        assert not is_valid_transition("bogus", "done")

    def test_all_stages_mapped(self) -> None:
        assert set(SETUP_TRANSITIONS) == {s.value for s in SetupStage}
