"""Errors module tests."""

from __future__ import annotations

from claude_notify.errors import ExitCode, NotifyError, user_facing_error


def test_user_facing_error_without_hint() -> None:
    assert user_facing_error("something went wrong") == "Error: something went wrong."


def test_user_facing_error_with_hint() -> None:
    result = user_facing_error("something went wrong", hint="try again")
    assert result == "Error: something went wrong. Next step: try again"


def test_exit_code_values() -> None:
    assert int(ExitCode.SUCCESS) == 0
    assert int(ExitCode.INVALID_ARGS) == 2
    assert int(ExitCode.RUNTIME_ERROR) == 4
    assert int(ExitCode.UNSUPPORTED_PLATFORM) == 8


def test_exit_codes_cover_only_reachable_failures() -> None:
    assert [code.name for code in ExitCode] == [
        "SUCCESS",
        "INVALID_ARGS",
        "RUNTIME_ERROR",
        "UNSUPPORTED_PLATFORM",
    ]
    assert 3 not in {int(code) for code in ExitCode}


def test_notify_error_defaults_to_runtime_error() -> None:
    error = NotifyError("msg")
    assert error.code is ExitCode.RUNTIME_ERROR
    assert str(error) == "msg"


def test_notify_error_str_with_hint() -> None:
    error = NotifyError("msg", hint="hint")
    assert str(error) == "msg Hint: hint"
