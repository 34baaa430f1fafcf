from __future__ import annotations

from cloudterm.errors import (
    CloudTermError,
    CommandError,
    ErrorKind,
    ExitCode,
    format_command_error,
    usage_error,
    user_facing_error,
)
from cloudterm.logging import LOG_LEVELS, configure_logging


def test_exit_codes_are_deterministic() -> None:
    assert int(ExitCode.SUCCESS) == 0
    assert int(ExitCode.INVALID_ARGS) == 2
    assert int(ExitCode.CONFIG_ERROR) == 3
    assert int(ExitCode.RUNTIME_ERROR) == 4


def test_cloudterm_error_string_contains_hint() -> None:
    err = CloudTermError("config missing", code=ExitCode.CONFIG_ERROR, hint="Check the path")

    assert str(err) == "config missing Hint: Check the path"


def test_command_error_defaults() -> None:
    err = CommandError("bad value")

    assert err.kind is ErrorKind.INVALID_ARGUMENT
    assert err.code is ExitCode.RUNTIME_ERROR
    assert str(err) == "bad value"


def test_usage_error_kinds() -> None:
    missing = usage_error("pwd")
    extra = usage_error("pwd", missing=False)

    assert (missing.kind, missing.message) == (ErrorKind.MISSING_ARGUMENT, "missing argument")
    assert (extra.kind, extra.message) == (ErrorKind.INVALID_ARGUMENT, "too many arguments")
    assert extra.hint == "pwd"


def test_format_command_error() -> None:
    unknown = CommandError("ignored", kind=ErrorKind.UNKNOWN_COMMAND)
    not_found = CommandError("instance 'x' not found", kind=ErrorKind.NOT_FOUND)

    assert format_command_error("frobnicate", unknown) == "command not found: frobnicate"
    assert format_command_error("start", not_found) == "start: instance 'x' not found"
    assert format_command_error("ls", usage_error("ls [dir]", missing=False)) == (
        "ls: too many arguments\nUsage: ls [dir]"
    )


def test_user_facing_error_template() -> None:
    text = user_facing_error("Invalid seed", hint="Pass an integer")

    assert text == "Error: Invalid seed. Next step: Pass an integer"
    assert user_facing_error("Boom") == "Error: Boom."


def test_logging_levels() -> None:
    logger = configure_logging("WARN")

    assert logger.level == LOG_LEVELS["WARN"]
