"""Error taxonomy for commands and the process exit code contract."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class ExitCode(IntEnum):
    SUCCESS = 0
    INVALID_ARGS = 2
    CONFIG_ERROR = 3
    RUNTIME_ERROR = 4


class ErrorKind(str, Enum):
    UNKNOWN_COMMAND = "unknown_command"
    UNKNOWN_SUBCOMMAND = "unknown_subcommand"
    MISSING_ARGUMENT = "missing_argument"
    INVALID_ARGUMENT = "invalid_argument"
    DUPLICATE_NAME = "duplicate_name"
    NOT_FOUND = "not_found"
    INVALID_STATE_TRANSITION = "invalid_state_transition"


@dataclass
class CloudTermError(Exception):
    message: str
    code: ExitCode = ExitCode.RUNTIME_ERROR
    hint: str = ""

    def __str__(self) -> str:
        if self.hint:
            return f"{self.message} Hint: {self.hint}"
        return self.message


@dataclass
class CommandError(CloudTermError):
    """Failure of a single simulated command; never escapes the dispatcher."""

    kind: ErrorKind = ErrorKind.INVALID_ARGUMENT


def usage_error(usage: str, *, missing: bool = True) -> CommandError:
    kind = ErrorKind.MISSING_ARGUMENT if missing else ErrorKind.INVALID_ARGUMENT
    message = "missing argument" if missing else "too many arguments"
    return CommandError(message, kind=kind, hint=usage)


def format_command_error(word: str, exc: CommandError) -> str:
    if exc.kind == ErrorKind.UNKNOWN_COMMAND:
        return f"command not found: {word}"
    text = f"{word}: {exc.message}"
    if exc.hint:
        text += f"\nUsage: {exc.hint}"
    return text


def user_facing_error(message: str, *, hint: str = "") -> str:
    if hint:
        return f"Error: {message}. Next step: {hint}"
    return f"Error: {message}."
