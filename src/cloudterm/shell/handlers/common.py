"""Argument checks shared by command handlers."""

from __future__ import annotations

from collections.abc import Callable, Sequence

from cloudterm.errors import CommandError, ErrorKind, usage_error
from cloudterm.shell.context import SessionContext
from cloudterm.shell.parser import ParsedCommand

Handler = Callable[[SessionContext, ParsedCommand], str]


def expect_args(args: Sequence[str], count: int, usage: str) -> tuple[str, ...]:
    if len(args) < count:
        raise usage_error(usage)
    if len(args) > count:
        raise usage_error(usage, missing=False)
    return tuple(args)


def expect_at_most(args: Sequence[str], count: int, usage: str) -> tuple[str, ...]:
    if len(args) > count:
        raise usage_error(usage, missing=False)
    return tuple(args)


def require_subcommand(command: ParsedCommand, allowed: Sequence[str], usage: str) -> str:
    if not command.args:
        raise usage_error(usage)
    if command.subcommand not in allowed:
        raise CommandError(
            f"unknown subcommand '{command.subcommand}'",
            kind=ErrorKind.UNKNOWN_SUBCOMMAND,
            hint=usage,
        )
    return command.subcommand


def format_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    widths = [len(item) for item in headers]
    for row in rows:
        for index, cell in enumerate(row):
            widths[index] = max(widths[index], len(cell))

    def _line(cells: Sequence[str]) -> str:
        return "  ".join(cell.ljust(widths[index]) for index, cell in enumerate(cells)).rstrip()

    return "\n".join([_line(headers)] + [_line(row) for row in rows])
