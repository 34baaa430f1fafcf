"""Command interpreter: parse, validate, mutate and render one line at a time."""

from __future__ import annotations

import logging as py_logging

from cloudterm.errors import CommandError, ErrorKind, format_command_error
from cloudterm.session import CommandRecord
from cloudterm.shell.context import SessionContext
from cloudterm.shell.handlers import Handler, default_handlers
from cloudterm.shell.parser import ParsedCommand, parse_line

logger = py_logging.getLogger(__name__)

# Commands whose successful run resets the scrollback instead of extending it.
_RESET_WORDS = frozenset({"clear"})


class Dispatcher:
    def __init__(
        self,
        context: SessionContext | None = None,
        *,
        handlers: dict[str, Handler] | None = None,
    ) -> None:
        self.context = context or SessionContext()
        self._handlers = dict(handlers) if handlers is not None else default_handlers()

    def commands(self) -> list[str]:
        return sorted(self._handlers)

    def register(self, word: str, handler: Handler) -> None:
        if not word or any(char.isspace() for char in word):
            raise ValueError(f"Invalid command word: {word!r}")
        self._handlers[word] = handler

    def execute(self, line: str) -> CommandRecord | None:
        """Run one input line and return its record.

        Blank input returns ``None`` and leaves the log untouched. A successful
        ``clear`` returns a record with empty output that is not appended.
        """
        command = parse_line(line)
        if command is None:
            return None

        self.context.scheduler.tick()
        output, ok = self._run(command)
        logger.debug("command word=%s ok=%s", command.word, ok)

        record = CommandRecord(input=line, output=output, timestamp=self.context.timestamp())
        if ok and command.word in _RESET_WORDS:
            return record
        self.context.log.append(record)
        return record

    def _run(self, command: ParsedCommand) -> tuple[str, bool]:
        handler = self._handlers.get(command.word)
        try:
            if handler is None:
                raise CommandError(
                    f"command not found: {command.word}",
                    kind=ErrorKind.UNKNOWN_COMMAND,
                )
            return handler(self.context, command), True
        except CommandError as exc:
            logger.debug("command rejected word=%s kind=%s", command.word, exc.kind.value)
            return format_command_error(command.word, exc), False
        except Exception:
            logger.exception("Unhandled failure while executing %r", command.word)
            return f"{command.word}: internal error", False
