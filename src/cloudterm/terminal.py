"""Line-oriented presentation shell around the dispatcher.

Rendering, clipboard access and the input loop live here; none of them touch
resource state.
"""

from __future__ import annotations

import logging as py_logging
from collections.abc import Iterable
from typing import Protocol, TextIO

from cloudterm.reference import quick_reference_text, welcome_lines
from cloudterm.resources import InstanceType
from cloudterm.session import CommandRecord
from cloudterm.shell import Dispatcher

logger = py_logging.getLogger(__name__)

EXIT_WORDS = frozenset({"exit", "quit"})
COPY_SUCCESS = "Copied!"
COPY_FAILURE = "Failed to copy"

_STATUS_LABELS: tuple[tuple[InstanceType, str], ...] = (
    (InstanceType.COMPUTE, "Compute"),
    (InstanceType.DATABASE, "DB"),
    (InstanceType.STORAGE, "Storage"),
    (InstanceType.NETWORK, "Net"),
    (InstanceType.SECURITY, "Sec"),
)


class Clipboard(Protocol):
    def write(self, text: str) -> None: ...

    def read(self) -> str: ...


class MemoryClipboard:
    def __init__(self, text: str = "") -> None:
        self.text = text

    def write(self, text: str) -> None:
        self.text = text

    def read(self) -> str:
        return self.text


class TerminalShell:
    def __init__(self, dispatcher: Dispatcher, *, clipboard: Clipboard | None = None) -> None:
        self.dispatcher = dispatcher
        self.clipboard: Clipboard = clipboard or MemoryClipboard()

    @property
    def records(self) -> list[CommandRecord]:
        return self.dispatcher.context.log.all()

    def prompt(self) -> str:
        return f"{self.dispatcher.context.cwd} $ "

    def welcome_banner(self) -> str:
        return "\n".join(welcome_lines())

    def status_bar(self) -> str:
        store = self.dispatcher.context.store
        counts = store.count_by_type()
        parts = [f"{label}: {counts[kind]}" for kind, label in _STATUS_LABELS]
        parts.append(f"SSH: {len(store.ssh_keys)}")
        return " | ".join(parts)

    def quick_reference(self) -> str:
        return quick_reference_text()

    def submit(self, line: str) -> CommandRecord | None:
        return self.dispatcher.execute(line)

    def render(self) -> str:
        path = self.dispatcher.context.cwd
        blocks = [self.welcome_banner()]
        for record in self.records:
            block = f"{path} $ {record.input}"
            if record.output:
                block += f"\n{record.output}"
            blocks.append(block)
        return "\n\n".join(blocks)

    def copy_input(self, index: int) -> str:
        record = self._record(index)
        return COPY_FAILURE if record is None else self._copy(record.input)

    def copy_output(self, index: int) -> str:
        record = self._record(index)
        return COPY_FAILURE if record is None else self._copy(record.output)

    def _record(self, index: int) -> CommandRecord | None:
        records = self.records
        try:
            return records[index]
        except IndexError:
            logger.warning("No record at index %s (have %s)", index, len(records))
            return None

    def paste(self, current_input: str = "") -> str:
        try:
            return current_input + self.clipboard.read()
        except OSError as exc:
            logger.error("Failed to paste: %s", exc)
            return current_input

    def _copy(self, text: str) -> str:
        try:
            self.clipboard.write(text)
        except OSError as exc:
            logger.warning("Clipboard write failed: %s", exc)
            return COPY_FAILURE
        return COPY_SUCCESS


def run_lines(shell: TerminalShell, lines: Iterable[str], stdout: TextIO) -> int:
    """Execute ``lines`` in order, echoing each output; returns the count executed."""
    executed = 0
    for raw in lines:
        line = raw.rstrip("\r\n")
        if line.strip() in EXIT_WORDS:
            break
        record = shell.submit(line)
        if record is None:
            continue
        executed += 1
        if record.output:
            print(record.output, file=stdout)
    return executed


def run_repl(shell: TerminalShell, stdin: TextIO, stdout: TextIO, *, banner: bool = True) -> int:
    """Interactive loop: prompt, read, execute, print, until EOF or ``exit``."""
    if banner:
        print(shell.welcome_banner(), file=stdout)
        print(shell.status_bar(), file=stdout)
    executed = 0
    while True:
        stdout.write(shell.prompt())
        stdout.flush()
        raw = stdin.readline()
        if not raw:
            stdout.write("\n")
            break
        line = raw.rstrip("\r\n")
        if line.strip() in EXIT_WORDS:
            break
        record = shell.submit(line)
        if record is None:
            continue
        executed += 1
        if record.input.split()[0] == "clear" and not record.output:
            if banner:
                print(shell.welcome_banner(), file=stdout)
            continue
        if record.output:
            print(record.output, file=stdout)
    return executed
