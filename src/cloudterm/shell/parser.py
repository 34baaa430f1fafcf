"""Whitespace tokenizer for raw terminal input."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ParsedCommand:
    word: str
    args: tuple[str, ...] = ()
    raw: str = ""

    @property
    def subcommand(self) -> str:
        return self.args[0] if self.args else ""

    @property
    def rest(self) -> tuple[str, ...]:
        return self.args[1:]


def parse_line(line: str) -> ParsedCommand | None:
    """Split ``line`` into a command word and positional args.

    Quoting is not interpreted. Blank input yields ``None``.
    """
    tokens = line.split()
    if not tokens:
        return None
    return ParsedCommand(word=tokens[0], args=tuple(tokens[1:]), raw=line)
