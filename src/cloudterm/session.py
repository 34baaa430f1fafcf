"""Append-only scrollback of executed commands."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class CommandRecord:
    input: str
    output: str
    timestamp: str


class SessionLog:
    def __init__(self) -> None:
        self._records: list[CommandRecord] = []

    def __len__(self) -> int:
        return len(self._records)

    def __iter__(self) -> Iterator[CommandRecord]:
        return iter(self.all())

    def append(self, record: CommandRecord) -> None:
        self._records.append(record)

    def clear(self) -> None:
        self._records.clear()

    def all(self) -> list[CommandRecord]:
        return list(self._records)
