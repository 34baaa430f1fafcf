"""Tick-driven pending transitions for simulated long-running operations.

Each executed command advances the clock by one tick. A transition scheduled
with ``delay=n`` fires at the start of the n-th following command, so the
entity stays visible in its transient state until then.
"""

from __future__ import annotations

import logging as py_logging
from collections.abc import Callable
from dataclasses import dataclass

logger = py_logging.getLogger(__name__)


@dataclass(frozen=True)
class PendingTransition:
    due_tick: int
    key: str
    callback: Callable[[], None]


class TransitionScheduler:
    def __init__(self) -> None:
        self.current_tick = 0
        self._pending: list[PendingTransition] = []

    def pending(self, key: str) -> bool:
        return any(item.key == key for item in self._pending)

    def schedule(self, key: str, delay: int, callback: Callable[[], None]) -> None:
        if delay < 0:
            raise ValueError(f"Invalid transition delay: {delay}")
        if self.pending(key):
            raise ValueError(f"Transition already pending for {key}")
        if delay == 0:
            callback()
            return
        self._pending.append(PendingTransition(self.current_tick + delay, key, callback))
        logger.debug("transition scheduled key=%s due=%s", key, self.current_tick + delay)

    def tick(self) -> int:
        self.current_tick += 1
        due = [item for item in self._pending if item.due_tick <= self.current_tick]
        if not due:
            return 0
        self._pending = [item for item in self._pending if item.due_tick > self.current_tick]
        for item in due:
            logger.debug("transition fired key=%s tick=%s", item.key, self.current_tick)
            try:
                item.callback()
            except Exception:
                logger.exception("Transition callback failed key=%s", item.key)
        return len(due)
