"""Per-session state handed to every command handler."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime, timezone

from cloudterm.config import AppConfig
from cloudterm.ids import IdGenerator
from cloudterm.resources import ResourceStore
from cloudterm.scheduler import TransitionScheduler
from cloudterm.session import SessionLog


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class SessionContext:
    config: AppConfig = field(default_factory=AppConfig)
    store: ResourceStore = field(default_factory=ResourceStore)
    log: SessionLog = field(default_factory=SessionLog)
    scheduler: TransitionScheduler = field(default_factory=TransitionScheduler)
    ids: IdGenerator = field(default_factory=IdGenerator)
    clock: Callable[[], datetime] = utc_now
    cwd: str = ""

    def __post_init__(self) -> None:
        if not self.cwd:
            self.cwd = self.config.prompt_path

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        *,
        clock: Callable[[], datetime] = utc_now,
    ) -> SessionContext:
        return cls(config=config, ids=IdGenerator(config.seed), clock=clock)

    @property
    def home(self) -> str:
        return self.config.home_path

    def absolute_cwd(self) -> str:
        if self.cwd == "~":
            return self.home
        if self.cwd.startswith("~/"):
            return self.home + self.cwd[1:]
        return self.cwd

    def timestamp(self) -> str:
        return self.clock().astimezone().strftime(self.config.timestamp_format)
