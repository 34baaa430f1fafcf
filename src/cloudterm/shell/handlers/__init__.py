"""Command handler tables grouped by command family."""

from __future__ import annotations

from . import cloud, git, network, ssh, system
from .common import Handler


def default_handlers() -> dict[str, Handler]:
    table: dict[str, Handler] = {}
    for family in (system, cloud, ssh, network, git):
        overlap = table.keys() & family.HANDLERS.keys()
        if overlap:
            raise ValueError(f"Duplicate command registration: {sorted(overlap)}")
        table.update(family.HANDLERS)
    return table


__all__ = ["Handler", "default_handlers"]
