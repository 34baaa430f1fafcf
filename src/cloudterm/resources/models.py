"""Simulated cloud resource models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class InstanceType(str, Enum):
    COMPUTE = "compute"
    DATABASE = "database"
    STORAGE = "storage"
    NETWORK = "network"
    SECURITY = "security"


class InstanceStatus(str, Enum):
    RUNNING = "running"
    STOPPED = "stopped"


class RepoStatus(str, Enum):
    CLONING = "cloning"
    CLONED = "cloned"
    ERROR = "error"


INSTANCE_TYPES: tuple[str, ...] = tuple(item.value for item in InstanceType)
TERMINAL_REPO_STATES = frozenset({RepoStatus.CLONED, RepoStatus.ERROR})


def parse_instance_type(value: str) -> InstanceType | None:
    """Case-sensitive lookup; ``Compute`` is not a valid type."""
    for item in InstanceType:
        if item.value == value:
            return item
    return None


@dataclass
class Instance:
    id: str
    name: str
    type: InstanceType
    region: str
    created: datetime
    status: InstanceStatus = InstanceStatus.RUNNING


@dataclass
class SSHKey:
    name: str
    public_key: str
    fingerprint: str
    created: datetime
    key_type: str = "ssh-ed25519"
    loaded: bool = False


@dataclass
class GitRepo:
    name: str
    url: str
    status: RepoStatus = RepoStatus.CLONING
    error: str = ""

    @property
    def settled(self) -> bool:
        return self.status in TERMINAL_REPO_STATES
