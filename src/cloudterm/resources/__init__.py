"""Simulated resource domain package."""

from .models import (
    INSTANCE_TYPES,
    GitRepo,
    Instance,
    InstanceStatus,
    InstanceType,
    RepoStatus,
    SSHKey,
    parse_instance_type,
)
from .store import Collection, ResourceStore

__all__ = [
    "Collection",
    "GitRepo",
    "INSTANCE_TYPES",
    "Instance",
    "InstanceStatus",
    "InstanceType",
    "parse_instance_type",
    "RepoStatus",
    "ResourceStore",
    "SSHKey",
]
