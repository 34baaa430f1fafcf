"""In-memory resource collections keyed by name."""

from __future__ import annotations

import logging as py_logging
from collections.abc import Callable, Iterator
from typing import Generic, Protocol, TypeVar

from cloudterm.errors import CommandError, ErrorKind
from cloudterm.resources.models import GitRepo, Instance, InstanceType, SSHKey

logger = py_logging.getLogger(__name__)


class Named(Protocol):
    name: str


T = TypeVar("T", bound=Named)


class Collection(Generic[T]):
    """Insertion-ordered entities with unique, case-sensitive names."""

    def __init__(self, label: str) -> None:
        self.label = label
        self._items: dict[str, T] = {}

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, name: object) -> bool:
        return name in self._items

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items.values()))

    def add(self, entity: T) -> T:
        if entity.name in self._items:
            raise CommandError(
                f"{self.label} '{entity.name}' already exists",
                kind=ErrorKind.DUPLICATE_NAME,
            )
        self._items[entity.name] = entity
        logger.info("resource-event kind=%s name=%s step=add", self.label, entity.name)
        return entity

    def get(self, name: str) -> T | None:
        return self._items.get(name)

    def require(self, name: str) -> T:
        entity = self._items.get(name)
        if entity is None:
            raise CommandError(f"{self.label} '{name}' not found", kind=ErrorKind.NOT_FOUND)
        return entity

    def list(self, predicate: Callable[[T], bool] | None = None) -> list[T]:
        items = list(self._items.values())
        if predicate is None:
            return items
        return [item for item in items if predicate(item)]

    def update(self, name: str, mutator: Callable[[T], None]) -> T:
        entity = self.require(name)
        mutator(entity)
        logger.info("resource-event kind=%s name=%s step=update", self.label, name)
        return entity

    def remove(self, name: str) -> T:
        entity = self.require(name)
        del self._items[name]
        logger.info("resource-event kind=%s name=%s step=remove", self.label, name)
        return entity


class ResourceStore:
    def __init__(self) -> None:
        self.instances: Collection[Instance] = Collection("instance")
        self.ssh_keys: Collection[SSHKey] = Collection("key")
        self.repos: Collection[GitRepo] = Collection("repository")

    def count_by_type(self) -> dict[InstanceType, int]:
        counts = {item: 0 for item in InstanceType}
        for instance in self.instances:
            counts[instance.type] += 1
        return counts
