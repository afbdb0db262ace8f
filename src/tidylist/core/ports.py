# src/tidylist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The store depends on Protocols instead of concrete implementations.
This keeps storage backends swappable and makes testing easier.
"""

from typing import Protocol, Sequence

from ..tasks.task_models import Task


class KeyValueStore(Protocol):
    """Byte blobs addressed by a short slot key."""

    def get(self, key: str) -> bytes | None: ...
    def set(self, key: str, value: bytes) -> None: ...
    def delete(self, key: str) -> None: ...


class TaskPersistence(Protocol):
    """
    Whole-list persistence as seen by TaskListStore.

    save() raises PersistenceError on failure.
    load() never fails in lenient mode: missing or undecodable data -> [].
    """

    def save(self, tasks: Sequence[Task]) -> None: ...
    def load(self) -> list[Task]: ...
