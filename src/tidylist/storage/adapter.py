# src/tidylist/storage/adapter.py

from __future__ import annotations

import logging
from collections.abc import Sequence

from ..core.ports import KeyValueStore
from ..errors import PersistenceError
from ..tasks.task_models import Task
from .codec import DecodeError, decode_tasks, encode_tasks

logger = logging.getLogger(__name__)

DEFAULT_KEY = "todo_items"


class PersistenceAdapter:
    """
    Stores the whole task list in one slot of a KeyValueStore.

    Load policy:
    - lenient (default): missing slot, unreadable or undecodable data -> []
    - strict: missing slot -> [], anything else -> PersistenceError
    """

    def __init__(self, kv: KeyValueStore, *, key: str = DEFAULT_KEY, strict: bool = False) -> None:
        self._kv = kv
        self._key = key
        self._strict = strict

    def save(self, tasks: Sequence[Task]) -> None:
        try:
            blob = encode_tasks(tasks)
        except (TypeError, ValueError, AttributeError) as e:
            raise PersistenceError(f"Failed to encode {len(tasks)} task(s): {e}") from e

        try:
            self._kv.set(self._key, blob)
        except Exception as e:
            raise PersistenceError(f"Failed to write slot {self._key!r}: {e}") from e

        logger.debug("Saved %d task(s) to slot=%s", len(tasks), self._key)

    def load(self) -> list[Task]:
        try:
            blob = self._kv.get(self._key)
        except Exception as e:
            if self._strict:
                raise PersistenceError(f"Failed to read slot {self._key!r}: {e}") from e
            logger.warning("Failed to read slot=%s, starting with an empty list.", self._key, exc_info=True)
            return []

        if blob is None:
            logger.info("No saved tasks in slot=%s (first run).", self._key)
            return []

        try:
            tasks = decode_tasks(blob)
        except DecodeError as e:
            if self._strict:
                raise PersistenceError(f"Saved data in slot {self._key!r} is corrupt: {e}") from e
            logger.warning("Ignoring undecodable data in slot=%s: %s", self._key, e)
            return []

        logger.info("Loaded %d task(s) from slot=%s", len(tasks), self._key)
        return tasks
