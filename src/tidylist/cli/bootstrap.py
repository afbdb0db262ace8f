# src/tidylist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- picks the key-value backend and wires PersistenceAdapter + TaskListStore,
- restores the saved list into the store.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import KeyValueStore
from ..core.state import AppState
from ..storage.adapter import PersistenceAdapter
from ..storage.kv import FileKeyValueStore, MemoryKeyValueStore, SqliteKeyValueStore
from ..tasks.task_store import TaskListStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    if settings.storage_backend == "sqlite":
        settings.db_path.parent.mkdir(parents=True, exist_ok=True)
    elif settings.storage_backend == "file":
        settings.files_dir.mkdir(parents=True, exist_ok=True)


def create_kv_store(settings) -> KeyValueStore:
    backend = getattr(settings, "storage_backend", "sqlite")
    if backend == "memory":
        return MemoryKeyValueStore()
    if backend == "file":
        return FileKeyValueStore(settings.files_dir)
    return SqliteKeyValueStore(settings.db_path)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    persistence = PersistenceAdapter(
        create_kv_store(settings),
        key=settings.storage_key,
        strict=settings.strict_load,
    )
    store = TaskListStore(persistence)
    restored = store.load()
    logger.info(
        "Store ready backend=%s key=%s restored=%d strict=%s",
        settings.storage_backend,
        settings.storage_key,
        restored,
        settings.strict_load,
    )
    return AppState(settings=settings, store=store)
