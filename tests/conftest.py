# tests/conftest.py

from __future__ import annotations

from datetime import date
from pathlib import Path
from types import SimpleNamespace

import pytest

from tidylist.core.state import AppState
from tidylist.storage.adapter import PersistenceAdapter
from tidylist.storage.kv import MemoryKeyValueStore
from tidylist.tasks.task_store import TaskListStore

TODAY = date(2026, 10, 19)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and commands.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and any local .env.
    """
    return SimpleNamespace(
        app_name="tidylist-test",
        log_level="DEBUG",
        storage_backend="sqlite",
        storage_key="todo_items",
        strict_load=False,
        data_dir=tmp_path / "data",
        db_path=tmp_path / "data" / "tidylist.sqlite3",
        files_dir=tmp_path / "data" / "slots",
    )


@pytest.fixture()
def kv() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture()
def store(kv: MemoryKeyValueStore) -> TaskListStore:
    """Store wired to an in-memory slot so persistence writes are observable."""
    return TaskListStore(PersistenceAdapter(kv))


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskListStore) -> AppState:
    """AppState with a fixed 'today' so due-date rendering is deterministic."""
    return AppState(settings=settings, store=store, today=lambda: TODAY)
