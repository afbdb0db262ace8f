# tests/test_persistence.py

from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pytest

from tidylist.errors import PersistenceError
from tidylist.storage.adapter import PersistenceAdapter
from tidylist.storage.codec import DecodeError, decode_tasks, encode_tasks
from tidylist.storage.kv import FileKeyValueStore, MemoryKeyValueStore, SqliteKeyValueStore
from tidylist.tasks.task_models import Priority, Task

from .fakes import FailingKeyValueStore

SAMPLE = [
    Task(id="a1", name="Buy milk"),
    Task(id="b2", name="Pay rent", priority=Priority.HIGH, due_date=date(2026, 10, 18)),
    Task(id="c3", name="Call mom", priority=Priority.LOW, completed=True),
]


def _blob(items) -> bytes:
    return json.dumps(items).encode("utf-8")


def test_encode_layout() -> None:
    data = json.loads(encode_tasks(SAMPLE))
    assert data[1] == {
        "id": "b2",
        "name": "Pay rent",
        "priority": "high",
        "completed": False,
        "dueDate": "2026-10-18",
    }
    assert data[0]["dueDate"] is None
    assert [d["id"] for d in data] == ["a1", "b2", "c3"]


def test_decode_ignores_unknown_and_missing_optional_fields() -> None:
    blob = _blob(
        [
            {"id": "x", "name": "N", "priority": "low", "completed": False, "color": "green"},
            {"id": "y", "name": "M", "priority": "medium", "completed": True, "dueDate": None},
        ]
    )
    tasks = decode_tasks(blob)
    assert tasks == [
        Task(id="x", name="N", priority=Priority.LOW),
        Task(id="y", name="M", completed=True),
    ]


@pytest.mark.parametrize(
    "item",
    [
        {"id": 1, "name": "N", "priority": "low", "completed": False},
        {"id": "x", "name": "", "priority": "low", "completed": False},
        {"id": "x", "name": "N", "priority": "urgent", "completed": False},
        {"id": "x", "name": "N", "priority": "low", "completed": 0},
        {"id": "x", "name": "N", "priority": "low"},
        {"id": "x", "name": "N", "priority": "low", "completed": False, "dueDate": 20261018},
        {"id": "x", "name": "N", "priority": "low", "completed": False, "dueDate": "18.10.2026"},
        {"id": "x", "name": "N", "priority": "low", "completed": False, "dueDate": "20261018"},
        {"id": "x", "name": "N", "priority": "low", "completed": False, "dueDate": "2026-W42-7"},
        "not an object",
    ],
)
def test_decode_rejects_schema_mismatch(item) -> None:
    with pytest.raises(DecodeError):
        decode_tasks(_blob([item]))


def test_decode_rejects_bad_top_level_and_duplicates() -> None:
    with pytest.raises(DecodeError):
        decode_tasks(b"{not json")
    with pytest.raises(DecodeError):
        decode_tasks(_blob({"tasks": []}))
    with pytest.raises(DecodeError):
        decode_tasks(b"\xff\xfe")
    dup = {"id": "x", "name": "N", "priority": "low", "completed": False}
    with pytest.raises(DecodeError):
        decode_tasks(_blob([dup, dup]))


@pytest.mark.parametrize("backend", ["memory", "sqlite", "file"])
def test_adapter_roundtrip(backend: str, tmp_path: Path) -> None:
    if backend == "memory":
        kv = MemoryKeyValueStore()
    elif backend == "sqlite":
        kv = SqliteKeyValueStore(tmp_path / "db" / "t.sqlite3")
    else:
        kv = FileKeyValueStore(tmp_path / "slots")

    adapter = PersistenceAdapter(kv, key="todo_items")
    assert adapter.load() == []

    adapter.save(SAMPLE)
    assert adapter.load() == SAMPLE

    adapter.save(SAMPLE[:1])
    assert adapter.load() == SAMPLE[:1]

    adapter.save([])
    assert adapter.load() == []


def test_lenient_load_degrades_to_empty() -> None:
    kv = MemoryKeyValueStore()
    kv.set("todo_items", b"garbage")
    assert PersistenceAdapter(kv).load() == []
    assert PersistenceAdapter(FailingKeyValueStore(fail_get=True)).load() == []


def test_strict_load_raises_on_corrupt_data() -> None:
    kv = MemoryKeyValueStore()
    assert PersistenceAdapter(kv, strict=True).load() == []

    kv.set("todo_items", b"garbage")
    with pytest.raises(PersistenceError) as exc:
        PersistenceAdapter(kv, strict=True).load()
    assert isinstance(exc.value.__cause__, DecodeError)

    with pytest.raises(PersistenceError):
        PersistenceAdapter(FailingKeyValueStore(fail_get=True), strict=True).load()


def test_save_failure_is_reported() -> None:
    with pytest.raises(PersistenceError) as exc:
        PersistenceAdapter(FailingKeyValueStore(fail_set=True)).save(SAMPLE)
    assert isinstance(exc.value.__cause__, OSError)


def test_slots_are_independent() -> None:
    kv = MemoryKeyValueStore()
    PersistenceAdapter(kv, key="home").save(SAMPLE)
    assert PersistenceAdapter(kv, key="work").load() == []
    assert len(PersistenceAdapter(kv, key="home").load()) == 3


def test_kv_backends_get_set_delete(tmp_path: Path) -> None:
    for kv in (
        MemoryKeyValueStore(),
        SqliteKeyValueStore(tmp_path / "kv.sqlite3"),
        FileKeyValueStore(tmp_path / "files"),
    ):
        assert kv.get("k") is None
        kv.set("k", b"one")
        kv.set("k", b"two")
        assert kv.get("k") == b"two"
        kv.delete("k")
        assert kv.get("k") is None
        kv.delete("k")

        for bad in ("", "../escape", "a/b", ".."):
            with pytest.raises(ValueError):
                kv.set(bad, b"x")


def test_sqlite_store_persists_across_instances(tmp_path: Path) -> None:
    db = tmp_path / "kv.sqlite3"
    SqliteKeyValueStore(db).set("todo_items", encode_tasks(SAMPLE))
    assert decode_tasks(SqliteKeyValueStore(db).get("todo_items") or b"") == SAMPLE


def test_file_store_writes_one_file_per_slot(tmp_path: Path) -> None:
    kv = FileKeyValueStore(tmp_path)
    kv.set("todo_items", b"[]")
    assert (tmp_path / "todo_items.json").read_bytes() == b"[]"
    assert not (tmp_path / "todo_items.tmp").exists()


def test_file_store_failed_replace_leaves_no_temp_file(tmp_path: Path, monkeypatch) -> None:
    kv = FileKeyValueStore(tmp_path)
    kv.set("todo_items", b"[]")

    def broken_replace(src, dst):
        raise OSError("disk full")

    monkeypatch.setattr("tidylist.storage.kv.os.replace", broken_replace)

    with pytest.raises(OSError):
        kv.set("todo_items", b'[{"id": "x"}]')

    assert not (tmp_path / "todo_items.tmp").exists()
    assert kv.get("todo_items") == b"[]"
