# src/tidylist/storage/codec.py

"""
JSON blob codec for the whole task list.

Layout: a UTF-8 JSON array of
    {"id": str, "name": str, "priority": "low"|"medium"|"high",
     "completed": bool, "dueDate": "YYYY-MM-DD" | null}

Decoding is strict about field types (a blob either decodes completely or not
at all); unknown keys are ignored, a missing "dueDate" means no due date.
"""

from __future__ import annotations

import json
from collections.abc import Sequence
from datetime import date
from typing import Any

from ..tasks.task_models import Priority, Task, parse_iso_day


class DecodeError(ValueError):
    """Blob is not a valid serialized task list."""


def task_to_dict(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "name": task.name,
        "priority": task.priority.value,
        "completed": task.completed,
        "dueDate": task.due_date.isoformat() if task.due_date is not None else None,
    }


def encode_tasks(tasks: Sequence[Task]) -> bytes:
    payload = [task_to_dict(t) for t in tasks]
    return json.dumps(payload, ensure_ascii=False).encode("utf-8")


def _require(raw: dict[str, Any], key: str, kind: type, idx: int) -> Any:
    if key not in raw:
        raise DecodeError(f"item {idx}: missing field {key!r}")
    val = raw[key]
    # bool is an int subclass; never accept one for the other
    if type(val) is not kind:
        raise DecodeError(f"item {idx}: field {key!r} must be {kind.__name__}")
    return val


def task_from_dict(raw: Any, idx: int = 0) -> Task:
    if not isinstance(raw, dict):
        raise DecodeError(f"item {idx}: expected an object")

    task_id = _require(raw, "id", str, idx)
    name = _require(raw, "name", str, idx)
    prio_raw = _require(raw, "priority", str, idx)
    completed = _require(raw, "completed", bool, idx)

    if not task_id:
        raise DecodeError(f"item {idx}: empty id")
    if not name.strip():
        raise DecodeError(f"item {idx}: empty name")
    try:
        priority = Priority(prio_raw)
    except ValueError as e:
        raise DecodeError(f"item {idx}: unknown priority {prio_raw!r}") from e

    due_raw = raw.get("dueDate")
    due_date: date | None = None
    if due_raw is not None:
        if not isinstance(due_raw, str):
            raise DecodeError(f"item {idx}: field 'dueDate' must be str or null")
        try:
            due_date = parse_iso_day(due_raw)
        except ValueError as e:
            raise DecodeError(f"item {idx}: invalid dueDate {due_raw!r}") from e

    return Task(
        id=task_id,
        name=name,
        priority=priority,
        completed=completed,
        due_date=due_date,
    )


def decode_tasks(blob: bytes | str) -> list[Task]:
    try:
        data = json.loads(blob)
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DecodeError(f"not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise DecodeError("top level must be a JSON array")

    tasks = [task_from_dict(item, i) for i, item in enumerate(data)]

    seen: set[str] = set()
    for t in tasks:
        if t.id in seen:
            raise DecodeError(f"duplicate id {t.id!r}")
        seen.add(t.id)
    return tasks
