# tasks/task_store.py

from __future__ import annotations

import logging
import threading
import uuid
from collections.abc import Iterator
from dataclasses import replace
from datetime import date
from typing import Any

from ..core.ports import TaskPersistence
from ..errors import NotFoundError, PositionError
from .task_models import Priority, Task, normalize_name, parse_due_date

logger = logging.getLogger(__name__)

_UNSET: Any = object()


def new_task_id() -> str:
    return uuid.uuid4().hex


class TaskListStore:
    """
    Ordered, owned collection of tasks.

    - list order is the display order (changed only by reorder)
    - every value handed out is a copy; stored records are never aliased
    - each successful mutation writes the whole list through `persistence`

    A failed write does not roll back the mutation: the in-memory list stays
    authoritative and the PersistenceError is re-raised to the caller.

    Thread-safety:
    - all operations (including their write) run under one RLock
    """

    def __init__(self, persistence: TaskPersistence | None = None) -> None:
        self._persistence = persistence
        self._tasks: list[Task] = []
        self._lock = threading.RLock()

    # ---- low-level helpers ----

    def _find_index(self, task_id: str) -> int:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        raise NotFoundError(task_id)

    def _persist(self) -> None:
        if self._persistence is None:
            return
        self._persistence.save(self._tasks)

    def _allocate_id(self) -> str:
        taken = {t.id for t in self._tasks}
        tid = new_task_id()
        while tid in taken:
            tid = new_task_id()
        return tid

    # ---- loading ----

    def load(self) -> int:
        """Replace the current list with the persisted one. Returns the count restored."""
        with self._lock:
            if self._persistence is None:
                self._tasks = []
                return 0
            self._tasks = [replace(t) for t in self._persistence.load()]
            logger.info("TaskListStore restored %d task(s)", len(self._tasks))
            return len(self._tasks)

    # ---- queries ----

    def list(self) -> tuple[Task, ...]:
        with self._lock:
            return tuple(replace(t) for t in self._tasks)

    def get(self, task_id: str) -> Task:
        with self._lock:
            return replace(self._tasks[self._find_index(task_id)])

    def index_of(self, task_id: str) -> int:
        with self._lock:
            return self._find_index(task_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(self.list())

    # ---- mutations ----

    def add(
        self,
        name: str,
        priority: Priority | str = Priority.MEDIUM,
        due_date: date | str | None = None,
    ) -> Task:
        clean_name = normalize_name(name)
        prio = Priority.parse(priority)
        due = parse_due_date(due_date)

        with self._lock:
            task = Task(
                id=self._allocate_id(),
                name=clean_name,
                priority=prio,
                completed=False,
                due_date=due,
            )
            self._tasks.append(task)
            logger.debug("Task added id=%s priority=%s due=%s", task.id, prio.value, due)
            self._persist()
            return replace(task)

    def update(
        self,
        task_id: str,
        *,
        name: str = _UNSET,
        priority: Priority | str = _UNSET,
        due_date: date | str | None = _UNSET,
        completed: bool = _UNSET,
    ) -> Task:
        """Replace only the fields passed. due_date=None clears the due date."""
        with self._lock:
            idx = self._find_index(task_id)
            current = self._tasks[idx]

            # validate everything before touching the record
            changes: dict[str, Any] = {}
            if name is not _UNSET:
                changes["name"] = normalize_name(name)
            if priority is not _UNSET:
                changes["priority"] = Priority.parse(priority)
            if due_date is not _UNSET:
                changes["due_date"] = parse_due_date(due_date)
            if completed is not _UNSET:
                changes["completed"] = bool(completed)

            for field_name, value in changes.items():
                setattr(current, field_name, value)
            logger.debug("Task updated id=%s fields=%s", task_id, sorted(changes))
            self._persist()
            return replace(current)

    def toggle_completed(self, task_id: str) -> Task:
        with self._lock:
            task = self._tasks[self._find_index(task_id)]
            task.completed = not task.completed
            logger.debug("Task toggled id=%s completed=%s", task_id, task.completed)
            self._persist()
            return replace(task)

    def remove(self, task_id: str, *, missing_ok: bool = False) -> Task | None:
        with self._lock:
            try:
                idx = self._find_index(task_id)
            except NotFoundError:
                if missing_ok:
                    logger.debug("Task remove skipped, id=%s not found", task_id)
                    return None
                raise
            task = self._tasks.pop(idx)
            logger.debug("Task removed id=%s position=%d", task_id, idx)
            self._persist()
            return replace(task)

    def reorder(self, from_index: int, to_index: int) -> None:
        """Move one task: pop at from_index, insert at to_index of the remaining list."""
        with self._lock:
            n = len(self._tasks)
            for i in (from_index, to_index):
                if not 0 <= i < n:
                    raise PositionError(i, n)
            if from_index == to_index:
                return
            task = self._tasks.pop(from_index)
            self._tasks.insert(to_index, task)
            logger.debug("Task moved id=%s %d -> %d", task.id, from_index, to_index)
            self._persist()
