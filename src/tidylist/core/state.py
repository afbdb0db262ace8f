# src/tidylist/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Callable

from ..tasks.task_store import TaskListStore


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    # The single owned store for the whole process lifetime.
    store: TaskListStore

    # Injectable "today" for due-date rendering.
    today: Callable[[], date] = field(default=date.today)
