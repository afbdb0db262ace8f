"""
tidylist: an ordered to-do list with whole-list key-value persistence.

The public core is TaskListStore (tasks.task_store) plus PersistenceAdapter
(storage.adapter); everything under cli/ and connectors/ only drives it.
"""

from .errors import NotFoundError, PersistenceError, PositionError, TodoError, ValidationError
from .tasks.task_models import Priority, Task
from .tasks.task_store import TaskListStore

__all__ = [
    "NotFoundError",
    "PersistenceError",
    "PositionError",
    "Priority",
    "Task",
    "TaskListStore",
    "TodoError",
    "ValidationError",
]
