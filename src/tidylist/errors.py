# src/tidylist/errors.py

"""
Error taxonomy for the to-do core.

Every error derives from TodoError.
Validation, lookup and position errors also subclass ValueError/KeyError/IndexError.
"""

from __future__ import annotations


class TodoError(Exception):
    """Base class for all errors raised by tidylist."""


class ValidationError(TodoError, ValueError):
    """User-supplied value rejected (empty name, unknown priority, bad date)."""


class NotFoundError(TodoError, KeyError):
    """No task with the given id."""

    def __init__(self, task_id: str) -> None:
        super().__init__(task_id)
        self.task_id = task_id

    def __str__(self) -> str:
        return f"Task not found: {self.task_id}"


class PositionError(TodoError, IndexError):
    """Reorder index outside [0, len)."""

    def __init__(self, index: int, length: int) -> None:
        super().__init__(index, length)
        self.index = index
        self.length = length

    def __str__(self) -> str:
        return f"Position {self.index} out of range for {self.length} task(s)"


class PersistenceError(TodoError):
    """Saving (or strict loading) of the task list failed."""
