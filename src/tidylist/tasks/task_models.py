# tasks/task_models.py

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from ..errors import ValidationError


class Priority(StrEnum):
    """
    Urgency tag of a task.

    Notes:
    - values are the persisted tags, keep them stable
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @classmethod
    def parse(cls, raw: Priority | str | None) -> Priority:
        if raw is None:
            return cls.MEDIUM
        if isinstance(raw, cls):
            return raw
        if isinstance(raw, str):
            try:
                return cls(raw.strip().lower())
            except ValueError:
                pass
        raise ValidationError(f"Unknown priority: {raw!r} (expected low/medium/high)")


def normalize_name(raw: str | None) -> str:
    name = (raw or "").strip()
    if not name:
        raise ValidationError("Task name must not be empty")
    return name


_ISO_DAY_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_iso_day(text: str) -> date:
    """Strict 'YYYY-MM-DD' only; compact and week forms raise ValueError."""
    if not _ISO_DAY_RE.match(text):
        raise ValueError(f"not a YYYY-MM-DD date: {text!r}")
    return date.fromisoformat(text)


def parse_due_date(raw: date | str | None) -> date | None:
    """Accept a date, a datetime (day part only), an ISO 'YYYY-MM-DD' string or None."""
    if raw is None:
        return None
    if isinstance(raw, date):
        # datetime is a date subclass; keep day granularity only
        return date(raw.year, raw.month, raw.day)
    if isinstance(raw, str):
        text = raw.strip()
        if not text:
            return None
        try:
            return parse_iso_day(text)
        except ValueError as e:
            raise ValidationError(f"Invalid due date: {raw!r} (expected YYYY-MM-DD)") from e
    raise ValidationError(f"Invalid due date: {raw!r}")


@dataclass(slots=True)
class Task:
    id: str
    name: str
    priority: Priority = Priority.MEDIUM
    completed: bool = False
    due_date: date | None = None

    def is_overdue(self, today: date | None = None) -> bool:
        if self.due_date is None or self.completed:
            return False
        return self.due_date < (today or date.today())

    def is_due_today(self, today: date | None = None) -> bool:
        if self.due_date is None or self.completed:
            return False
        return self.due_date == (today or date.today())
