# src/tidylist/cli/commands.py

from __future__ import annotations

import logging
import re
from collections.abc import Callable
from datetime import date

from ..core.state import AppState
from ..errors import PersistenceError, TodoError, ValidationError
from ..tasks.task_models import Priority, Task, parse_due_date

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)

_CLEAR_DUE = {"@none", "@-"}
_PRIORITY_TOKENS = {f"!{p.value}": p for p in Priority}
_DUE_TOKEN_RE = re.compile(r"^@\d{4}-\d{2}-\d{2}$")


class CommandRegistry:
    """Simple slash-command registry used by connectors (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        Store errors are turned into a one-line reply.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            return handler(state, args)
        except PersistenceError as e:
            logger.warning("Command /%s applied but not saved: %s", name, e)
            return f"Warning: change kept in memory but NOT saved ({e})."
        except TodoError as e:
            logger.debug("Command /%s rejected: %s", name, e)
            return f"Error: {e}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- rendering ----


def format_task(task: Task, position: int, today: date) -> str:
    box = "[x]" if task.completed else "[ ]"
    parts = [f"{position:>2}. {box} {task.name}"]
    if task.priority is not Priority.MEDIUM:
        parts.append(f"({task.priority.value})")
    if task.due_date is not None:
        parts.append(f"due {task.due_date.isoformat()}")
    if task.is_overdue(today):
        parts.append("OVERDUE")
    elif task.is_due_today(today):
        parts.append("TODAY")
    return " ".join(parts)


def render_list(state: AppState) -> str:
    tasks = state.store.list()
    if not tasks:
        return "To-Do list is empty. Add one with /add <name>."
    today = state.today()
    lines = ["To-Do List:"]
    lines.extend(format_task(t, i, today) for i, t in enumerate(tasks, start=1))
    return "\n".join(lines)


# ---- argument parsing ----


def _split_fields(args: list[str]) -> tuple[str, Priority | None, date | None, bool]:
    """
    Split "/add"-style arguments into (name, priority, due_date, clear_due).

    "!high" sets the priority, "@2026-01-31" the due date, "@none" clears it;
    every other word (including "@bob" or "!!") is part of the name.
    """
    words: list[str] = []
    priority: Priority | None = None
    due: date | None = None
    clear_due = False

    for tok in args:
        lower = tok.lower()
        if lower in _PRIORITY_TOKENS:
            priority = _PRIORITY_TOKENS[lower]
        elif lower in _CLEAR_DUE:
            clear_due = True
            due = None
        elif _DUE_TOKEN_RE.match(tok):
            due = parse_due_date(tok[1:])
            clear_due = False
        else:
            words.append(tok)

    return " ".join(words), priority, due, clear_due


def _position(state: AppState, raw: str) -> int:
    """1-based display position -> 0-based index."""
    try:
        pos = int(raw.rstrip("."))
    except ValueError as e:
        raise ValidationError(f"Not a task number: {raw!r}") from e
    n = len(state.store)
    if not 1 <= pos <= n:
        raise ValidationError(f"No task #{pos} (list has {n}).")
    return pos - 1


def _task_at(state: AppState, raw: str) -> Task:
    return state.store.list()[_position(state, raw)]


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return (
        registry.build_help()
        + "\n\nSyntax: !low|!medium|!high sets priority, @YYYY-MM-DD sets a due date, @none clears it."
    )


def cmd_list(state: AppState, args: list[str]) -> str:
    return render_list(state)


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add Buy milk
    /add Pay rent !high @2026-11-01
    """
    name, priority, due, _ = _split_fields(args)
    task = state.store.add(name, priority or Priority.MEDIUM, due)
    return f"Added #{len(state.store)}: {task.name}"


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit 2 New name
    /edit 2 !low @none
    """
    if not args:
        return "Usage: /edit <n> [new name] [!priority] [@YYYY-MM-DD|@none]"

    task = _task_at(state, args[0])
    name, priority, due, clear_due = _split_fields(args[1:])

    changes: dict[str, object] = {}
    if name:
        changes["name"] = name
    if priority is not None:
        changes["priority"] = priority
    if due is not None or clear_due:
        changes["due_date"] = due
    if not changes:
        return "Nothing to change."

    updated = state.store.update(task.id, **changes)  # type: ignore[arg-type]
    return f"Updated: {updated.name}"


def cmd_done(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /done <n>"
    task = state.store.toggle_completed(_task_at(state, args[0]).id)
    mark = "done" if task.completed else "not done"
    return f"Marked {mark}: {task.name}"


def cmd_rm(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /rm <n>"
    task = state.store.remove(_task_at(state, args[0]).id)
    return f"Removed: {task.name}" if task else "Nothing removed."


def cmd_mv(state: AppState, args: list[str]) -> str:
    if len(args) != 2:
        return "Usage: /mv <from> <to>"
    src = _position(state, args[0])
    dst = _position(state, args[1])
    state.store.reorder(src, dst)
    return render_list(state)


def cmd_status(state: AppState, args: list[str]) -> str:
    settings = state.settings
    tasks = state.store.list()
    today = state.today()
    done = sum(1 for t in tasks if t.completed)
    overdue = sum(1 for t in tasks if t.is_overdue(today))
    backend = getattr(settings, "storage_backend", "?")
    key = getattr(settings, "storage_key", "?")

    return (
        "Status:\n"
        f"  Tasks: {len(tasks)} ({done} done, {overdue} overdue)\n"
        f"  Storage: {backend} (slot {key})"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the list.", aliases=["ls", "l"])
registry.register("add", cmd_add, help_text="Add a task: /add <name> [!priority] [@date].", aliases=["a"])
registry.register(
    "edit", cmd_edit, help_text="Edit a task: /edit <n> [name] [!priority] [@date|@none].", aliases=["e"]
)
registry.register("done", cmd_done, help_text="Toggle completion: /done <n>.", aliases=["toggle", "x"])
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <n>.", aliases=["del", "remove"])
registry.register("mv", cmd_mv, help_text="Move a task: /mv <from> <to>.", aliases=["move"])
registry.register("status", cmd_status, help_text="Show counts and storage settings.")
