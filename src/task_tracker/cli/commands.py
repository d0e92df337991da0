# src/task_tracker/cli/commands.py

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from ..config import ENV_VARS
from ..core.state import AppState
from ..tasks.errors import InvalidArgumentError, InvalidIdError, StorageError
from ..tasks.task_models import Task, TaskStatus

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)

RULE_WIDTH = 80
HELP_EXAMPLES = (
    'add "Buy groceries"',
    'update 1 "Buy groceries and cook dinner"',
    "list",
    "mark-done 1",
)
_ID_RE = re.compile(r"[+-]?\d+")


def _app_name(state: AppState) -> str:
    return str(getattr(state.settings, "app_name", "task-cli"))


class CommandRegistry:
    """Maps the first argv word (add, list, ...) onto a handler."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, tuple[str, str]] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        usage: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = (usage, help_text)
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, argv: list[str]) -> str:
        """
        Run one command and return the text to print.

        Every TaskTrackerError is turned into a message here; the caller
        only needs to print the result.
        """
        app = _app_name(state)
        if not argv:
            return self.build_help(app)

        name = argv[0].lower()
        handler = self._handlers.get(name)
        if not handler:
            return f"Error: Unknown command '{name}'\n{self.build_help(app)}"

        try:
            return handler(state, argv[1:])
        except InvalidArgumentError as e:
            return f"Error: {e}\nUsage: {app} {e.usage}"
        except InvalidIdError as e:
            logger.debug("Rejected id %r for command %s", e.raw, name)
            return "Error: Invalid task ID. ID must be a number."
        except StorageError as e:
            return f"Error: {e}"

    def build_help(self, app_name: str = "task-cli") -> str:
        lines = [
            "Task Tracker CLI - A simple command-line task management tool",
            "=" * 60,
            "Usage:",
        ]
        for usage, help_text in self._help.values():
            lines.append(f"  {app_name} {usage:<38} - {help_text}")
        lines.append("")
        lines.append("Examples:")
        for example in HELP_EXAMPLES:
            lines.append(f"  {app_name} {example}")
        lines.append("")
        lines.append("Environment:")
        for var, text in ENV_VARS.items():
            lines.append(f"  {var:<26} {text}")
        return "\n".join(lines)


registry = CommandRegistry()


def parse_task_id(raw: str) -> int:
    s = raw.strip()
    if not _ID_RE.fullmatch(s):
        raise InvalidIdError(raw)
    return int(s)


def format_task(task: Task) -> str:
    return (
        f"[{task.id}] {task.description} - Status: {task.status.value} "
        f"(Created: {task.created_at}, Updated: {task.updated_at})"
    )


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help(_app_name(state))


def cmd_add(state: AppState, args: list[str]) -> str:
    if not args:
        raise InvalidArgumentError("Missing task description", 'add "Task description"')
    task_id = state.task_store.add_task(" ".join(args))
    return f"Task added successfully (ID: {task_id})"


def cmd_update(state: AppState, args: list[str]) -> str:
    if len(args) < 2:
        raise InvalidArgumentError(
            "Missing task ID or description", 'update <id> "New description"'
        )
    task_id = parse_task_id(args[0])
    if not state.task_store.update_task(task_id, " ".join(args[1:])):
        return f"Task not found (ID: {task_id})"
    return f"Task updated successfully (ID: {task_id})"


def cmd_delete(state: AppState, args: list[str]) -> str:
    if not args:
        raise InvalidArgumentError("Missing task ID", "delete <id>")
    task_id = parse_task_id(args[0])
    if not state.task_store.delete_task(task_id):
        return f"Task not found (ID: {task_id})"
    return f"Task deleted successfully (ID: {task_id})"


def _mark(state: AppState, args: list[str], status: TaskStatus, usage: str) -> str:
    if not args:
        raise InvalidArgumentError("Missing task ID", usage)
    task_id = parse_task_id(args[0])
    if not state.task_store.mark_task(task_id, status):
        return f"Task not found (ID: {task_id})"
    return f"Task marked as {status.value} (ID: {task_id})"


def cmd_mark_in_progress(state: AppState, args: list[str]) -> str:
    return _mark(state, args, TaskStatus.IN_PROGRESS, "mark-in-progress <id>")


def cmd_mark_done(state: AppState, args: list[str]) -> str:
    return _mark(state, args, TaskStatus.DONE, "mark-done <id>")


def cmd_list(state: AppState, args: list[str]) -> str:
    """
    list               -> every task, stored order
    list <status>      -> only that status (done | todo | in-progress)
    """
    status: TaskStatus | None = None
    if args:
        try:
            status = TaskStatus(args[0].lower())
        except ValueError:
            raise InvalidArgumentError(
                "Invalid status. Use: done, todo, or in-progress",
                "list [done|todo|in-progress]",
            ) from None

    tasks = state.task_store.list_tasks(status)

    if not tasks:
        return "No tasks found." if status is None else f"No {status.value} tasks found."

    title = "All" if status is None else status.display_name
    lines = [f"{title} Tasks ({len(tasks)}):", "=" * RULE_WIDTH]
    lines.extend(format_task(t) for t in tasks)
    return "\n".join(lines)


registry.register("add", cmd_add, help_text="Add a new task", usage='add "Task description"')
registry.register(
    "update", cmd_update, help_text="Update a task", usage='update <id> "New description"'
)
registry.register("delete", cmd_delete, help_text="Delete a task", usage="delete <id>")
registry.register(
    "mark-in-progress",
    cmd_mark_in_progress,
    help_text="Mark task as in-progress",
    usage="mark-in-progress <id>",
)
registry.register(
    "mark-done", cmd_mark_done, help_text="Mark task as done", usage="mark-done <id>"
)
registry.register(
    "list",
    cmd_list,
    help_text="List tasks, optionally by status",
    usage="list [done|todo|in-progress]",
)
registry.register(
    "help", cmd_help, help_text="Show this help", usage="help", aliases=["-h", "--help"]
)
