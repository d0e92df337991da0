# tests/test_commands.py

from __future__ import annotations

import pytest

from task_tracker.cli.commands import CommandRegistry, format_task, parse_task_id, registry
from task_tracker.tasks.errors import InvalidIdError, StorageUnavailableError
from task_tracker.tasks.task_models import Task, TaskStatus


def run(state, *argv: str) -> str:
    return registry.handle(state, list(argv))


def test_add_joins_words_and_reports_id(state) -> None:
    assert run(state, "add", "Buy", "milk") == "Task added successfully (ID: 1)"
    assert run(state, "add", "Walk the dog") == "Task added successfully (ID: 2)"
    assert [t.description for t in state.task_store.list_tasks()] == ["Buy milk", "Walk the dog"]


def test_update_delete_and_mark_messages(state) -> None:
    run(state, "add", "Buy milk")

    assert run(state, "update", "1", "Buy", "bread") == "Task updated successfully (ID: 1)"
    assert run(state, "mark-in-progress", "1") == "Task marked as in-progress (ID: 1)"
    assert state.task_store.list_tasks()[0].status is TaskStatus.IN_PROGRESS
    assert run(state, "MARK-DONE", "1") == "Task marked as done (ID: 1)"
    assert state.task_store.list_tasks()[0].status is TaskStatus.DONE
    assert state.task_store.list_tasks()[0].description == "Buy bread"

    assert run(state, "delete", "1") == "Task deleted successfully (ID: 1)"
    assert run(state, "list") == "No tasks found."


@pytest.mark.parametrize(
    "argv",
    [("update", "7", "x"), ("delete", "7"), ("mark-done", "7"), ("mark-in-progress", "7")],
)
def test_not_found_echoes_id(state, argv) -> None:
    assert run(state, *argv) == "Task not found (ID: 7)"


@pytest.mark.parametrize(
    ("argv", "message", "usage"),
    [
        (("add",), "Missing task description", 'add "Task description"'),
        (("update", "1"), "Missing task ID or description", 'update <id> "New description"'),
        (("delete",), "Missing task ID", "delete <id>"),
        (("mark-done",), "Missing task ID", "mark-done <id>"),
        (("mark-in-progress",), "Missing task ID", "mark-in-progress <id>"),
    ],
)
def test_missing_arguments_show_usage(state, argv, message, usage) -> None:
    assert run(state, *argv) == f"Error: {message}\nUsage: task-cli {usage}"
    assert not state.settings.tasks_file.exists()


@pytest.mark.parametrize("raw", ["abc", "1.5", "", "0x10"])
def test_invalid_id_is_reported_separately_from_not_found(state, raw) -> None:
    run(state, "add", "x")
    assert run(state, "delete", raw) == "Error: Invalid task ID. ID must be a number."
    assert len(state.task_store.list_tasks()) == 1


def test_parse_task_id() -> None:
    assert parse_task_id(" 12 ") == 12
    assert parse_task_id("-3") == -3
    with pytest.raises(InvalidIdError):
        parse_task_id("twelve")


def test_list_all_and_by_status(state, clock) -> None:
    run(state, "add", "A")
    run(state, "add", "B")
    run(state, "add", "C")
    run(state, "mark-done", "3")
    run(state, "mark-done", "1")

    out = run(state, "list", "done").splitlines()
    assert out[0] == "Done Tasks (2):"
    assert out[1] == "=" * 80
    assert out[2].startswith("[1] A - Status: done (Created: ")
    assert out[3].startswith("[3] C - Status: done (Created: ")

    out_all = run(state, "list").splitlines()
    assert out_all[0] == "All Tasks (3):"
    assert [line.split("]")[0] for line in out_all[2:]] == ["[1", "[2", "[3"]

    assert run(state, "list", "in-progress") == "No in-progress tasks found."
    assert run(state, "list", "TODO").splitlines()[0] == "Todo Tasks (1):"


def test_list_rejects_unknown_status(state) -> None:
    assert run(state, "list", "blocked") == (
        "Error: Invalid status. Use: done, todo, or in-progress\n"
        "Usage: task-cli list [done|todo|in-progress]"
    )


def test_format_task() -> None:
    task = Task(3, "Pay rent", TaskStatus.IN_PROGRESS, "2024-01-01 09:00:00", "2024-01-02 10:00:00")
    assert format_task(task) == (
        "[3] Pay rent - Status: in-progress "
        "(Created: 2024-01-01 09:00:00, Updated: 2024-01-02 10:00:00)"
    )


def test_help_unknown_and_empty(state) -> None:
    help_text = run(state, "help")
    assert help_text.startswith("Task Tracker CLI")
    for name in ("add", "update", "delete", "mark-in-progress", "mark-done", "list"):
        assert f"task-cli {name}" in help_text
    assert "TASK_TRACKER_TASKS_FILE" in help_text
    assert 'task-cli update 1 "Buy groceries and cook dinner"' in help_text
    assert help_text.index("Examples:") < help_text.index("Environment:")

    assert run(state, "--help") == help_text
    assert run(state) == help_text

    unknown = run(state, "frobnicate")
    assert unknown.splitlines()[0] == "Error: Unknown command 'frobnicate'"
    assert help_text in unknown


def test_storage_error_becomes_message(state) -> None:
    class BrokenStore:
        def add_task(self, description: str) -> int:
            raise StorageUnavailableError("Cannot write tasks.json: disk full")

    state.task_store = BrokenStore()
    assert run(state, "add", "x") == "Error: Cannot write tasks.json: disk full"


def test_command_registry_routes_and_aliases(state) -> None:
    reg = CommandRegistry()
    called: list[list[str]] = []

    def h(state, args):
        called.append(args)
        return "ok"

    reg.register("ping", h, help_text="Ping", usage="ping [x]", aliases=["p"])

    assert reg.handle(state, ["PING", "a"]) == "ok"
    assert reg.handle(state, ["p"]) == "ok"
    assert called == [["a"], []]
    assert "task-cli ping [x]" in reg.build_help("task-cli")
