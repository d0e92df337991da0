# src/task_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the command layer.

Commands depend on this Protocol instead of TaskStore directly,
so the storage backend stays swappable and easy to fake in tests.
"""

from collections.abc import Iterable
from typing import Protocol

from ..tasks.task_models import Task, TaskStatus


class TaskRepo(Protocol):
    def load(self) -> list[Task]: ...
    def save(self, tasks: Iterable[Task]) -> None: ...

    def add_task(self, description: str) -> int: ...
    def update_task(self, task_id: int, description: str) -> bool: ...
    def mark_task(self, task_id: int, status: TaskStatus) -> bool: ...
    def delete_task(self, task_id: int) -> bool: ...
    def list_tasks(self, status: TaskStatus | None = None) -> list[Task]: ...
