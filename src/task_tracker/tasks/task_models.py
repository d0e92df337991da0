# src/task_tracker/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def now_timestamp() -> str:
    return datetime.now().strftime(TIMESTAMP_FORMAT)


class TaskStatus(StrEnum):
    """
    Task lifecycle status.

    The value is what gets stored in tasks.json and what the CLI accepts
    as a list filter.
    """

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    @classmethod
    def from_str(cls, raw: str | None) -> TaskStatus:
        """Case-insensitive lookup; anything unrecognized becomes TODO."""
        if not raw:
            return cls.TODO
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.TODO

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES: dict[TaskStatus, str] = {
    TaskStatus.TODO: "Todo",
    TaskStatus.IN_PROGRESS: "In Progress",
    TaskStatus.DONE: "Done",
}


@dataclass(slots=True)
class Task:
    id: int
    description: str
    status: TaskStatus
    created_at: str
    updated_at: str

    @classmethod
    def create(cls, description: str, *, now: str | None = None) -> Task:
        """
        Build a fresh TODO task.

        The id is left at 0; TaskStore assigns the real one on insert.
        """
        ts = now or now_timestamp()
        return cls(
            id=0,
            description=description,
            status=TaskStatus.TODO,
            created_at=ts,
            updated_at=ts,
        )

    def set_description(self, text: str) -> None:
        self.description = text

    def set_status(self, status: TaskStatus) -> None:
        self.status = status

    def touch(self, now: str) -> None:
        self.updated_at = now
