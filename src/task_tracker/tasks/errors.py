# src/task_tracker/tasks/errors.py

from __future__ import annotations


class TaskTrackerError(Exception):
    """Base class for errors reported to the user as a single line."""


class InvalidArgumentError(TaskTrackerError):
    """A required command argument is missing."""

    def __init__(self, message: str, usage: str) -> None:
        super().__init__(message)
        self.usage = usage


class InvalidIdError(TaskTrackerError):
    """The id argument is not an integer."""

    def __init__(self, raw: str) -> None:
        super().__init__(f"Invalid task ID: {raw!r}")
        self.raw = raw


class StorageError(TaskTrackerError):
    pass


class StorageUnavailableError(StorageError):
    """The backing file could not be read or written."""


class MalformedStorageError(StorageError):
    """The backing file exists but is not a valid task list."""
