# src/task_tracker/tasks/task_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
import re
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from .errors import MalformedStorageError, StorageError, StorageUnavailableError
from .task_models import Task, TaskStatus, now_timestamp

logger = logging.getLogger(__name__)

_INT_RE = re.compile(r"[+-]?\d+")


class TaskStore:
    """
    JSON-file task store.

    Every operation reads the whole file, and every mutation writes the whole
    collection back (temp file + os.replace, so the target is never left
    half-written). There is no locking: two processes writing the same file
    race and the last writer wins.

    Unreadable files:
    - strict=False (default): log a WARNING and behave as if the store were
      empty. The next mutation then OVERWRITES the unreadable file, so its
      previous content is lost. This keeps the CLI usable with a damaged file
      at the cost of that data.
    - strict=True: raise StorageUnavailableError / MalformedStorageError.

    On disk the file is a JSON array of
    {"id", "description", "status", "createdAt", "updatedAt"} objects.
    """

    def __init__(
        self,
        path: str | Path = "tasks.json",
        *,
        strict: bool = False,
        clock: Callable[[], str] = now_timestamp,
    ) -> None:
        self._path = Path(path)
        self._strict = strict
        self._clock = clock
        logger.debug("TaskStore ready path=%s strict=%s", self._path, strict)

    @property
    def path(self) -> Path:
        return self._path

    # ---- serialization ----

    @staticmethod
    def _task_to_dict(task: Task) -> dict[str, Any]:
        return {
            "id": task.id,
            "description": task.description,
            "status": task.status.value,
            "createdAt": task.created_at,
            "updatedAt": task.updated_at,
        }

    @staticmethod
    def _dict_to_task(raw: Any) -> Task:
        if not isinstance(raw, dict):
            raise MalformedStorageError(f"task record is not an object: {raw!r}")

        raw_id = raw.get("id")
        if isinstance(raw_id, bool):
            raise MalformedStorageError(f"task id is not an integer: {raw_id!r}")
        if isinstance(raw_id, int):
            task_id = raw_id
        elif isinstance(raw_id, str) and _INT_RE.fullmatch(raw_id.strip()):
            task_id = int(raw_id)
        else:
            raise MalformedStorageError(f"task id is not an integer: {raw_id!r}")

        def text(*keys: str) -> str:
            for key in keys:
                val = raw.get(key)
                if val is not None:
                    return str(val)
            return ""

        status_raw = raw.get("status")
        return Task(
            id=task_id,
            description=text("description"),
            status=TaskStatus.from_str(status_raw if isinstance(status_raw, str) else None),
            created_at=text("createdAt", "created_at"),
            updated_at=text("updatedAt", "updated_at"),
        )

    def _decode(self, content: str) -> list[Task]:
        try:
            data = json.loads(content)
        except json.JSONDecodeError as e:
            raise MalformedStorageError(f"{self._path} is not valid JSON: {e}") from e

        if not isinstance(data, list):
            raise MalformedStorageError(
                f"{self._path} must contain a JSON array, got {type(data).__name__}"
            )

        try:
            tasks = [self._dict_to_task(item) for item in data]
        except MalformedStorageError as e:
            raise MalformedStorageError(f"{self._path}: {e}") from e

        seen: set[int] = set()
        for t in tasks:
            if t.id in seen:
                raise MalformedStorageError(f"{self._path} contains duplicate task id {t.id}")
            seen.add(t.id)
        return tasks

    def _encode(self, tasks: Iterable[Task]) -> str:
        payload = [self._task_to_dict(t) for t in tasks]
        return json.dumps(payload, ensure_ascii=False, indent=2) + "\n"

    # ---- load / save ----

    def _recover(self, err: StorageError) -> list[Task]:
        if self._strict:
            raise err
        logger.warning("%s; starting with an empty task list.", err)
        return []

    def load(self) -> list[Task]:
        try:
            # utf-8-sig: editors may prepend a BOM
            content = self._path.read_text(encoding="utf-8-sig")
        except FileNotFoundError:
            return []
        except (OSError, UnicodeDecodeError) as e:
            return self._recover(StorageUnavailableError(f"Cannot read {self._path}: {e}"))

        if not content.strip():
            return []

        try:
            return self._decode(content)
        except MalformedStorageError as e:
            return self._recover(e)

    def save(self, tasks: Iterable[Task]) -> None:
        try:
            data = self._encode(tasks).encode("utf-8")
        except UnicodeEncodeError as e:
            # e.g. a lone surrogate from an undecodable argv byte
            raise StorageUnavailableError(f"Cannot write {self._path}: {e}") from e

        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp.write_bytes(data)
            os.replace(tmp, self._path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink(missing_ok=True)
            raise StorageUnavailableError(f"Cannot write {self._path}: {e}") from e

    # ---- public API ----

    def add_task(self, description: str) -> int:
        tasks = self.load()
        task = Task.create(description, now=self._clock())
        task.id = max((t.id for t in tasks), default=0) + 1
        tasks.append(task)
        self.save(tasks)
        logger.debug("Task added id=%s", task.id)
        return task.id

    def _mutate(self, task_id: int, apply: Callable[[Task], None]) -> bool:
        tasks = self.load()
        for task in tasks:
            if task.id == task_id:
                apply(task)
                task.touch(self._clock())
                self.save(tasks)
                return True
        return False

    def update_task(self, task_id: int, description: str) -> bool:
        found = self._mutate(task_id, lambda t: t.set_description(description))
        logger.debug("Task update id=%s found=%s", task_id, found)
        return found

    def mark_task(self, task_id: int, status: TaskStatus) -> bool:
        found = self._mutate(task_id, lambda t: t.set_status(status))
        logger.debug("Task mark id=%s status=%s found=%s", task_id, status.value, found)
        return found

    def delete_task(self, task_id: int) -> bool:
        tasks = self.load()
        remaining = [t for t in tasks if t.id != task_id]
        if len(remaining) == len(tasks):
            logger.debug("Task delete id=%s found=False", task_id)
            return False
        self.save(remaining)
        logger.debug("Task deleted id=%s", task_id)
        return True

    def list_tasks(self, status: TaskStatus | None = None) -> list[Task]:
        tasks = self.load()
        if status is None:
            return tasks
        return [t for t in tasks if t.status == status]
