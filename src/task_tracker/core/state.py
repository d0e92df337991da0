# src/task_tracker/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .ports import TaskRepo


@dataclass(slots=True)
class AppState:
    # Settings object (config.Settings in the app, a SimpleNamespace in tests).
    settings: Any
    task_store: TaskRepo
