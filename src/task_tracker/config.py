# src/task_tracker/config.py

"""Settings loaded from environment variables (+ optional .env).

One Settings object for the whole CLI run. Nothing here touches the task
file; the path is only handed to TaskStore by the bootstrap code.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASK_TRACKER"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


# Shown at the bottom of `task-cli help`.
ENV_VARS = {
    _k("TASKS_FILE"): "Task file path (default: tasks.json in the current directory).",
    _k("STRICT_LOAD"): "Fail instead of starting empty when the task file is unreadable.",
    _k("LOG_LEVEL"): "Console logging level (default: WARNING).",
    _k("LOG_DIR"): "If set, also write a debug log file into this directory.",
    _k("APP_NAME"): "Program name used in usage text (default: task-cli).",
}

load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path | None) -> Path | None:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_dir: Path | None

    # ---- Storage ----
    tasks_file: Path
    strict_load: bool

    @staticmethod
    def from_env() -> Settings:
        app_name = _env(_k("APP_NAME"), "task-cli").strip() or "task-cli"
        log_level = _env(_k("LOG_LEVEL"), "WARNING").strip().upper() or "WARNING"
        log_dir = _env_path(_k("LOG_DIR"), None)

        tasks_file = _env_path(_k("TASKS_FILE"), Path("tasks.json")) or Path("tasks.json")
        strict_load = _env_bool(_k("STRICT_LOAD"), False)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_dir=log_dir,
            tasks_file=tasks_file,
            strict_load=strict_load,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
