# src/task_tracker/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, runs exactly one command and prints
its result. Handled errors are printed as a single line and the process
still exits with status 0.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..cli.commands import registry
from ..config import get_settings
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    setup_logging(log_dir=getattr(settings, "log_dir", None), console_level=console_level)

    args = sys.argv[1:] if argv is None else list(argv)
    logger.debug("Running %s %s", settings.app_name, args)

    try:
        state = create_initial_state(settings=settings)
        output = registry.handle(state, args)
    except Exception as exc:
        logger.debug("Command failed: %s", args, exc_info=True)
        output = f"Error: {exc}"

    print(output)


if __name__ == "__main__":
    main()
