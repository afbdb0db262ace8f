# src/tidylist/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (restoring the saved list),
then runs the console loop in the main thread.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..errors import PersistenceError
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_file = setup_logging(log_dir=settings.data_dir, console_level=console_level)
    logger.info("Starting %s (log file %s)...", settings.app_name, log_file)

    try:
        state = create_initial_state(settings=settings)
    except PersistenceError as e:
        # Only reachable with strict loading enabled.
        logger.error("Cannot load saved tasks: %s", e)
        print(f"Cannot load saved tasks: {e}\nUnset TIDYLIST_STRICT_LOAD to start with an empty list.")
        return 1

    run_console_loop(state)
    logger.info("Bye.")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
