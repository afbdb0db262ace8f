# src/tidylist/connectors/console_connector.py

from __future__ import annotations

import logging

from ..cli.commands import registry as command_registry
from ..cli.commands import render_list
from ..core.state import AppState

logger = logging.getLogger(__name__)

EXIT_COMMANDS = ("/exit", "/quit")


def run_console_loop(state: AppState, *, input_fn=input, output_fn=print) -> None:
    """
    Interactive loop: every line is a slash command; the list is shown on start.

    input_fn/output_fn are injectable for tests.
    """
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "tidylist"))
    logger.info("Console connector started (%d task(s)).", len(state.store))

    output_fn(f"[{app_name}] Use /help for commands. Use /exit to quit.\n")
    output_fn(render_list(state))

    while True:
        try:
            user_input = input_fn("> ").strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            output_fn("")
            break

        if not user_input:
            continue

        if user_input.lower() in EXIT_COMMANDS:
            logger.info("Console exit command received.")
            break

        if not user_input.startswith("/"):
            # Bare text is a shorthand for /add.
            user_input = "/add " + user_input

        try:
            response = command_registry.handle(state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            response = "Internal error while handling a command."

        if response is not None:
            output_fn(response)

    logger.info("Console connector finished.")
