# src/taskflow/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


def _prompt(state: AppState) -> str:
    user = state.session.current_user
    who = user.name if user is not None else "anonymous"
    return f"[{who}] >>> "


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Use /help for commands, /login <email> to sign in, /exit to quit.\n")

    user = state.session.current_user
    if user is not None:
        _print_ts(f"Welcome back, {user.name}.")

    while True:
        try:
            line = input(_prompt(state)).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not line:
            continue

        if line.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        if not line.startswith("/"):
            _print_ts("Commands start with '/'. Use /help to list them.")
            continue

        try:
            reply = command_registry.handle(state, line)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is not None:
            _print_ts(reply)

    logger.info("Console connector finished.")
