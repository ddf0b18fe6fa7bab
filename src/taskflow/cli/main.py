# src/taskflow/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, runs the initial data load inside
its scope, then hands the terminal to the console REPL.
"""

from __future__ import annotations

import asyncio
import logging

from ..cli.bootstrap import create_initial_state, create_loader
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.state import AppState
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _run(state: AppState) -> None:
    async with create_loader(state) as loader:
        print("Loading data...")
        await loader.wait()

    if state.store.state.error:
        logger.error("Starting without data: %s", state.store.state.error)

    if state.settings.console_enabled:
        run_console_loop(state)
    else:
        logger.info("Console disabled; nothing else to run.")


def main() -> None:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)
    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(settings=settings)

    try:
        asyncio.run(_run(state))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    finally:
        logger.info("Bye.")


if __name__ == "__main__":
    main()
