# src/taskflow/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path


# Loggers whose INFO lines would interleave with REPL output. They still
# reach the log file; the console only shows their warnings.
_QUIET_ON_CONSOLE = (
    "taskflow.storage.",
    "taskflow.core.store",
    "taskflow.core.session",
    "taskflow.cli.commands",
    "taskflow.connectors.console_connector",
)


class _ConsoleNoiseFilter(logging.Filter):
    """
    Keep the console readable while the REPL owns the terminal:
    - startup/shutdown and loader logs pass through
    - session, command and storage logs only at WARNING+
    - Python warnings (captured as 'py.warnings') and third-party logs only at ERROR+
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name.startswith("taskflow."):
            if name.startswith(_QUIET_ON_CONSOLE):
                return record.levelno >= logging.WARNING
            return True

        if name == "py.warnings":
            return record.levelno >= logging.ERROR

        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/taskflow",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> None:
    """
    Configure logging with:
    - Console handler: readable + filtered for interactive use
    - File handler: full logs for debugging

    Call this ONCE, very early (before first logger.info).
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "taskflow.log"

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(console_level)
    ch.setFormatter(fmt)
    ch.addFilter(_ConsoleNoiseFilter())
    root.addHandler(ch)

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(file_level)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    logging.captureWarnings(True)
