"""Logging configuration for the full-screen session.

Only a file handler is installed: anything written to the terminal while
the UI owns it would be painted over or corrupt the display.
"""

from __future__ import annotations

import logging
from pathlib import Path

LOG_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(log_file: Path | None, level: str = "INFO") -> None:
    """
    Configure the root logger.

    With no log file, records are dropped by a NullHandler. Call once,
    before the store is loaded.
    """
    root = logging.getLogger()
    levelno = logging.getLevelName(level)
    root.setLevel(levelno if isinstance(levelno, int) else logging.INFO)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)

    if log_file is None:
        root.addHandler(logging.NullHandler())
        return

    log_file.parent.mkdir(parents=True, exist_ok=True)
    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
    root.addHandler(fh)

    logging.captureWarnings(True)
