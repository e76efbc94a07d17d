"""
Centralized logging configuration for the checkout terminal.

The Textual UI owns the terminal, so records go to a log file only.
"""

from __future__ import annotations

import logging
from pathlib import Path

from checkout import config

LOG_FORMAT = "%(asctime)s - %(levelname)s - [PID:%(process)d] - %(name)s - %(message)s"


def setup_logging(log_path: str | Path | None = None, level: int = logging.INFO) -> None:
    """
    Configure the root logger with a single file handler.

    Args:
        log_path: Destination file; defaults to ``config.LOG_PATH``.
        level: Root log level.
    """
    path = Path(log_path or config.LOG_PATH)
    path.parent.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.FileHandler(path, encoding="utf-8")],
        force=True,
    )

    # Reduce verbosity from external libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
