"""Logging setup for bizdesk."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

ROOT_LOGGER = "bizdesk"


def setup_logger(
    name: str = ROOT_LOGGER,
    level: int | str = logging.WARNING,
    log_file: Path | None = None,
) -> logging.Logger:
    """
    Configure and return the application logger.

    Args:
        name: Logger name.
        level: Logging level (int or name such as "INFO").
        log_file: Optional path to log file. If None, logs to stderr only.

    Returns:
        Configured logger.
    """
    log = logging.getLogger(name)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    log.setLevel(level)
    if log.handlers:
        return log

    fmt = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    h = logging.StreamHandler(sys.stderr)
    h.setFormatter(fmt)
    log.addHandler(h)

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setFormatter(fmt)
        log.addHandler(fh)

    return log


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the application namespace."""
    if not name:
        return logging.getLogger(ROOT_LOGGER)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
