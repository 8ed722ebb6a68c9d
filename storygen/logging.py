"""Logging utilities for storygen commands."""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "storygen"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a module-scoped logger under the storygen hierarchy."""
    full_name = f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME
    return logging.getLogger(full_name)


def configure_logging(
    *, verbose: bool = False, quiet: bool = False, log_file: Path | None = None
) -> logging.Logger:
    """Send storygen progress to stderr, optionally mirroring it to ``log_file``.

    ``quiet`` keeps only warnings and errors on the console (per-file skips
    and failures); the file sink always records at the console level or lower.
    """
    level = logging.DEBUG if verbose else logging.INFO
    console_level = logging.WARNING if quiet and not verbose else level
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False

    # Reset handlers so a second CLI run in the same process does not double output.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(console_level)
    stream_handler.setFormatter(logging.Formatter("[storygen] %(levelname)s %(message)s"))
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
