"""Diagnostic events emitted while generating stories.

Core components never write to the console directly. They emit
:class:`DiagnosticEvent` objects into a sink, which is any callable accepting
one event. :class:`LoggingSink` forwards events to the ``storygen`` logger and
is the default; :class:`RecordingSink` keeps them for later inspection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional

from .logging import get_logger

DEBUG = "debug"
INFO = "info"
WARNING = "warning"
ERROR = "error"

_LEVELS = {
    DEBUG: logging.DEBUG,
    INFO: logging.INFO,
    WARNING: logging.WARNING,
    ERROR: logging.ERROR,
}


@dataclass(frozen=True)
class DiagnosticEvent:
    """A single progress, warning or error notice."""

    level: str
    message: str
    file: Optional[Path] = None

    def __post_init__(self) -> None:
        if self.level not in _LEVELS:
            raise ValueError(f"Unknown diagnostic level: {self.level}")


DiagnosticSink = Callable[[DiagnosticEvent], None]


class LoggingSink:
    """Forwards diagnostic events to a stdlib logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or get_logger("diagnostics")

    def __call__(self, event: DiagnosticEvent) -> None:
        self.logger.log(_LEVELS[event.level], event.message)


class RecordingSink:
    """Keeps every event it receives, optionally forwarding to another sink."""

    def __init__(self, forward: DiagnosticSink | None = None) -> None:
        self.events: List[DiagnosticEvent] = []
        self._forward = forward

    def __call__(self, event: DiagnosticEvent) -> None:
        self.events.append(event)
        if self._forward is not None:
            self._forward(event)

    def messages(self, level: str | None = None) -> List[str]:
        return [event.message for event in self.events if level is None or event.level == level]


def default_sink() -> DiagnosticSink:
    return LoggingSink()


def location_suffix(file: Path | None) -> str:
    """`` (path)`` for messages about a known file, empty otherwise."""
    return f" ({file})" if file is not None else ""


__all__ = [
    "DEBUG",
    "INFO",
    "WARNING",
    "ERROR",
    "DiagnosticEvent",
    "DiagnosticSink",
    "LoggingSink",
    "RecordingSink",
    "default_sink",
    "location_suffix",
]
