"""Tests for diagnostic sinks."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from storygen.diagnostics import ERROR, WARNING, DiagnosticEvent, LoggingSink, RecordingSink


def test_logging_sink_maps_levels(caplog: pytest.LogCaptureFixture) -> None:
    logger = logging.getLogger("storygen_sink_test")
    sink = LoggingSink(logger)

    with caplog.at_level(logging.DEBUG, logger="storygen_sink_test"):
        sink(DiagnosticEvent(WARNING, "no tag", Path("a.ce.ts")))
        sink(DiagnosticEvent(ERROR, "boom"))

    assert [(record.levelno, record.getMessage()) for record in caplog.records] == [
        (logging.WARNING, "no tag"),
        (logging.ERROR, "boom"),
    ]


def test_recording_sink_filters_and_forwards() -> None:
    forwarded: list[DiagnosticEvent] = []
    sink = RecordingSink(forward=forwarded.append)

    sink(DiagnosticEvent("info", "started"))
    sink(DiagnosticEvent(ERROR, "failed"))

    assert sink.messages() == ["started", "failed"]
    assert sink.messages(ERROR) == ["failed"]
    assert forwarded == sink.events


def test_unknown_level_rejected() -> None:
    with pytest.raises(ValueError):
        DiagnosticEvent("fatal", "nope")
