"""Custom element tag extraction."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from ..diagnostics import DEBUG, ERROR, DiagnosticEvent, DiagnosticSink, default_sink, location_suffix
from .syntax import SourceParseError, parse_source

REGISTRATION_FUNCTION = "customElement"


def extract_tag(
    source_text: str,
    *,
    registration_function: str = REGISTRATION_FUNCTION,
    dialect: str = "typescript",
    sink: DiagnosticSink | None = None,
    source_path: Path | None = None,
) -> Optional[str]:
    """Return the tag passed to the registration call, or ``None``.

    Every call is visited; when the registration function is called more than
    once the last string argument in document order wins. Events carry
    ``source_path`` when given.
    """
    emit = sink or default_sink()
    try:
        unit = parse_source(source_text, dialect=dialect)
    except SourceParseError as exc:
        emit(DiagnosticEvent(ERROR, f"Error extracting tag name: {exc}{location_suffix(source_path)}", source_path))
        return None

    tag_name: Optional[str] = None
    for call in unit.calls():
        if call.callee != registration_function:
            continue
        argument = call.first_argument
        if argument is not None and argument.kind == "string":
            if tag_name is not None:
                emit(
                    DiagnosticEvent(
                        DEBUG,
                        f"Registration call on line {call.line} replaces earlier tag '{tag_name}'",
                        source_path,
                    )
                )
            tag_name = str(argument.value)
    return tag_name


__all__ = ["REGISTRATION_FUNCTION", "extract_tag"]
