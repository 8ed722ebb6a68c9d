"""Source analyzers for component files."""

from __future__ import annotations

from pathlib import Path
from typing import AbstractSet

from ..diagnostics import DiagnosticSink
from ..models import ComponentDescriptor
from .properties import REACTIVE_DECORATORS, extract_properties, is_reactive
from .syntax import SUPPORTED_DIALECTS, SourceParseError, SourceUnit, parse_source
from .tags import REGISTRATION_FUNCTION, extract_tag


def analyze_component(
    source_text: str,
    component_name: str,
    *,
    source_path: Path | None = None,
    registration_function: str = REGISTRATION_FUNCTION,
    decorators: AbstractSet[str] = REACTIVE_DECORATORS,
    dialect: str = "typescript",
    sink: DiagnosticSink | None = None,
) -> ComponentDescriptor:
    """Run both extractors over one source and bundle the results."""
    tag_name = extract_tag(
        source_text,
        registration_function=registration_function,
        dialect=dialect,
        sink=sink,
        source_path=source_path,
    )
    properties = (
        extract_properties(
            source_text,
            decorators=decorators,
            dialect=dialect,
            sink=sink,
            source_path=source_path,
        )
        if tag_name is not None
        else {}
    )
    return ComponentDescriptor(
        component_name=component_name,
        tag_name=tag_name,
        properties=properties,
        source_path=source_path,
    )


__all__ = [
    "REACTIVE_DECORATORS",
    "REGISTRATION_FUNCTION",
    "SUPPORTED_DIALECTS",
    "SourceParseError",
    "SourceUnit",
    "analyze_component",
    "extract_properties",
    "extract_tag",
    "is_reactive",
    "parse_source",
]
