"""Reactive property extraction for Lit components."""

from __future__ import annotations

from pathlib import Path
from typing import AbstractSet, Dict, Optional

from ..diagnostics import DEBUG, ERROR, DiagnosticEvent, DiagnosticSink, default_sink, location_suffix
from ..models import LiteralValue, PropertyDescriptor, SemanticType
from .syntax import ClassField, Literal, SourceParseError, TypeAnnotation, parse_source

REACTIVE_DECORATORS: frozenset[str] = frozenset({"property", "state"})

_SEMANTIC_TYPES: Dict[str, SemanticType] = {
    "string": SemanticType.STRING,
    "number": SemanticType.NUMBER,
    "boolean": SemanticType.BOOLEAN,
    "array": SemanticType.ARRAY,
    "object": SemanticType.OBJECT,
}


def is_reactive(field: ClassField, decorators: AbstractSet[str] = REACTIVE_DECORATORS) -> bool:
    """True when the field carries ``@name(...)`` for one of ``decorators``."""
    return any(
        decorator.kind == "call" and decorator.name in decorators
        for decorator in field.decorators
    )


def infer_type(annotation: TypeAnnotation) -> SemanticType:
    return _SEMANTIC_TYPES.get(annotation.kind, SemanticType.UNKNOWN)


def infer_default(initializer: Optional[Literal]) -> tuple[bool, Optional[LiteralValue]]:
    if initializer is None or not initializer.is_simple:
        return False, None
    return True, initializer.value


def extract_properties(
    source_text: str,
    *,
    decorators: AbstractSet[str] = REACTIVE_DECORATORS,
    dialect: str = "typescript",
    sink: DiagnosticSink | None = None,
    source_path: Path | None = None,
) -> Dict[str, PropertyDescriptor]:
    """Map reactive field names to their inferred type and literal default.

    Fields keep declaration order. A name declared twice keeps its first
    position and takes the later declaration's details.
    """
    emit = sink or default_sink()
    properties: Dict[str, PropertyDescriptor] = {}
    try:
        unit = parse_source(source_text, dialect=dialect)
    except SourceParseError as exc:
        emit(DiagnosticEvent(ERROR, f"Error parsing file: {exc}{location_suffix(source_path)}", source_path))
        return properties

    for field in unit.class_fields():
        if not is_reactive(field, decorators):
            continue
        if field.key is None:
            emit(
                DiagnosticEvent(
                    DEBUG,
                    f"Skipping reactive field without a plain name on line {field.line}",
                    source_path,
                )
            )
            continue
        has_default, default = infer_default(field.initializer)
        properties[field.key] = PropertyDescriptor(
            name=field.key,
            semantic_type=infer_type(field.annotation),
            default=default,
            has_default=has_default,
        )
    return properties


__all__ = [
    "REACTIVE_DECORATORS",
    "extract_properties",
    "infer_default",
    "infer_type",
    "is_reactive",
]
