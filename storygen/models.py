"""Core data models shared across storygen components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, Optional, Union

LiteralValue = Union[str, int, float, bool]


class SemanticType(str, Enum):
    """Closed set of property types used when rendering stories."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"
    UNKNOWN = "unknown"


@dataclass
class PropertyDescriptor:
    """A reactive field discovered on a component class."""

    name: str
    semantic_type: SemanticType = SemanticType.UNKNOWN
    default: Optional[LiteralValue] = None
    has_default: bool = False


@dataclass
class ComponentDescriptor:
    """Facts extracted from a single component source file."""

    component_name: str
    tag_name: Optional[str]
    properties: Dict[str, PropertyDescriptor] = field(default_factory=dict)
    source_path: Optional[Path] = None


@dataclass
class GenerationResult:
    """Aggregate outcome of a batch run."""

    success_count: int = 0
    error_count: int = 0
