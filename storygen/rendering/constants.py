"""Shared constants for story rendering."""

from __future__ import annotations

from ..models import SemanticType

STORYBOOK_MODULE = "@storybook/web-components"
DEFAULT_TITLE_PREFIX = "Components"
DEFAULT_DOCS_TAG = "autodocs"
DEFAULT_SOURCE_MARKER = ".ce"
STORY_TEMPLATE = "story.ts.j2"

FALLBACK_CONTROL = "text"

CONTROL_KINDS: dict[SemanticType, str] = {
    SemanticType.STRING: "text",
    SemanticType.NUMBER: "number",
    SemanticType.BOOLEAN: "boolean",
    SemanticType.ARRAY: "object",
    SemanticType.OBJECT: "object",
    SemanticType.UNKNOWN: FALLBACK_CONTROL,
}


__all__ = [
    "CONTROL_KINDS",
    "DEFAULT_DOCS_TAG",
    "DEFAULT_SOURCE_MARKER",
    "DEFAULT_TITLE_PREFIX",
    "FALLBACK_CONTROL",
    "STORYBOOK_MODULE",
    "STORY_TEMPLATE",
]
