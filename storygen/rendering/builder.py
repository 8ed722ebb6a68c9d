"""Renders Storybook story files from extracted component facts."""

from __future__ import annotations

import json
import math
import re
from pathlib import Path
from typing import Dict, List, Mapping

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..models import LiteralValue, PropertyDescriptor
from .constants import (
    CONTROL_KINDS,
    DEFAULT_DOCS_TAG,
    DEFAULT_SOURCE_MARKER,
    DEFAULT_TITLE_PREFIX,
    FALLBACK_CONTROL,
    STORYBOOK_MODULE,
    STORY_TEMPLATE,
)

_JS_STRING_ESCAPES = {
    "\\": "\\\\",
    "'": "\\'",
    "\n": "\\n",
    "\r": "\\r",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


def js_string(value: object) -> str:
    """Escape ``value`` for embedding inside a single-quoted JS string."""
    return _escape_surrogates("".join(_JS_STRING_ESCAPES.get(char, char) for char in str(value)))


def js_literal(value: LiteralValue) -> str:
    """Encode a default value the way ``JSON.stringify`` would."""
    if isinstance(value, float) and not math.isfinite(value):
        return "null"
    return _escape_surrogates(json.dumps(value, ensure_ascii=False))


def _escape_surrogates(text: str) -> str:
    return _LONE_SURROGATE.sub(lambda match: f"\\u{ord(match.group()):04x}", text)


def control_for(descriptor: PropertyDescriptor) -> str:
    return CONTROL_KINDS.get(descriptor.semantic_type, FALLBACK_CONTROL)


class StoryRenderer:
    """Fills the story template for one component at a time."""

    def __init__(
        self,
        templates_dir: Path | None = None,
        *,
        title_prefix: str = DEFAULT_TITLE_PREFIX,
        source_marker: str = DEFAULT_SOURCE_MARKER,
        docs_tag: str = DEFAULT_DOCS_TAG,
    ) -> None:
        self.templates_dir = templates_dir
        self.title_prefix = title_prefix
        self.source_marker = source_marker
        self.docs_tag = docs_tag
        self._env = self._create_env(templates_dir)

    def render(
        self,
        component_name: str,
        tag_name: str,
        properties: Mapping[str, PropertyDescriptor],
    ) -> str:
        template = self._env.get_template(STORY_TEMPLATE)
        return template.render(
            storybook_module=STORYBOOK_MODULE,
            import_path=f"{component_name}{self.source_marker}",
            title=self._title(component_name),
            tag_name=tag_name,
            docs_tag=self.docs_tag,
            properties=self._property_context(properties),
        )

    def _title(self, component_name: str) -> str:
        if not self.title_prefix:
            return component_name
        return f"{self.title_prefix.rstrip('/')}/{component_name}"

    @staticmethod
    def _property_context(properties: Mapping[str, PropertyDescriptor]) -> List[Dict[str, object]]:
        return [
            {
                "name": name,
                "control": control_for(descriptor),
                "summary": descriptor.semantic_type.value,
                "has_default": descriptor.has_default,
                "default": descriptor.default,
            }
            for name, descriptor in properties.items()
        ]

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories: List[str] = []
        if templates_dir:
            directories.append(str(templates_dir))
        directories.append(str(Path(__file__).with_name("templates")))
        env = Environment(
            loader=FileSystemLoader(directories),
            autoescape=False,
            undefined=StrictUndefined,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        env.filters["js_string"] = js_string
        env.filters["js_literal"] = js_literal
        return env


_default_renderer: StoryRenderer | None = None


def render(
    component_name: str,
    tag_name: str,
    properties: Mapping[str, PropertyDescriptor],
) -> str:
    """Render a story with the bundled template and default settings."""
    global _default_renderer
    if _default_renderer is None:
        _default_renderer = StoryRenderer()
    return _default_renderer.render(component_name, tag_name, properties)


__all__ = ["StoryRenderer", "control_for", "js_literal", "js_string", "render"]
