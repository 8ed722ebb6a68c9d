"""Story file rendering."""

from .builder import StoryRenderer, control_for, js_literal, js_string, render
from .constants import CONTROL_KINDS

__all__ = ["CONTROL_KINDS", "StoryRenderer", "control_for", "js_literal", "js_string", "render"]
