"""Generate Storybook stories from Lit web component sources."""

from .analyzers import extract_properties, extract_tag
from .hooks import storybook_hook
from .models import ComponentDescriptor, GenerationResult, PropertyDescriptor, SemanticType
from .orchestrator import Orchestrator
from .rendering import render

__all__ = [
    "ComponentDescriptor",
    "GenerationResult",
    "Orchestrator",
    "PropertyDescriptor",
    "SemanticType",
    "extract_properties",
    "extract_tag",
    "render",
    "storybook_hook",
]
