from __future__ import annotations

from pathlib import Path

import pytest

from storygen.config import GeneratorConfig
from storygen.diagnostics import RecordingSink
from tests._fixtures.component_builder import ComponentBuilder


@pytest.fixture
def component_builder(tmp_path: Path) -> ComponentBuilder:
    """Provide a reusable component project rooted at the pytest tmp_path."""
    return ComponentBuilder(tmp_path)


@pytest.fixture
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def generator_config(component_builder: ComponentBuilder) -> GeneratorConfig:
    return GeneratorConfig(root=component_builder.path())
