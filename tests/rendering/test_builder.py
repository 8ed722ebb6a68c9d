"""Tests for story rendering."""

from __future__ import annotations

from pathlib import Path

from storygen.models import PropertyDescriptor, SemanticType
from storygen.rendering import CONTROL_KINDS, StoryRenderer, js_literal, js_string, render

EXPECTED_WIDGET_STORY = """\
import { Meta, StoryObj } from '@storybook/web-components';
import './widget.ce';

const meta: Meta = {
  title: 'Components/widget',
  component: 'my-widget',
  tags: ['autodocs'],
  argTypes: {
    label: {
      control: 'text',
      description: 'label property',
      defaultValue: "Hi",
      table: {
        type: { summary: 'string' }
      }
    },
    count: {
      control: 'number',
      description: 'count property',
      defaultValue: 0,
      table: {
        type: { summary: 'number' }
      }
    }
  },
};

export default meta;

export const Primary: StoryObj = {
  args: {
    label: "Hi",
    count: 0
  },
};
"""


def _widget_properties() -> dict[str, PropertyDescriptor]:
    return {
        "label": PropertyDescriptor("label", SemanticType.STRING, "Hi", True),
        "count": PropertyDescriptor("count", SemanticType.NUMBER, 0, True),
    }


def test_render_widget_story() -> None:
    assert render("widget", "my-widget", _widget_properties()) == EXPECTED_WIDGET_STORY


def test_render_is_deterministic() -> None:
    renderer = StoryRenderer()
    first = renderer.render("widget", "my-widget", _widget_properties())
    second = renderer.render("widget", "my-widget", _widget_properties())
    assert first == second


def test_properties_without_defaults_stay_out_of_args() -> None:
    properties = {
        "items": PropertyDescriptor("items", SemanticType.ARRAY),
        "open": PropertyDescriptor("open", SemanticType.BOOLEAN, False, True),
        "mystery": PropertyDescriptor("mystery"),
    }
    output = render("panel", "x-panel", properties)

    assert "    items: {\n      control: 'object',\n      description: 'items property',\n      table:" in output
    assert "type: { summary: 'unknown' }" in output
    assert "    mystery: {\n      control: 'text'," in output
    args_block = output.split("export const Primary: StoryObj = {", 1)[1]
    assert args_block == "\n  args: {\n    open: false\n  },\n};\n"


def test_render_without_properties() -> None:
    output = render("empty", "x-empty", {})
    assert "  argTypes: {\n  },\n" in output
    assert "  args: {\n  },\n" in output


def test_control_table_is_total() -> None:
    assert set(CONTROL_KINDS) == set(SemanticType)
    assert CONTROL_KINDS[SemanticType.ARRAY] == "object"
    assert CONTROL_KINDS[SemanticType.UNKNOWN] == "text"


def test_default_literals_are_json_encoded() -> None:
    assert js_literal("say \"hi\"") == '"say \\"hi\\""'
    assert js_literal(True) == "true"
    assert js_literal(1.5) == "1.5"
    assert js_literal("café") == '"café"'


def test_default_literals_follow_json_stringify_edge_cases() -> None:
    assert js_literal(float("inf")) == "null"
    assert js_literal(float("-inf")) == "null"
    assert js_literal("\U0001F600") == '"\U0001F600"'
    assert js_literal("\ud83d!") == '"\\ud83d!"'


def test_embedded_names_are_escaped() -> None:
    assert js_string("it's") == "it\\'s"
    assert js_string("a\\b\nc") == "a\\\\b\\nc"
    assert js_string("x-\udc00") == "x-\\udc00"
    output = render("odd", "x-'quoted'", {})
    assert "component: 'x-\\'quoted\\''," in output


def test_renderer_options_change_title_import_and_tag() -> None:
    renderer = StoryRenderer(title_prefix="Design/Atoms", source_marker=".element", docs_tag="docs")
    output = renderer.render("button", "x-button", {})
    assert "import './button.element';" in output
    assert "title: 'Design/Atoms/button'," in output
    assert "tags: ['docs']," in output


def test_custom_templates_dir_overrides_bundled_template(tmp_path: Path) -> None:
    (tmp_path / "story.ts.j2").write_text("// {{ tag_name }}: {{ properties | length }}\n", encoding="utf-8")
    renderer = StoryRenderer(tmp_path)
    assert renderer.render("widget", "my-widget", _widget_properties()) == "// my-widget: 2\n"
