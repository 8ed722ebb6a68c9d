"""Tests for reactive property extraction."""

from __future__ import annotations

from pathlib import Path

from storygen.analyzers import extract_properties
from storygen.diagnostics import ERROR, RecordingSink
from storygen.models import PropertyDescriptor, SemanticType
from tests._fixtures.component_builder import WIDGET_SOURCE, dedent


def _extract(source: str, **kwargs):
    return extract_properties(dedent(source), **kwargs)


def test_extract_properties_from_widget() -> None:
    properties = extract_properties(dedent(WIDGET_SOURCE))

    assert list(properties) == ["label", "count"]
    assert properties["label"] == PropertyDescriptor(
        name="label", semantic_type=SemanticType.STRING, default="Hi", has_default=True
    )
    assert properties["count"] == PropertyDescriptor(
        name="count", semantic_type=SemanticType.NUMBER, default=0, has_default=True
    )


def test_default_values_keep_their_type() -> None:
    properties = _extract(
        """
        class Defaults {
          @property() count: number = 5;
          @property() ratio: number = 0.25;
          @property() label: string = 'hi';
          @property() open: boolean = false;
        }
        """
    )
    assert properties["count"].default == 5
    assert isinstance(properties["count"].default, int)
    assert properties["ratio"].default == 0.25
    assert properties["label"].default == "hi"
    assert properties["open"].default is False
    assert properties["open"].has_default is True


def test_non_literal_initializers_have_no_default() -> None:
    properties = _extract(
        """
        class Handlers {
          @property() handler = () => {};
          @property() items: string[] = [];
          @property() config: object = {};
          @property() greeting: string = `hi ${name}`;
          @property() created = new Date();
          @property() offset: number = -1;
        }
        """
    )
    for name in ("handler", "items", "config", "greeting", "created", "offset"):
        assert properties[name].has_default is False
        assert properties[name].default is None
    assert properties["items"].semantic_type is SemanticType.ARRAY
    assert properties["config"].semantic_type is SemanticType.OBJECT


def test_type_falls_back_to_unknown() -> None:
    properties = _extract(
        """
        class Loose {
          @property() bare;
          @property() inferred = 'text';
          @property() variant: 'primary' | 'secondary' = 'primary';
          @property() list: Array<string>;
        }
        """
    )
    assert properties["bare"].semantic_type is SemanticType.UNKNOWN
    assert properties["bare"].has_default is False
    assert properties["inferred"].semantic_type is SemanticType.UNKNOWN
    assert properties["inferred"].default == "text"
    assert properties["variant"].semantic_type is SemanticType.UNKNOWN
    assert properties["list"].semantic_type is SemanticType.UNKNOWN


def test_only_recognised_decorator_calls_qualify() -> None:
    properties = _extract(
        """
        class Mixed {
          @property() kept: string;
          @state() internal: boolean = true;
          @queryProperty() ignored: string;
          @Property() wrongCase: string;
          @property bare: string;
          @lit.property() member: string;
          plain: string = 'x';
          @query('#input') input!: HTMLInputElement;
        }
        """
    )
    assert list(properties) == ["kept", "internal"]


def test_any_matching_decorator_is_enough() -> None:
    properties = _extract(
        """
        class Stacked {
          @observed @property({ type: Number }) size: number = 3;
        }
        """
    )
    assert properties["size"].default == 3


def test_non_identifier_keys_are_skipped() -> None:
    properties = _extract(
        """
        class Keys {
          @property() 'quoted': string = 'a';
          @property() named: string = 'b';
        }
        """
    )
    assert list(properties) == ["named"]


def test_redeclared_field_overwrites_in_place() -> None:
    properties = _extract(
        """
        class First {
          @property() label: string = 'first';
          @property() size: number = 1;
        }
        class Second {
          @property() label: number = 2;
        }
        """
    )
    assert list(properties) == ["label", "size"]
    assert properties["label"].semantic_type is SemanticType.NUMBER
    assert properties["label"].default == 2


def test_custom_decorator_names() -> None:
    source = "class A {\n  @reactive() value: string = 'v';\n  @property() other: string;\n}\n"
    properties = extract_properties(source, decorators=frozenset({"reactive"}))
    assert list(properties) == ["value"]


def test_parse_failure_returns_empty_mapping(recording_sink: RecordingSink) -> None:
    source = "class Broken {\n  @property() label: string = ;\n"
    assert extract_properties(source, sink=recording_sink) == {}
    assert recording_sink.messages(ERROR)[0].startswith("Error parsing file:")


def test_parse_failure_event_carries_source_path(recording_sink: RecordingSink) -> None:
    source = "class Broken {\n  @property() label: string = ;\n"
    path = Path("src/broken.ce.ts")

    assert extract_properties(source, sink=recording_sink, source_path=path) == {}

    (event,) = recording_sink.events
    assert event.level == ERROR
    assert event.file == path
