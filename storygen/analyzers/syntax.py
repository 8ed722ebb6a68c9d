"""Tree-sitter powered view over component source files.

:func:`parse_source` turns TypeScript text into a :class:`SourceUnit`. The unit
never exposes raw tree-sitter nodes to callers; instead it yields a small set of
frozen views (:class:`CallSite`, :class:`ClassField` and the
:class:`Decorator`, :class:`TypeAnnotation` and :class:`Literal` values they
carry) covering exactly the syntax the extractors look at.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterator, List, Optional, Tuple

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

from ..models import LiteralValue

_GRAMMARS: Dict[str, Callable[[], object]] = {
    "typescript": tree_sitter_typescript.language_typescript,
    "tsx": tree_sitter_typescript.language_tsx,
}

SUPPORTED_DIALECTS: Tuple[str, ...] = tuple(_GRAMMARS)

_FIELD_NODE_TYPES = {"public_field_definition", "field_definition"}
_PREDEFINED_KINDS = {"string", "number", "boolean", "object"}

_SIMPLE_ESCAPES = {
    "n": "\n",
    "t": "\t",
    "r": "\r",
    "b": "\b",
    "f": "\f",
    "v": "\v",
    "0": "\0",
}
_LINE_CONTINUATIONS = {"\n", "\r", "\u2028", "\u2029"}

_parsers: Dict[str, Parser] = {}


class SourceParseError(ValueError):
    """Raised when a component source does not parse cleanly."""

    def __init__(self, message: str, line: int | None = None, column: int | None = None) -> None:
        super().__init__(message)
        self.line = line
        self.column = column


@dataclass(frozen=True)
class Literal:
    """An expression as seen by the extractors.

    ``kind`` is ``string``, ``number``, ``boolean`` or ``other``. ``value`` is
    only set for the first three.
    """

    kind: str
    value: Optional[LiteralValue] = None

    @property
    def is_simple(self) -> bool:
        return self.kind != "other"


@dataclass(frozen=True)
class Decorator:
    """A decorator applied to a class member.

    ``kind`` is ``call`` (``@name(...)``), ``identifier`` (``@name``),
    ``member`` (``@ns.name``) or ``other``. ``name`` holds the identifier for
    bare decorators and for calls whose callee is a plain identifier.
    """

    kind: str
    name: Optional[str] = None


@dataclass(frozen=True)
class TypeAnnotation:
    """Declared type of a class field reduced to the forms that matter here."""

    kind: str = "none"


@dataclass(frozen=True)
class CallSite:
    callee: Optional[str]
    first_argument: Optional[Literal]
    line: int


@dataclass(frozen=True)
class ClassField:
    key: Optional[str]
    decorators: Tuple[Decorator, ...]
    annotation: TypeAnnotation
    initializer: Optional[Literal]
    line: int


class SourceUnit:
    """Parsed component source exposing call sites and class fields."""

    def __init__(self, tree: Tree, source_bytes: bytes) -> None:
        self._tree = tree
        self._source = source_bytes

    @property
    def root(self) -> Node:
        return self._tree.root_node

    def calls(self) -> Iterator[CallSite]:
        """Yield every call expression in document order."""
        for node in _walk(self.root):
            if node.type != "call_expression":
                continue
            function = node.child_by_field_name("function")
            callee = self._text(function) if function is not None and function.type == "identifier" else None
            yield CallSite(
                callee=callee,
                first_argument=self._first_argument(node),
                line=node.start_point[0] + 1,
            )

    def class_fields(self) -> Iterator[ClassField]:
        """Yield every class field declaration, nested classes included."""
        for node in _walk(self.root):
            if node.type not in _FIELD_NODE_TYPES:
                continue
            key_node = node.child_by_field_name("name")
            key = self._text(key_node) if key_node is not None and key_node.type == "property_identifier" else None
            value = node.child_by_field_name("value")
            yield ClassField(
                key=key,
                decorators=tuple(
                    self._decorator(child) for child in node.children if child.type == "decorator"
                ),
                annotation=self._annotation(node.child_by_field_name("type")),
                initializer=self._literal(value) if value is not None else None,
                line=node.start_point[0] + 1,
            )

    def _first_argument(self, call: Node) -> Optional[Literal]:
        arguments = call.child_by_field_name("arguments")
        if arguments is None or arguments.type != "arguments":
            return None
        values = _named(arguments)
        if not values:
            return None
        return self._literal(values[0])

    def _decorator(self, node: Node) -> Decorator:
        expressions = _named(node)
        if not expressions:
            return Decorator(kind="other")
        expression = expressions[0]
        if expression.type == "identifier":
            return Decorator(kind="identifier", name=self._text(expression))
        if expression.type == "member_expression":
            return Decorator(kind="member")
        if expression.type == "call_expression":
            function = expression.child_by_field_name("function")
            if function is not None and function.type == "identifier":
                return Decorator(kind="call", name=self._text(function))
            return Decorator(kind="call")
        return Decorator(kind="other")

    def _annotation(self, node: Optional[Node]) -> TypeAnnotation:
        if node is None:
            return TypeAnnotation()
        declared = _named(node)
        if not declared:
            return TypeAnnotation(kind="other")
        type_node = declared[0]
        if type_node.type in {"predefined_type", "type_identifier"}:
            text = self._text(type_node)
            if text in _PREDEFINED_KINDS and (type_node.type == "predefined_type" or text == "object"):
                return TypeAnnotation(kind=text)
        if type_node.type == "array_type":
            return TypeAnnotation(kind="array")
        return TypeAnnotation(kind="other")

    def _literal(self, node: Node) -> Literal:
        if node.type == "string":
            return Literal(kind="string", value=self._string_value(node))
        if node.type == "number":
            number = _number_value(self._text(node))
            if number is not None:
                return Literal(kind="number", value=number)
        if node.type in {"true", "false"}:
            return Literal(kind="boolean", value=node.type == "true")
        return Literal(kind="other")

    def _string_value(self, node: Node) -> str:
        parts: List[str] = []
        for child in node.named_children:
            text = self._text(child)
            parts.append(_unescape(text) if child.type == "escape_sequence" else text)
        return _join_surrogates("".join(parts))

    def _text(self, node: Node) -> str:
        return self._source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def parse_source(text: str, *, dialect: str = "typescript") -> SourceUnit:
    """Parse ``text`` and return a :class:`SourceUnit`.

    Raises :class:`SourceParseError` when the grammar reports syntax errors.
    """
    parser = _get_parser(dialect)
    source_bytes = text.encode("utf-8")
    tree = parser.parse(source_bytes)
    if tree.root_node.has_error:
        line, column = _first_error_position(tree.root_node)
        raise SourceParseError(f"Syntax error at line {line}, column {column}", line, column)
    return SourceUnit(tree, source_bytes)


def _get_parser(dialect: str) -> Parser:
    parser = _parsers.get(dialect)
    if parser is not None:
        return parser
    grammar = _GRAMMARS.get(dialect)
    if grammar is None:
        raise ValueError(f"Unsupported dialect '{dialect}'. Expected one of: {', '.join(SUPPORTED_DIALECTS)}")
    parser = Parser(Language(grammar()))
    _parsers[dialect] = parser
    return parser


def _walk(root: Node) -> Iterator[Node]:
    # Pre-order, left to right; explicit stack keeps deep expressions off the call stack.
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def _named(node: Node) -> List[Node]:
    return [child for child in node.named_children if child.type != "comment"]


def _first_error_position(root: Node) -> Tuple[int, int]:
    for node in _walk(root):
        if node.type == "ERROR" or node.is_missing:
            return node.start_point[0] + 1, node.start_point[1] + 1
    return root.start_point[0] + 1, root.start_point[1] + 1


def _unescape(sequence: str) -> str:
    body = sequence[1:]
    if not body:
        return ""
    head = body[0]
    if body.startswith("u{") and body.endswith("}"):
        return chr(int(body[2:-1], 16))
    if head in {"u", "x"} and len(body) > 1:
        return chr(int(body[1:], 16))
    if head in _SIMPLE_ESCAPES and len(body) == 1:
        return _SIMPLE_ESCAPES[head]
    if head in _LINE_CONTINUATIONS:
        return ""
    return body


def _join_surrogates(text: str) -> str:
    # `\uD83D\uDE00` unescapes to two halves of one code point; lone halves stay as they are.
    return text.encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")


def _number_value(text: str) -> Optional[LiteralValue]:
    cleaned = text.replace("_", "")
    lower = cleaned.lower()
    if lower.endswith("n"):
        # BigInt literals are not plain numbers.
        return None
    try:
        if lower.startswith(("0x", "0o", "0b")):
            return int(cleaned, 0)
        value = float(cleaned)
    except ValueError:
        return None
    if value.is_integer() and abs(value) < 1e21:
        return int(value)
    return value


__all__ = [
    "CallSite",
    "ClassField",
    "Decorator",
    "Literal",
    "SourceParseError",
    "SourceUnit",
    "SUPPORTED_DIALECTS",
    "TypeAnnotation",
    "parse_source",
]
