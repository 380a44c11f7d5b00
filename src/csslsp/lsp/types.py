"""Type definitions for the CSS completion engine."""

from __future__ import annotations

import weakref
from enum import Enum

from typing import NamedTuple


class _StrEnum(str, Enum):
    """String-valued enum that behaves like str at runtime."""

    def __str__(self) -> str:
        return str(self.value)


class NodeKind(_StrEnum):
    """Kind tag of a parsed stylesheet construct."""

    STYLESHEET = "stylesheet"
    RULESET = "ruleset"
    SELECTOR = "selector"
    AT_RULE = "at-rule"
    BLOCK = "block"
    DECLARATION = "declaration"
    PROPERTY = "property"
    VALUE = "value"
    NUMERIC_LITERAL = "numeric-literal"
    FUNCTION_CALL = "function-call"
    IDENTIFIER = "identifier"
    HASH = "hash"
    STRING = "string"


class CompletionContextKind(_StrEnum):
    """What kind of construct the cursor sits inside."""

    SELECTOR = "selector"
    AT_RULE_NAME = "at-rule-name"
    PROPERTY_NAME = "property-name"
    PROPERTY_VALUE = "property-value"
    NUMERIC_UNIT = "numeric-unit"
    COLOR_VALUE = "color-value"
    VARIABLE_REFERENCE = "variable-reference"
    VARIABLE_DECLARATION_ARGUMENT = "variable-declaration-argument"
    NONE = "none"


class CompletionKind(_StrEnum):
    """Kind categorizes completion items."""

    KEYWORD = "keyword"
    FUNCTION = "function"
    COLOR = "color"
    VARIABLE = "variable"
    UNIT = "unit"
    VALUE = "value"
    PROPERTY = "property"
    AT_RULE = "at-rule"
    SELECTOR = "selector"


class TokenSpan(NamedTuple):
    """A token with its position in the original text."""

    text: str
    start: int  # Start offset in original text
    end: int  # End offset in original text (exclusive)


class Document(NamedTuple):
    """Immutable document snapshot."""

    uri: str
    text: str


class SyntaxNode:
    """A parsed construct covering ``[start, end)`` of the source.

    The parent link is a weak reference: children are owned by their parent,
    never the other way around.
    """

    __slots__ = ("kind", "start", "end", "children", "_parent", "__weakref__")

    def __init__(self, kind: NodeKind, start: int, end: int) -> None:
        self.kind = kind
        self.start = start
        self.end = end
        self.children: list[SyntaxNode] = []
        self._parent: weakref.ref[SyntaxNode] | None = None

    @property
    def parent(self) -> SyntaxNode | None:
        if self._parent is None:
            return None
        return self._parent()

    def add_child(self, child: SyntaxNode) -> SyntaxNode:
        child._parent = weakref.ref(self)
        self.children.append(child)
        return child

    def contains(self, offset: int) -> bool:
        """Inclusive containment: a cursor touching either edge counts."""
        return self.start <= offset <= self.end

    def find_child(self, kind: NodeKind) -> SyntaxNode | None:
        for child in self.children:
            if child.kind == kind:
                return child
        return None

    def walk(self):
        """Yield this node and all descendants in document order."""
        yield self
        for child in self.children:
            yield from child.walk()

    def __repr__(self) -> str:
        return f"SyntaxNode({self.kind!s}, {self.start}, {self.end})"


class SyntaxTree(NamedTuple):
    """A parsed stylesheet together with the text it was parsed from."""

    source: str
    root: SyntaxNode
    comments: tuple[TokenSpan, ...] = ()  # Comment spans, document order

    def text_of(self, node: SyntaxNode) -> str:
        return self.source[node.start : node.end]


class CompletionContext(NamedTuple):
    """Context for completion at a specific position."""

    kind: CompletionContextKind
    node: SyntaxNode | None  # Enclosing node (declaration for value contexts)
    word: TokenSpan  # Current word, may be empty
    prefix: str  # Text of the current word before the cursor
    property_name: str | None = None  # Known property bound to a value context
