"""Completion logic for CSS documents.

Routes completion requests based on CompletionContext kind through a fixed
sequence of candidate generators, then filters, deduplicates and attaches
an edit to every surviving item.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Iterator
from typing import NamedTuple

from csslsp.css.colors import is_hex_color
from csslsp.css.knowledge_base import KnowledgeBase, PropertySchema
from csslsp.css.knowledge_base_provider import default_knowledge_base
from csslsp.logging import get_logger
from csslsp.lsp.completion_context import NUMERIC_PREFIX, get_completion_context
from csslsp.lsp.custom_properties import CustomPropertyTable, collect_custom_properties
from csslsp.lsp.edits import TextEdit, build_edit
from csslsp.lsp.types import (
    CompletionContext,
    CompletionContextKind,
    CompletionKind,
    Document,
    NodeKind,
    SyntaxNode,
    SyntaxTree,
)

_logger = get_logger("lsp.completions")

_VARIABLE_FUNCTION = "var"


class CompletionItem(NamedTuple):
    """A completion suggestion."""

    label: str  # Display text, matched against the prefix
    kind: CompletionKind
    insert_text: str | None = None  # Text to insert (if different from label)
    detail: str | None = None

    @property
    def text_to_insert(self) -> str:
        return self.insert_text if self.insert_text is not None else self.label


class CompletionResult(NamedTuple):
    """A completion item together with the edit that applies it."""

    item: CompletionItem
    edit: TextEdit


class CompletionRequest(NamedTuple):
    """Everything a generator may consult."""

    context: CompletionContext
    tree: SyntaxTree
    knowledge_base: KnowledgeBase
    custom_properties: CustomPropertyTable

    @property
    def schema(self) -> PropertySchema | None:
        if self.context.property_name is None:
            return None
        return self.knowledge_base.property_schema(self.context.property_name)


Generator = Callable[[CompletionRequest], Iterable[CompletionItem]]


def complete(
    document: Document,
    tree: SyntaxTree,
    offset: int,
    *,
    knowledge_base: KnowledgeBase | None = None,
) -> list[CompletionResult]:
    """
    Complete at ``offset`` in ``document``.

    Args:
        document: The document snapshot the tree was parsed from.
        tree: Parsed stylesheet of ``document``.
        offset: Cursor position, within ``[0, len(document.text)]``.
        knowledge_base: Static tables; the process-wide one by default.

    Returns:
        Ordered results, each carrying its own edit over the current word.
    """
    if knowledge_base is None:
        knowledge_base = default_knowledge_base()

    ctx = get_completion_context(tree, offset, knowledge_base=knowledge_base)
    _logger.debug(
        "Completion context: kind=%s, prefix=%r, property=%s",
        ctx.kind,
        ctx.prefix,
        ctx.property_name,
        extra={"document": document.uri},
    )

    items = get_completions(ctx, tree, knowledge_base)
    return [
        CompletionResult(item=item, edit=build_edit(ctx.word, item.text_to_insert))
        for item in items
    ]


def get_completions(
    ctx: CompletionContext,
    tree: SyntaxTree,
    knowledge_base: KnowledgeBase,
) -> list[CompletionItem]:
    """
    Get completion items based on the completion context.

    Runs the generators listed for the context kind in GENERATOR_ORDER and
    ranks their output.

    Args:
        ctx: The completion context from the resolver.
        tree: Parsed stylesheet.
        knowledge_base: Static property/color/unit tables.

    Returns:
        Filtered, deduplicated items in generator order.
    """
    generators = GENERATOR_ORDER.get(ctx.kind, ())
    if not generators:
        return []

    request = CompletionRequest(
        context=ctx,
        tree=tree,
        knowledge_base=knowledge_base,
        custom_properties=collect_custom_properties(tree),
    )
    candidates = (item for generator in generators for item in generator(request))
    return rank_candidates(candidates, ctx.prefix)


def rank_candidates(
    candidates: Iterable[CompletionItem], prefix: str
) -> list[CompletionItem]:
    """
    Filter by prefix and drop duplicates, keeping the first of each.

    An item matches when its label or its insert text starts with ``prefix``
    (case-sensitive). Function items are keyed apart from other kinds, so a
    color function and a same-named color literal both survive.
    """
    seen: set[tuple[str, bool]] = set()
    ranked: list[CompletionItem] = []
    for item in candidates:
        if not _matches_prefix(item, prefix):
            continue
        key = (item.label, item.kind == CompletionKind.FUNCTION)
        if key in seen:
            continue
        seen.add(key)
        ranked.append(item)
    return ranked


def _matches_prefix(item: CompletionItem, prefix: str) -> bool:
    return item.label.startswith(prefix) or item.text_to_insert.startswith(prefix)


# Generators


def _at_rule_names(request: CompletionRequest) -> Iterator[CompletionItem]:
    for name, description in request.knowledge_base.at_rules.items():
        yield CompletionItem(
            label=name, kind=CompletionKind.AT_RULE, detail=description
        )


def _tag_selectors(request: CompletionRequest) -> Iterator[CompletionItem]:
    for tag in request.knowledge_base.tag_selectors:
        yield CompletionItem(label=tag, kind=CompletionKind.SELECTOR)


def _property_names(request: CompletionRequest) -> Iterator[CompletionItem]:
    for name, schema in request.knowledge_base.properties.items():
        yield CompletionItem(
            label=name, kind=CompletionKind.PROPERTY, detail=schema.description
        )


def _value_keywords(request: CompletionRequest) -> Iterator[CompletionItem]:
    schema = request.schema
    if schema is None:
        return
    for keyword in schema.keywords:
        yield CompletionItem(label=keyword, kind=CompletionKind.KEYWORD)


def _value_functions(request: CompletionRequest) -> Iterator[CompletionItem]:
    schema = request.schema
    if schema is None:
        return
    for name in schema.functions:
        yield CompletionItem(
            label=name,
            kind=CompletionKind.FUNCTION,
            insert_text=f"{name}(",
            detail=f"{name}()",
        )


def _named_colors(request: CompletionRequest) -> Iterator[CompletionItem]:
    schema = request.schema
    if schema is None or not schema.accepts_colors:
        return
    for name, hex_value in request.knowledge_base.named_colors.items():
        yield CompletionItem(label=name, kind=CompletionKind.COLOR, detail=hex_value)


def _color_functions(request: CompletionRequest) -> Iterator[CompletionItem]:
    schema = request.schema
    if schema is None or not schema.accepts_colors:
        return
    for name, signature in request.knowledge_base.color_functions.items():
        yield CompletionItem(
            label=name,
            kind=CompletionKind.FUNCTION,
            insert_text=f"{name}(",
            detail=signature,
        )


def _unit_examples(request: CompletionRequest) -> Iterator[CompletionItem]:
    schema = request.schema
    if schema is None:
        return
    for suffix, category in request.knowledge_base.units_of(schema):
        yield CompletionItem(
            label=f"0{suffix}", kind=CompletionKind.UNIT, detail=str(category)
        )


def _numeric_units(request: CompletionRequest) -> Iterator[CompletionItem]:
    match = NUMERIC_PREFIX.match(request.context.prefix)
    if match is None:
        return
    number = match.group(1)

    for suffix, category in request.knowledge_base.units_of(request.schema):
        label = f"{number}{suffix}"
        yield CompletionItem(
            label=label,
            kind=CompletionKind.UNIT,
            insert_text=label,
            detail=str(category),
        )


def _reused_colors(request: CompletionRequest) -> Iterator[CompletionItem]:
    ctx = request.context
    schema = request.schema
    if schema is not None and not schema.accepts_colors:
        return
    if schema is None and ctx.kind == CompletionContextKind.PROPERTY_VALUE:
        return

    tree = request.tree
    for node in tree.root.walk():
        if node.kind != NodeKind.HASH or _inside_declaration(node) is None:
            continue
        if node.start == ctx.word.start and node.end == ctx.word.end:
            continue  # The token being typed
        text = tree.text_of(node)
        if is_hex_color(text):
            yield CompletionItem(label=text, kind=CompletionKind.COLOR)


def _reused_values(request: CompletionRequest) -> Iterator[CompletionItem]:
    """Whole values of other declarations of the same property."""
    ctx = request.context
    tree = request.tree
    current = ctx.node
    if current is None or current.kind != NodeKind.DECLARATION:
        return
    current_prop = current.find_child(NodeKind.PROPERTY)
    if current_prop is None:
        return
    property_text = tree.text_of(current_prop).lower()

    for node in tree.root.walk():
        if node.kind != NodeKind.DECLARATION or node is current:
            continue
        prop = node.find_child(NodeKind.PROPERTY)
        value = node.find_child(NodeKind.VALUE)
        if prop is None or value is None:
            continue
        if tree.text_of(prop).lower() != property_text:
            continue
        value_text = tree.text_of(value).strip()
        if value_text and not is_hex_color(value_text):
            yield CompletionItem(label=value_text, kind=CompletionKind.VALUE)


def _variable_references(request: CompletionRequest) -> Iterator[CompletionItem]:
    for name, value in request.custom_properties.items():
        yield CompletionItem(
            label=name,
            kind=CompletionKind.VARIABLE,
            insert_text=f"{_VARIABLE_FUNCTION}({name})",
            detail=value,
        )


def _variable_arguments(request: CompletionRequest) -> Iterator[CompletionItem]:
    for name, value in request.custom_properties.items():
        yield CompletionItem(
            label=name, kind=CompletionKind.VARIABLE, insert_text=name, detail=value
        )


def _inside_declaration(node: SyntaxNode) -> SyntaxNode | None:
    parent = node.parent
    while parent is not None:
        if parent.kind == NodeKind.DECLARATION:
            return parent
        parent = parent.parent
    return None


# The order decides which duplicate survives ranking.
GENERATOR_ORDER: dict[CompletionContextKind, tuple[Generator, ...]] = {
    CompletionContextKind.SELECTOR: (_at_rule_names, _tag_selectors),
    CompletionContextKind.AT_RULE_NAME: (_at_rule_names,),
    CompletionContextKind.PROPERTY_NAME: (_property_names,),
    CompletionContextKind.PROPERTY_VALUE: (
        _value_keywords,
        _value_functions,
        _named_colors,
        _color_functions,
        _unit_examples,
        _reused_colors,
        _reused_values,
        _variable_references,
    ),
    CompletionContextKind.NUMERIC_UNIT: (_numeric_units,),
    CompletionContextKind.COLOR_VALUE: (_reused_colors,),
    CompletionContextKind.VARIABLE_REFERENCE: (_variable_references,),
    CompletionContextKind.VARIABLE_DECLARATION_ARGUMENT: (_variable_arguments,),
    CompletionContextKind.NONE: (),
}
