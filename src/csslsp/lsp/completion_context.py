"""Completion context determination for CSS documents.

Walks a SyntaxTree from the stylesheet root down to the construct under
the cursor and classifies it into a CompletionContext.
"""

from __future__ import annotations

import re

from csslsp.css.knowledge_base import KnowledgeBase
from csslsp.css.knowledge_base_provider import default_knowledge_base
from csslsp.lsp.parser import function_name, is_closed
from csslsp.lsp.types import (
    CompletionContext,
    CompletionContextKind,
    NodeKind,
    SyntaxNode,
    SyntaxTree,
    TokenSpan,
)

# A number optionally followed by the start of a unit
NUMERIC_PREFIX = re.compile(r"^([+-]?(?:\d+(?:\.\d+)?|\.\d+))([a-zA-Z%]*)$")

_VARIABLE_FUNCTION = "var"
_CUSTOM_PROPERTY_MARKER = "--"


def get_completion_context(
    tree: SyntaxTree,
    offset: int,
    *,
    knowledge_base: KnowledgeBase | None = None,
) -> CompletionContext:
    """
    Get completion context at the given position.

    This is the main entry point for classifying the cursor location.

    Args:
        tree: Parsed stylesheet.
        offset: Cursor position (0-based offset in the tree's source).
        knowledge_base: Property tables used to bind value contexts.

    Returns:
        CompletionContext with kind, enclosing node, current word and prefix.
    """
    if knowledge_base is None:
        knowledge_base = default_knowledge_base()
    offset = max(0, min(offset, len(tree.source)))
    for comment in tree.comments:
        closed = _comment_closed(comment)
        if _inside_literal(comment.start, comment.end, offset, closed):
            return _none_context(offset, tree.root)
    return _resolve_rule_list(tree, tree.root, offset, knowledge_base)


def word_at(text: str, offset: int) -> TokenSpan:
    """
    Find the identifier/number-like word touching ``offset``.

    One leading ``#`` or ``@`` is included; whitespace and other punctuation
    end the word.
    """
    start = offset
    while start > 0 and _is_word_char(text[start - 1]):
        start -= 1
    if start > 0 and text[start - 1] in "#@":
        start -= 1

    end = offset
    while end < len(text) and _is_word_char(text[end]):
        end += 1

    return TokenSpan(text=text[start:end], start=start, end=end)


def _is_word_char(char: str) -> bool:
    return char.isalnum() or char in "-_.%"


def _make_context(
    kind: CompletionContextKind,
    tree: SyntaxTree,
    offset: int,
    node: SyntaxNode | None,
    property_name: str | None = None,
) -> CompletionContext:
    word = word_at(tree.source, offset)
    return CompletionContext(
        kind=kind,
        node=node,
        word=word,
        prefix=tree.source[word.start : offset],
        property_name=property_name,
    )


def _none_context(offset: int, node: SyntaxNode | None) -> CompletionContext:
    return CompletionContext(
        kind=CompletionContextKind.NONE,
        node=node,
        word=TokenSpan(text="", start=offset, end=offset),
        prefix="",
    )


def _comment_closed(comment: TokenSpan) -> bool:
    return len(comment.text) >= 4 and comment.text.endswith("*/")


def _string_closed(tree: SyntaxTree, node: SyntaxNode) -> bool:
    text = tree.text_of(node)
    return len(text) >= 2 and text[-1] == text[0]


def _inside_literal(start: int, end: int, offset: int, closed: bool) -> bool:
    """Past the opening delimiter and, for a closed literal, before its end."""
    if closed:
        return start < offset < end
    return start < offset <= end


def _inside_block(tree: SyntaxTree, block: SyntaxNode, offset: int) -> bool:
    """Strictly after "{" and before a closing "}", if there is one."""
    if offset <= block.start:
        return False
    if is_closed(tree, block, "}"):
        return offset < block.end
    return offset <= block.end


def _resolve_rule_list(
    tree: SyntaxTree,
    container: SyntaxNode,
    offset: int,
    knowledge_base: KnowledgeBase,
) -> CompletionContext:
    """Top level, or the body of a conditional group at-rule."""
    for child in container.children:
        ctx = _resolve_rule(tree, child, offset, knowledge_base)
        if ctx is not None:
            return ctx
    return _make_context(CompletionContextKind.SELECTOR, tree, offset, container)


def _resolve_rule(
    tree: SyntaxTree,
    rule: SyntaxNode,
    offset: int,
    knowledge_base: KnowledgeBase,
) -> CompletionContext | None:
    """Context inside a ruleset or at-rule, or None if the offset is elsewhere."""
    if rule.kind == NodeKind.RULESET:
        block = rule.find_child(NodeKind.BLOCK)
        if block is not None and _inside_block(tree, block, offset):
            return _resolve_declarations(tree, block, offset, knowledge_base)
        selector = rule.find_child(NodeKind.SELECTOR)
        if selector is not None and selector.contains(offset):
            return _make_context(CompletionContextKind.SELECTOR, tree, offset, selector)
        return None

    if rule.kind == NodeKind.AT_RULE:
        name = rule.find_child(NodeKind.IDENTIFIER)
        if name is not None and name.contains(offset):
            return _make_context(CompletionContextKind.AT_RULE_NAME, tree, offset, rule)

        block = rule.find_child(NodeKind.BLOCK)
        if block is not None and _inside_block(tree, block, offset):
            if name is not None and knowledge_base.holds_rules(tree.text_of(name)):
                return _resolve_rule_list(tree, block, offset, knowledge_base)
            return _resolve_declarations(tree, block, offset, knowledge_base)

        # Prelude: between the name and the block or terminating ";"
        head_end = block.start if block is not None else rule.end
        if block is None and tree.source[rule.end - 1 : rule.end] == ";":
            head_end = rule.end - 1
        if name is not None and name.end < offset <= head_end:
            return _none_context(offset, rule)
        return None

    return None


def _resolve_declarations(
    tree: SyntaxTree,
    block: SyntaxNode,
    offset: int,
    knowledge_base: KnowledgeBase,
) -> CompletionContext:
    """Context inside a declaration block."""
    for child in block.children:
        if child.kind == NodeKind.DECLARATION:
            ctx = _resolve_declaration(tree, child, offset, knowledge_base)
        else:
            ctx = _resolve_rule(tree, child, offset, knowledge_base)
        if ctx is not None:
            return ctx

    if offset > 0 and tree.source[offset - 1] == ";":
        # Just closed a declaration
        return _none_context(offset, block)

    return _make_context(CompletionContextKind.PROPERTY_NAME, tree, offset, block)


def _resolve_declaration(
    tree: SyntaxTree,
    declaration: SyntaxNode,
    offset: int,
    knowledge_base: KnowledgeBase,
) -> CompletionContext | None:
    prop = declaration.find_child(NodeKind.PROPERTY)
    value = declaration.find_child(NodeKind.VALUE)
    if prop is None:
        return None

    if value is None:
        if prop.contains(offset):
            return _make_context(
                CompletionContextKind.PROPERTY_NAME, tree, offset, declaration
            )
        return None

    # Name, or whitespace before the colon
    if prop.start <= offset < value.start:
        return _make_context(
            CompletionContextKind.PROPERTY_NAME, tree, offset, declaration
        )

    if value.start <= offset <= value.end:
        return _resolve_value(tree, declaration, value, offset, knowledge_base)

    return None


def _resolve_value(
    tree: SyntaxTree,
    declaration: SyntaxNode,
    value: SyntaxNode,
    offset: int,
    knowledge_base: KnowledgeBase,
) -> CompletionContext:
    prop = declaration.find_child(NodeKind.PROPERTY)
    property_name: str | None = None
    if prop is not None:
        schema = knowledge_base.property_schema(tree.text_of(prop))
        if schema is not None:
            property_name = schema.name

    for node in value.walk():
        if node.kind == NodeKind.STRING and _inside_literal(
            node.start, node.end, offset, _string_closed(tree, node)
        ):
            return _none_context(offset, declaration)

    function = _innermost_open_function(tree, value, offset)
    if (
        function is not None
        and function_name(tree, function).lower() == _VARIABLE_FUNCTION
    ):
        return _make_context(
            CompletionContextKind.VARIABLE_DECLARATION_ARGUMENT,
            tree,
            offset,
            declaration,
            property_name,
        )

    word = word_at(tree.source, offset)
    prefix = tree.source[word.start : offset]
    if NUMERIC_PREFIX.match(prefix):
        kind = CompletionContextKind.NUMERIC_UNIT
    elif prefix.startswith("#"):
        kind = CompletionContextKind.COLOR_VALUE
    elif prefix.startswith(_CUSTOM_PROPERTY_MARKER):
        kind = CompletionContextKind.VARIABLE_REFERENCE
    else:
        kind = CompletionContextKind.PROPERTY_VALUE

    return _make_context(kind, tree, offset, declaration, property_name)


def _innermost_open_function(
    tree: SyntaxTree, node: SyntaxNode, offset: int
) -> SyntaxNode | None:
    """Deepest function call whose argument list contains ``offset``."""
    found: SyntaxNode | None = None
    for child in node.children:
        if child.kind != NodeKind.FUNCTION_CALL:
            continue
        arguments_start = child.start + len(function_name(tree, child)) + 1
        if is_closed(tree, child, ")"):
            inside = arguments_start <= offset < child.end
        else:
            inside = arguments_start <= offset <= child.end
        if inside:
            found = _innermost_open_function(tree, child, offset) or child
    return found
