"""Hover functionality for CSS documents.

Provides hover text for property names, at-rule names and named colors
based on cursor position and the knowledge base.
"""

from __future__ import annotations

from csslsp.css.knowledge_base import KnowledgeBase
from csslsp.css.knowledge_base_provider import default_knowledge_base
from csslsp.lsp.completion_context import get_completion_context
from csslsp.lsp.documentation import describe_property
from csslsp.lsp.types import CompletionContextKind, SyntaxTree


def get_hover(
    tree: SyntaxTree,
    offset: int,
    *,
    knowledge_base: KnowledgeBase | None = None,
) -> str | None:
    """
    Get hover text at the given cursor position.

    Args:
        tree: Parsed stylesheet.
        offset: Cursor position (0-based offset in the tree's source).
        knowledge_base: Static tables; the process-wide one by default.

    Returns:
        Markdown text, or None if the cursor is not on a known name.
    """
    if knowledge_base is None:
        knowledge_base = default_knowledge_base()

    ctx = get_completion_context(tree, offset, knowledge_base=knowledge_base)
    word = ctx.word.text
    if not word:
        return None

    if ctx.kind == CompletionContextKind.PROPERTY_NAME:
        schema = knowledge_base.property_schema(word)
        if schema is None:
            return None
        return f"**{schema.name}**\n\n{describe_property(schema)}"

    if ctx.kind == CompletionContextKind.AT_RULE_NAME:
        description = knowledge_base.at_rules.get(word.lower())
        if description is None:
            return None
        return f"**{word.lower()}**\n\n{description}"

    if ctx.kind == CompletionContextKind.PROPERTY_VALUE:
        hex_value = knowledge_base.named_colors.get(word.lower())
        if hex_value is not None:
            return f"**{word}**: `{hex_value}`"

    return None
