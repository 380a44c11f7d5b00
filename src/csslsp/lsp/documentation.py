"""Documentation text for completion items, resolved on demand."""

from __future__ import annotations

from csslsp.css.knowledge_base import KnowledgeBase, PropertySchema
from csslsp.css.units import category_of_unit
from csslsp.lsp.completion_context import NUMERIC_PREFIX
from csslsp.lsp.completions import CompletionItem
from csslsp.lsp.types import CompletionKind


def resolve_documentation(
    item: CompletionItem, knowledge_base: KnowledgeBase
) -> str | None:
    """
    Get documentation text for a completion item.

    Args:
        item: A completion item produced by get_completions.
        knowledge_base: Static tables the documentation is drawn from.

    Returns:
        Markdown text, or None if nothing is known about the item.
    """
    if item.kind == CompletionKind.PROPERTY:
        schema = knowledge_base.property_schema(item.label)
        return describe_property(schema) if schema is not None else None

    if item.kind == CompletionKind.AT_RULE:
        return knowledge_base.at_rules.get(item.label)

    if item.kind == CompletionKind.COLOR:
        hex_value = knowledge_base.named_colors.get(item.label)
        if hex_value is not None:
            return f"Named color `{item.label}`: `{hex_value}`"
        return f"Color `{item.label}` used elsewhere in this document"

    if item.kind == CompletionKind.FUNCTION:
        signature = knowledge_base.color_functions.get(item.label, item.detail)
        return f"`{signature}`" if signature is not None else None

    if item.kind == CompletionKind.UNIT:
        match = NUMERIC_PREFIX.match(item.label)
        if match is None:
            return None
        category = category_of_unit(match.group(2))
        return f"Unit `{match.group(2)}` ({category})" if category else None

    if item.kind == CompletionKind.VARIABLE:
        if item.detail:
            return f"`{item.label}: {item.detail}`"
        return None

    return None


def describe_property(schema: PropertySchema) -> str:
    """Description of a property followed by what its value accepts."""
    lines = [schema.description]
    accepted: list[str] = []
    if schema.keywords:
        accepted.append("keywords: " + ", ".join(schema.keywords))
    if schema.functions:
        accepted.append("functions: " + ", ".join(f"{f}()" for f in schema.functions))
    if schema.unit_categories:
        accepted.append("units: " + ", ".join(str(c) for c in schema.unit_categories))
    if schema.accepts_colors:
        accepted.append("colors")
    if schema.accepts_numbers and not schema.unit_categories:
        accepted.append("numbers")
    if accepted:
        lines.append("")
        lines.extend(f"- {entry}" for entry in accepted)
    return "\n".join(lines)
