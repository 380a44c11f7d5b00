"""Collection of custom property declarations across a whole document."""

from __future__ import annotations

from typing import TypeAlias

from csslsp.lsp.types import NodeKind, SyntaxTree

CustomPropertyTable: TypeAlias = dict[str, str]

CUSTOM_PROPERTY_MARKER = "--"


def collect_custom_properties(tree: SyntaxTree) -> CustomPropertyTable:
    """
    Map every declared custom property to its last declared value.

    Declarations anywhere in the document count, including ones after the
    cursor. Declarations without a value are skipped.

    Args:
        tree: Parsed stylesheet.

    Returns:
        Fresh table of name (with leading "--") -> value text.
    """
    table: CustomPropertyTable = {}
    for node in tree.root.walk():
        if node.kind != NodeKind.DECLARATION:
            continue
        prop = node.find_child(NodeKind.PROPERTY)
        value = node.find_child(NodeKind.VALUE)
        if prop is None or value is None:
            continue
        name = tree.text_of(prop)
        if not name.startswith(CUSTOM_PROPERTY_MARKER) or len(name) == 2:
            continue
        value_text = tree.text_of(value).strip()
        if not value_text:
            continue
        table[name] = value_text
    return table
