"""Adapter module for converting between internal types and LSP protocol types."""

from __future__ import annotations

from typing import Any

from lsprotocol import types
from pygls.workspace import TextDocument

from csslsp.lsp.completions import CompletionItem as InternalCompletionItem
from csslsp.lsp.completions import CompletionResult
from csslsp.lsp.edits import TextEdit
from csslsp.lsp.types import CompletionKind

__all__ = [
    "completion_kind_to_lsp",
    "from_lsp_data",
    "offset_to_position",
    "position_to_offset",
    "to_lsp_completion_item",
    "to_lsp_range",
]

_COMPLETION_KIND_TO_LSP: dict[CompletionKind, types.CompletionItemKind] = {
    CompletionKind.KEYWORD: types.CompletionItemKind.Keyword,
    CompletionKind.FUNCTION: types.CompletionItemKind.Function,
    CompletionKind.COLOR: types.CompletionItemKind.Color,
    CompletionKind.VARIABLE: types.CompletionItemKind.Variable,
    CompletionKind.UNIT: types.CompletionItemKind.Unit,
    CompletionKind.VALUE: types.CompletionItemKind.Value,
    CompletionKind.PROPERTY: types.CompletionItemKind.Property,
    CompletionKind.AT_RULE: types.CompletionItemKind.Keyword,
    CompletionKind.SELECTOR: types.CompletionItemKind.Class,
}


def position_to_offset(document: TextDocument, position: types.Position) -> int:
    """
    Convert LSP Position (line, character) to document offset.

    ``position.character`` is in the client's units (UTF-16 unless another
    encoding was negotiated); the document's position codec converts it.

    Args:
        document: The text document
        position: LSP position with 0-based line and character

    Returns:
        0-based offset in the document
    """
    lines = document.lines
    offset = 0

    for i in range(min(position.line, len(lines))):
        offset += len(lines[i])

    if position.line < len(lines):
        line = lines[position.line].rstrip("\r\n")
        column = document.position_codec.position_from_client_units(
            lines, position
        ).character
        offset += min(column, len(line))

    return offset


def offset_to_position(document: TextDocument, offset: int) -> types.Position:
    """
    Convert a document offset to an LSP Position.

    Args:
        document: The text document
        offset: 0-based offset, clamped to the document

    Returns:
        LSP position with 0-based line and character in client units
    """
    remaining = max(0, offset)
    lines = document.lines
    codec = document.position_codec

    for line_number, line in enumerate(lines):
        content_length = len(line.rstrip("\r\n"))
        if remaining < len(line) or remaining <= content_length:
            # Inside the line terminator clamps to the end of the content
            column = min(remaining, content_length)
            return codec.position_to_client_units(
                lines, types.Position(line=line_number, character=column)
            )
        remaining -= len(line)

    if not lines:
        return types.Position(line=0, character=0)
    if lines[-1].endswith("\n"):
        return types.Position(line=len(lines), character=0)
    return codec.position_to_client_units(
        lines, types.Position(line=len(lines) - 1, character=len(lines[-1]))
    )


def to_lsp_range(document: TextDocument, edit: TextEdit) -> types.Range:
    return types.Range(
        start=offset_to_position(document, edit.start),
        end=offset_to_position(document, edit.end),
    )


def completion_kind_to_lsp(kind: CompletionKind) -> types.CompletionItemKind:
    """
    Map internal CompletionKind to LSP CompletionItemKind.

    Args:
        kind: Internal completion kind enum

    Returns:
        LSP CompletionItemKind enum value
    """
    return _COMPLETION_KIND_TO_LSP.get(kind, types.CompletionItemKind.Text)


def to_lsp_completion_item(
    result: CompletionResult,
    document: TextDocument | None = None,
) -> types.CompletionItem:
    """
    Convert an internal completion result to an LSP CompletionItem.

    Args:
        result: Internal completion item and its edit
        document: Document the edit applies to; without it no text_edit is set

    Returns:
        LSP-compatible CompletionItem. ``data`` carries what
        completionItem/resolve needs to rebuild the internal item.
    """
    item = result.item
    completion_item = types.CompletionItem(
        label=item.label,
        detail=item.detail,
        kind=completion_kind_to_lsp(item.kind),
        insert_text=item.insert_text,
        data={"kind": str(item.kind), "detail": item.detail},
    )

    if document is not None:
        completion_item.text_edit = types.TextEdit(
            range=to_lsp_range(document, result.edit),
            new_text=result.edit.new_text,
        )

    return completion_item


def from_lsp_data(item: types.CompletionItem) -> InternalCompletionItem | None:
    """Rebuild the internal item from an LSP item's ``data``, if present."""
    data: Any = item.data
    if not isinstance(data, dict):
        return None
    try:
        kind = CompletionKind(data.get("kind"))
    except ValueError:
        return None
    detail = data.get("detail")
    return InternalCompletionItem(
        label=item.label,
        kind=kind,
        insert_text=item.insert_text,
        detail=detail if isinstance(detail, str) else None,
    )
