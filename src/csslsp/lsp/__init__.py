"""CSS completion engine and LSP types."""

from csslsp.lsp.completion_context import get_completion_context
from csslsp.lsp.completions import (
    CompletionItem,
    CompletionResult,
    complete,
    get_completions,
)
from csslsp.lsp.custom_properties import collect_custom_properties
from csslsp.lsp.edits import TextEdit, build_edit
from csslsp.lsp.parser import parse_stylesheet
from csslsp.lsp.types import (
    CompletionContext,
    CompletionContextKind,
    CompletionKind,
    Document,
    NodeKind,
    SyntaxNode,
    SyntaxTree,
    TokenSpan,
)

__all__ = [
    "CompletionContext",
    "CompletionContextKind",
    "CompletionItem",
    "CompletionKind",
    "CompletionResult",
    "Document",
    "NodeKind",
    "SyntaxNode",
    "SyntaxTree",
    "TextEdit",
    "TokenSpan",
    "build_edit",
    "collect_custom_properties",
    "complete",
    "get_completion_context",
    "get_completions",
    "parse_stylesheet",
]
