"""CSS LSP Server using pygls 2.0.

Provides completion, completion item resolution and hover for stylesheets.
"""

from __future__ import annotations

import logging

from lsprotocol import types
from pygls.lsp.server import LanguageServer
from pygls.workspace import TextDocument

from csslsp.css.knowledge_base_provider import (
    KnowledgeBaseProvider,
    default_knowledge_base_provider,
)
from csslsp.logging import document_logger, get_logger
from csslsp.lsp.adapter import (
    from_lsp_data as _from_lsp_data,
    position_to_offset as _position_to_offset,
    to_lsp_completion_item as _to_lsp_completion_item,
)
from csslsp.lsp.completions import complete
from csslsp.lsp.documentation import resolve_documentation
from csslsp.lsp.error_handling import (
    echo_item,
    empty_completion_list,
    no_result,
    wrap_async_handler,
    wrap_handler,
)
from csslsp.lsp.hover import get_hover
from csslsp.lsp.tree_cache import TreeCache
from csslsp.lsp.types import Document, SyntaxTree

SERVER_NAME = "csslsp"
SERVER_VERSION = "v0.1.0"
TRIGGER_CHARACTERS = [":", "-", "@", "#", "("]


def create_server(
    *,
    get_knowledge_base: KnowledgeBaseProvider | None = None,
    logger: logging.Logger | None = None,
    tree_cache: TreeCache | None = None,
) -> LanguageServer:
    """
    Create and configure the LSP server.

    Args:
        get_knowledge_base: Provider of the static CSS tables. Defaults to the
            process-wide cached provider.
        logger: Optional logger instance. If None, uses default csslsp.lsp logger.
        tree_cache: Cache of parse trees for open documents.

    Returns:
        Configured LanguageServer instance.
    """
    if logger is None:
        logger = get_logger("lsp")
    if get_knowledge_base is None:
        get_knowledge_base = default_knowledge_base_provider()
    if tree_cache is None:
        tree_cache = TreeCache()

    server = LanguageServer(SERVER_NAME, SERVER_VERSION)

    def _tree_for(document: TextDocument) -> SyntaxTree:
        return tree_cache.get(document.uri, document.version, document.source)

    @server.feature(
        types.TEXT_DOCUMENT_COMPLETION,
        types.CompletionOptions(
            trigger_characters=TRIGGER_CHARACTERS,
            resolve_provider=True,
        ),
    )
    @wrap_handler(
        logger=logger,
        feature_name="textDocument/completion",
        default_factory=empty_completion_list,
    )
    def completion(params: types.CompletionParams) -> types.CompletionList:
        """Handle textDocument/completion requests."""
        log = document_logger(logger, params.text_document.uri)
        log.debug("Completion request at %s", params.position)

        document = server.workspace.get_text_document(params.text_document.uri)
        offset = _position_to_offset(document, params.position)

        results = complete(
            Document(uri=document.uri, text=document.source),
            _tree_for(document),
            offset,
            knowledge_base=get_knowledge_base(),
        )

        lsp_items = [_to_lsp_completion_item(result, document) for result in results]
        log.debug("Returning %d completion items", len(lsp_items))
        return types.CompletionList(is_incomplete=False, items=lsp_items)

    @server.feature(types.COMPLETION_ITEM_RESOLVE)
    @wrap_handler(
        logger=logger,
        feature_name="completionItem/resolve",
        default_factory=echo_item,
    )
    def completion_item_resolve(item: types.CompletionItem) -> types.CompletionItem:
        """Attach documentation to a completion item the client selected."""
        internal = _from_lsp_data(item)
        if internal is None:
            return item
        documentation = resolve_documentation(internal, get_knowledge_base())
        if documentation is not None:
            item.documentation = types.MarkupContent(
                kind=types.MarkupKind.Markdown,
                value=documentation,
            )
        return item

    @server.feature(types.TEXT_DOCUMENT_HOVER)
    @wrap_handler(
        logger=logger,
        feature_name="textDocument/hover",
        default_factory=no_result,
    )
    def hover(params: types.HoverParams) -> types.Hover | None:  # type: ignore[misc]
        """Handle textDocument/hover requests."""
        document_logger(logger, params.text_document.uri).debug(
            "Hover request at %s", params.position
        )

        document = server.workspace.get_text_document(params.text_document.uri)
        offset = _position_to_offset(document, params.position)

        text = get_hover(
            _tree_for(document), offset, knowledge_base=get_knowledge_base()
        )
        if text is None:
            return None

        return types.Hover(
            contents=types.MarkupContent(kind=types.MarkupKind.Markdown, value=text),
        )

    @server.feature(types.TEXT_DOCUMENT_DID_OPEN)
    @wrap_async_handler(
        logger=logger,
        feature_name="textDocument/didOpen",
        default_factory=no_result,
    )
    async def did_open(params: types.DidOpenTextDocumentParams) -> None:
        """Parse a newly opened document."""
        document = server.workspace.get_text_document(params.text_document.uri)
        document_logger(logger, document.uri).debug(
            "Document opened (version %s)", document.version
        )
        _tree_for(document)

    @server.feature(types.TEXT_DOCUMENT_DID_CHANGE)
    @wrap_async_handler(
        logger=logger,
        feature_name="textDocument/didChange",
        default_factory=no_result,
    )
    async def did_change(params: types.DidChangeTextDocumentParams) -> None:
        """Reparse a changed document."""
        document = server.workspace.get_text_document(params.text_document.uri)
        document_logger(logger, document.uri).debug(
            "Document changed (version %s)", document.version
        )
        _tree_for(document)

    @server.feature(types.TEXT_DOCUMENT_DID_CLOSE)
    @wrap_async_handler(
        logger=logger,
        feature_name="textDocument/didClose",
        default_factory=no_result,
    )
    async def did_close(params: types.DidCloseTextDocumentParams) -> None:
        """Drop the cached tree of a closed document."""
        uri = params.text_document.uri
        document_logger(logger, uri).debug("Document closed")
        tree_cache.evict(uri)

    return server
