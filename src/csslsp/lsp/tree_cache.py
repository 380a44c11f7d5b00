"""Parse trees of open documents, keyed by URI and version."""

from __future__ import annotations

import threading
from typing import Callable, NamedTuple

from csslsp.logging import get_logger
from csslsp.lsp.parser import parse_stylesheet
from csslsp.lsp.types import SyntaxTree


class _Entry(NamedTuple):
    version: int | None
    tree: SyntaxTree


class TreeCache:
    """Thread-safe cache holding the latest parse tree of each document.

    An entry is reused only while both the version and the source text match,
    so a request never sees a tree built from other text.
    """

    def __init__(self, parse: Callable[[str], SyntaxTree] = parse_stylesheet) -> None:
        self._parse = parse
        self._entries: dict[str, _Entry] = {}
        self._lock = threading.Lock()
        self._logger = get_logger("lsp.tree_cache")

    def get(self, uri: str, version: int | None, source: str) -> SyntaxTree:
        with self._lock:
            entry = self._entries.get(uri)
            if (
                entry is not None
                and entry.version == version
                and entry.tree.source == source
            ):
                return entry.tree

        self._logger.debug(
            "Parsing (version %s)", version, extra={"document": uri}
        )
        tree = self._parse(source)
        with self._lock:
            self._entries[uri] = _Entry(version=version, tree=tree)
        return tree

    def evict(self, uri: str) -> None:
        with self._lock:
            self._entries.pop(uri, None)

    def __contains__(self, uri: object) -> bool:
        with self._lock:
            return uri in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
