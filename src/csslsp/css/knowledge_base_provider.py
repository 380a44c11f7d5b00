from __future__ import annotations

import threading
from typing import Callable, TypeAlias

from csslsp.css.knowledge_base import KnowledgeBase, build_knowledge_base
from csslsp.logging import get_logger

KnowledgeBaseBuilder: TypeAlias = Callable[[], KnowledgeBase]
KnowledgeBaseProvider: TypeAlias = Callable[[], KnowledgeBase]

__all__ = [
    "KnowledgeBaseBuilder",
    "KnowledgeBaseProvider",
    "make_cached_knowledge_base_provider",
    "default_knowledge_base_provider",
    "default_knowledge_base",
]


def make_cached_knowledge_base_provider(
    builder: KnowledgeBaseBuilder,
) -> KnowledgeBaseProvider:
    """Create a cached provider that calls builder once and caches result.

    Thread-safe: ensures builder is called exactly once even under concurrent access.
    """

    cache: KnowledgeBase | None = None
    _lock = threading.Lock()
    _logger = get_logger("css.knowledge_base_provider")

    def provider() -> KnowledgeBase:
        nonlocal cache
        # Double-checked locking: check cache without lock first
        if cache is None:
            with _lock:
                if cache is None:
                    _logger.debug("Knowledge base cache miss - building tables")
                    cache = builder()
        return cache

    return provider


_DEFAULT_PROVIDER = make_cached_knowledge_base_provider(build_knowledge_base)


def default_knowledge_base_provider() -> KnowledgeBaseProvider:
    """Return the process-wide provider."""
    return _DEFAULT_PROVIDER


def default_knowledge_base() -> KnowledgeBase:
    return _DEFAULT_PROVIDER()
