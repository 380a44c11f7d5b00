"""Error handling utilities for LSP feature handlers.

Completion must stay responsive over half-typed input, so a failing handler
is logged and answered with a fallback instead of an error response. The
fallback is built from the handler's own arguments: resolve echoes the item
it was given, completion answers an empty list.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from collections.abc import Awaitable, Callable
from typing import Any, ParamSpec, TypeVar

from lsprotocol import types

from csslsp.logging import NO_DOCUMENT

P = ParamSpec("P")
R = TypeVar("R")


def request_document_uri(args: tuple[Any, ...]) -> str:
    """URI of the document a request is about, from its params object."""
    for arg in args:
        text_document = getattr(arg, "text_document", None)
        uri = getattr(text_document, "uri", None)
        if isinstance(uri, str):
            return uri
    return NO_DOCUMENT


def _log_failure(
    logger: logging.Logger, feature_name: str, args: tuple[Any, ...]
) -> None:
    uri = request_document_uri(args)
    logger.exception(
        "Error in %s handler for %s",
        feature_name,
        uri,
        extra={"document": uri},
    )


def wrap_handler(
    *,
    logger: logging.Logger,
    feature_name: str,
    default_factory: Callable[P, R],
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """
    Decorator that answers a failing LSP handler with a fallback value.

    Args:
        logger: Logger the traceback is written to.
        feature_name: LSP method name, used in the log message.
        default_factory: Called with the handler's arguments after a failure;
            its return value is the response.

    Returns:
        Decorator function.
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return func(*args, **kwargs)
            except Exception:
                _log_failure(logger, feature_name, args)
                return default_factory(*args, **kwargs)

        return wrapper

    return decorator


def wrap_async_handler(
    *,
    logger: logging.Logger,
    feature_name: str,
    default_factory: Callable[P, R],
) -> Callable[[Callable[P, Awaitable[R]]], Callable[P, Awaitable[R]]]:
    """
    Async variant of wrap_handler.

    Cancellation is not an error: asyncio.CancelledError propagates so that
    the request is cancelled properly.
    """

    def decorator(func: Callable[P, Awaitable[R]]) -> Callable[P, Awaitable[R]]:
        @functools.wraps(func)
        async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
            try:
                return await func(*args, **kwargs)
            except asyncio.CancelledError:
                raise
            except Exception:
                _log_failure(logger, feature_name, args)
                return default_factory(*args, **kwargs)

        return wrapper

    return decorator


def empty_completion_list(*_args: Any, **_kwargs: Any) -> types.CompletionList:
    """Fallback for textDocument/completion."""
    return types.CompletionList(is_incomplete=False, items=[])


def no_result(*_args: Any, **_kwargs: Any) -> None:
    """Fallback for hover and document notifications."""
    return None


def echo_item(item: R, *_args: Any, **_kwargs: Any) -> R:
    """Fallback for completionItem/resolve: the item, unresolved."""
    return item
