"""Logging configuration for csslsp.

Records carry a ``document`` field naming the stylesheet a request was
about, so one log file can interleave several open documents. Loggers that
do not set it (pygls, startup code) show ``-``.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

_ROOT_LOGGER_NAME = "csslsp"
_PYGLS_LOGGER_NAME = "pygls"
NO_DOCUMENT = "-"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(document)s] %(message)s"


class _DocumentFieldFilter(logging.Filter):
    """Give every record a ``document`` attribute for the formatter."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "document"):
            record.document = NO_DOCUMENT
        return True


class DocumentLoggerAdapter(logging.LoggerAdapter):
    """Logger bound to one document URI."""

    def process(
        self, msg: Any, kwargs: Mapping[str, Any]
    ) -> tuple[Any, dict[str, Any]]:
        kwargs = dict(kwargs)
        kwargs["extra"] = {**(kwargs.get("extra") or {}), **(self.extra or {})}
        return msg, kwargs


def configure_logging(*, level: str = "INFO", log_file: Path | None = None) -> None:
    """
    Configure logging for csslsp.

    Stdout carries the LSP stream in stdio mode, so records go to stderr
    unless a log file is given. pygls warnings and errors (malformed
    messages, transport failures) go to the same handler.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Optional path to log file. If None, logs to stderr.
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if log_file is not None:
        handler: logging.Handler = logging.FileHandler(log_file)
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        logging.Formatter(fmt=LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    )
    handler.addFilter(_DocumentFieldFilter())
    handler.setLevel(log_level)

    for name, logger_level in (
        (_ROOT_LOGGER_NAME, log_level),
        (_PYGLS_LOGGER_NAME, max(log_level, logging.WARNING)),
    ):
        logger = logging.getLogger(name)
        for old in logger.handlers:
            old.close()
        logger.handlers.clear()
        logger.setLevel(logger_level)
        logger.addHandler(handler)
        logger.propagate = False


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the given name under the csslsp namespace.

    Args:
        name: Logger name (will be prefixed with 'csslsp.').

    Returns:
        Logger instance.
    """
    return logging.getLogger(f"{_ROOT_LOGGER_NAME}.{name}")


def document_logger(
    logger: logging.Logger | logging.LoggerAdapter, uri: str
) -> DocumentLoggerAdapter:
    """Wrap ``logger`` so its records name the document ``uri``."""
    if isinstance(logger, logging.LoggerAdapter):
        logger = logger.logger
    return DocumentLoggerAdapter(logger, {"document": uri})
