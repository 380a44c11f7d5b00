"""Tests for logging configuration."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from csslsp.logging import configure_logging, document_logger, get_logger
from csslsp.lsp.completions import complete
from csslsp.lsp.parser import parse_stylesheet
from csslsp.lsp.types import Document


@pytest.fixture(autouse=True)
def _restore_loggers():
    """Undo configure_logging so other tests see default propagation."""
    yield
    for name in ("csslsp", "pygls"):
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)
        logger.propagate = True


def _read_log(log_file: Path) -> str:
    for handler in logging.getLogger("csslsp").handlers:
        handler.flush()
    return log_file.read_text()


class TestConfigureLogging:
    """Tests for configure_logging function."""

    def test_level(self) -> None:
        configure_logging(level="warning")
        assert logging.getLogger("csslsp").level == logging.WARNING

    def test_reconfigure_replaces_handler(self, tmp_path: Path) -> None:
        configure_logging()
        configure_logging(log_file=tmp_path / "second.log")
        assert len(logging.getLogger("csslsp").handlers) == 1

    def test_record_without_document(self, tmp_path: Path) -> None:
        """Startup records have no document; the field shows a dash."""
        log_file = tmp_path / "csslsp.log"
        configure_logging(log_file=log_file)

        get_logger("main").info("Starting csslsp server")

        content = _read_log(log_file)
        assert "csslsp.main - INFO - [-] Starting csslsp server" in content

    def test_pygls_warnings_share_the_handler(self, tmp_path: Path) -> None:
        log_file = tmp_path / "csslsp.log"
        configure_logging(level="DEBUG", log_file=log_file)
        pygls_logger = logging.getLogger("pygls")

        pygls_logger.debug("protocol chatter")
        pygls_logger.warning("malformed message")

        content = _read_log(log_file)
        assert pygls_logger.level == logging.WARNING
        assert "malformed message" in content
        assert "protocol chatter" not in content


class TestDocumentLogger:
    """Tests for document_logger function."""

    def test_records_name_the_document(self, tmp_path: Path) -> None:
        log_file = tmp_path / "csslsp.log"
        configure_logging(level="DEBUG", log_file=log_file)

        log = document_logger(get_logger("lsp"), "file:///site.css")
        log.debug("Completion request at %s", "0:4")

        content = _read_log(log_file)
        assert "csslsp.lsp - DEBUG - [file:///site.css] Completion request at 0:4" in (
            content
        )

    def test_rebinding_an_adapter(self) -> None:
        first = document_logger(get_logger("lsp"), "file:///a.css")
        second = document_logger(first, "file:///b.css")

        assert second.logger is get_logger("lsp")
        assert second.extra == {"document": "file:///b.css"}

    def test_engine_records_carry_document(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        """Context classification is logged against the document it ran on."""
        source = "body { col"
        with caplog.at_level(logging.DEBUG, logger="csslsp"):
            complete(
                Document(uri="file:///page.css", text=source),
                parse_stylesheet(source),
                len(source),
            )

        record = next(
            r for r in caplog.records if r.name == "csslsp.lsp.completions"
        )
        assert record.document == "file:///page.css"
        assert "kind=property-name" in record.getMessage()
