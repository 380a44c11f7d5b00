"""Tests for command-line interface."""

from __future__ import annotations

from pathlib import Path

import pytest

import csslsp.cli as cli_mod
from csslsp.cli import parse_args, run


class TestParseArgs:
    """Tests for parse_args function."""

    def test_defaults(self) -> None:
        """stdio by default; TCP would listen on the usual language server port."""
        args = parse_args([])
        assert args.transport == "stdio"
        assert (args.host, args.port) == ("127.0.0.1", 2087)
        assert args.log_level == "INFO"
        assert args.log_file is None

    @pytest.mark.parametrize("flag", ["--debug", "-v"])
    def test_debug_sets_debug_level(self, flag: str) -> None:
        args = parse_args([flag])
        assert args.debug is True
        assert args.log_level == "DEBUG"

    def test_explicit_log_level_overrides_debug(self) -> None:
        args = parse_args(["--debug", "--log-level", "WARNING"])
        assert args.log_level == "WARNING"

    def test_invalid_transport_exits(self) -> None:
        with pytest.raises(SystemExit):
            parse_args(["--transport", "websocket"])


class TestRun:
    """Tests for run function."""

    @pytest.fixture
    def server(self, mocker):
        """Replace server creation and logging setup with mocks."""
        mocker.patch("csslsp.cli.configure_logging")
        server = mocker.Mock()
        mocker.patch("csslsp.cli.create_server", return_value=server)
        return server

    def test_stdio(self, server) -> None:
        """stdio transport starts the server on stdin/stdout."""
        assert run([]) == 0
        server.start_io.assert_called_once_with()
        server.start_tcp.assert_not_called()

    def test_tcp(self, server) -> None:
        """tcp transport starts the server on host and port."""
        assert run(["--transport", "tcp", "--port", "9999"]) == 0
        server.start_tcp.assert_called_once_with("127.0.0.1", 9999)

    def test_passes_knowledge_base_provider(self, server) -> None:
        """The server gets the process-wide knowledge base provider."""
        run([])
        kwargs = cli_mod.create_server.call_args.kwargs
        assert kwargs["get_knowledge_base"] is (
            cli_mod.default_knowledge_base_provider()
        )

    def test_keyboard_interrupt(self, server) -> None:
        """Ctrl-C is a clean exit."""
        server.start_io.side_effect = KeyboardInterrupt
        assert run([]) == 0

    def test_fatal_error(self, server) -> None:
        """An unexpected error exits with status 1."""
        server.start_io.side_effect = RuntimeError("boom")
        assert run([]) == 1

    def test_configures_logging_from_flags(self, server, tmp_path: Path) -> None:
        log_file = tmp_path / "csslsp.log"
        run(["--debug", "--log-file", str(log_file)])
        cli_mod.configure_logging.assert_called_once_with(
            level="DEBUG", log_file=log_file
        )

    def test_knowledge_base_failure_is_fatal(self, server, mocker) -> None:
        """Tables are built before serving; a broken table stops startup."""
        mocker.patch(
            "csslsp.cli.default_knowledge_base_provider",
            return_value=mocker.Mock(side_effect=ValueError("bad unit category")),
        )
        assert run([]) == 1
        server.start_io.assert_not_called()
