"""Fixtures for E2E tests."""

from __future__ import annotations

import asyncio
import os
import sys
from collections.abc import AsyncGenerator
from pathlib import Path

import pytest

from tests.lsp.e2e.lsp_client import LspTestClient

_REPO_ROOT = Path(__file__).resolve().parents[3]


def _server_env() -> dict[str, str]:
    """Environment that finds csslsp and tests without an installed package."""
    env = dict(os.environ)
    paths = [str(_REPO_ROOT), str(_REPO_ROOT / "src")]
    if env.get("PYTHONPATH"):
        paths.append(env["PYTHONPATH"])
    env["PYTHONPATH"] = os.pathsep.join(paths)
    return env


@pytest.fixture
async def lsp_server_process() -> AsyncGenerator[asyncio.subprocess.Process, None]:
    """Start the test LSP server as a subprocess speaking LSP over stdio."""
    process = await asyncio.create_subprocess_exec(
        sys.executable,
        "-m",
        "tests.lsp.e2e.server_entry",
        stdin=asyncio.subprocess.PIPE,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.DEVNULL,
        cwd=_REPO_ROOT,
        env=_server_env(),
    )

    yield process

    if process.returncode is None:
        process.terminate()
        try:
            await asyncio.wait_for(process.wait(), timeout=5.0)
        except asyncio.TimeoutError:
            process.kill()
            await process.wait()


@pytest.fixture
async def lsp_client(
    lsp_server_process: asyncio.subprocess.Process,
) -> AsyncGenerator[LspTestClient, None]:
    """Create an LSP client connected to the test server's pipes."""
    assert lsp_server_process.stdin is not None
    assert lsp_server_process.stdout is not None

    yield LspTestClient(
        reader=lsp_server_process.stdout,
        writer=lsp_server_process.stdin,
    )
