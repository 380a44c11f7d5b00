"""Minimal LSP client for E2E testing."""

from __future__ import annotations

import asyncio
import json
from typing import Any

_CONTENT_LENGTH = "Content-Length"


def encode_lsp_message(payload: dict[str, Any]) -> bytes:
    """Frame a JSON-RPC payload with its Content-Length header."""
    body = json.dumps(payload).encode("utf-8")
    return f"{_CONTENT_LENGTH}: {len(body)}\r\n\r\n".encode("ascii") + body


async def read_lsp_message(
    reader: asyncio.StreamReader,
    timeout: float = 10.0,
) -> dict[str, Any]:
    """Read one framed message from the server."""
    headers: dict[str, str] = {}
    while True:
        line = await asyncio.wait_for(reader.readline(), timeout=timeout)
        if not line:
            raise EOFError("Server closed its output")
        line_str = line.decode("ascii").strip()
        if not line_str:
            break
        key, _, value = line_str.partition(":")
        headers[key.strip()] = value.strip()

    content_length = int(headers.get(_CONTENT_LENGTH, "0"))
    if content_length == 0:
        raise ValueError(f"No {_CONTENT_LENGTH} header in LSP message")

    body = await asyncio.wait_for(reader.readexactly(content_length), timeout=timeout)
    return json.loads(body.decode("utf-8"))


class LspTestClient:
    """JSON-RPC client over a server's stdio pipes.

    Server-initiated messages (log notifications, registration requests)
    arriving while a response is awaited are kept in ``notifications``.
    """

    def __init__(
        self,
        *,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
    ) -> None:
        self._reader = reader
        self._writer = writer
        self._request_id = 0
        self.notifications: list[dict[str, Any]] = []

    async def _send(self, payload: dict[str, Any]) -> None:
        self._writer.write(encode_lsp_message(payload))
        await self._writer.drain()

    async def send_request(
        self,
        *,
        method: str,
        params: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Send a request and wait for the response carrying its id."""
        self._request_id += 1
        request_id = self._request_id
        request: dict[str, Any] = {
            "jsonrpc": "2.0",
            "id": request_id,
            "method": method,
        }
        if params is not None:
            request["params"] = params
        await self._send(request)

        while True:
            message = await read_lsp_message(self._reader)
            if message.get("id") == request_id and "method" not in message:
                return message
            self.notifications.append(message)

    async def send_notification(
        self,
        *,
        method: str,
        params: dict[str, Any] | None = None,
    ) -> None:
        """Send a notification; no response is expected."""
        notification: dict[str, Any] = {"jsonrpc": "2.0", "method": method}
        if params is not None:
            notification["params"] = params
        await self._send(notification)

    async def initialize(self, *, root_uri: str = "file:///test") -> dict[str, Any]:
        """Run the initialize handshake."""
        response = await self.send_request(
            method="initialize",
            params={
                "processId": None,
                "rootUri": root_uri,
                "capabilities": {},
            },
        )
        await self.send_notification(method="initialized", params={})
        return response

    async def shutdown_exit(self) -> None:
        await self.send_request(method="shutdown")
        await self.send_notification(method="exit")

    async def did_open(
        self,
        *,
        uri: str,
        text: str,
        version: int = 1,
        language_id: str = "css",
    ) -> None:
        await self.send_notification(
            method="textDocument/didOpen",
            params={
                "textDocument": {
                    "uri": uri,
                    "languageId": language_id,
                    "version": version,
                    "text": text,
                }
            },
        )

    async def did_change(self, *, uri: str, text: str, version: int) -> None:
        """Replace the whole document text."""
        await self.send_notification(
            method="textDocument/didChange",
            params={
                "textDocument": {"uri": uri, "version": version},
                "contentChanges": [{"text": text}],
            },
        )

    async def did_close(self, *, uri: str) -> None:
        await self.send_notification(
            method="textDocument/didClose",
            params={"textDocument": {"uri": uri}},
        )

    async def _position_request(
        self, method: str, *, uri: str, line: int, character: int
    ) -> dict[str, Any]:
        return await self.send_request(
            method=method,
            params={
                "textDocument": {"uri": uri},
                "position": {"line": line, "character": character},
            },
        )

    async def completion(
        self, *, uri: str, line: int, character: int
    ) -> dict[str, Any]:
        return await self._position_request(
            "textDocument/completion", uri=uri, line=line, character=character
        )

    async def hover(self, *, uri: str, line: int, character: int) -> dict[str, Any]:
        return await self._position_request(
            "textDocument/hover", uri=uri, line=line, character=character
        )

    async def resolve(self, item: dict[str, Any]) -> dict[str, Any]:
        """Send completionItem/resolve for an item from a completion result."""
        return await self.send_request(method="completionItem/resolve", params=item)
