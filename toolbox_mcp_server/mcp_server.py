"""MCP server bound to stdio, serving one tool catalog.

This module binds a ToolCatalog and its provider session to the MCP SDK's
low-level Server and runs it over standard input/output.

Lifecycle:
    1. Open the session (document store: connect and bind the database).
       A StartupFailure here propagates and the transport is never opened.
    2. Serve tools/list and tools/call over stdio, one request at a time.
    3. On SIGINT/SIGTERM or end of input, stop serving and close the session.

Diagnostics go through logging (stderr); stdout carries only protocol frames.
"""

import logging
import signal
from typing import Any

import anyio
from anyio import CancelScope
from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from . import __version__
from .handler_registry import ToolCatalog
from .request_processor import RequestProcessor
from .stdin_bridge import stdin_lines

logger = logging.getLogger(__name__)


class McpServer:
    """MCP server exposing one catalog over stdio.

    Usage:
        >>> server = McpServer(filesystem_catalog, FilesystemSession())
        >>> anyio.run(server.run)

    Attributes:
        _catalog: Frozen tool catalog advertised by tools/list.
        _session: Provider session shared by every handler call.
        _processor: Router that turns tools/call requests into envelopes.
        server: The SDK server with list_tools/call_tool handlers registered.
    """

    def __init__(self, catalog: ToolCatalog, session: Any, *, version: str = __version__) -> None:
        if not catalog.is_frozen:
            catalog.freeze()
        self._catalog = catalog
        self._session = session
        self._version = version
        self._processor = RequestProcessor(catalog, session)
        self.server = self._build_server()

    @property
    def processor(self) -> RequestProcessor:
        return self._processor

    def _build_server(self) -> Server:
        server: Server = Server(self._catalog.name, version=self._version)

        @server.list_tools()
        async def list_tools() -> list[types.Tool]:
            return [descriptor.to_mcp_tool() for descriptor in self._catalog.list_tools()]

        # The router validates arguments itself and owns the error format
        @server.call_tool(validate_input=False)
        async def call_tool(name: str, arguments: dict[str, Any]) -> types.CallToolResult:
            response = await self._processor.dispatch(name, arguments)
            return response.to_call_tool_result()

        return server

    async def run(self) -> None:
        """Open the session, serve until signalled or stdin closes, then close."""
        async with self._session:
            async with anyio.create_task_group() as tg:
                tg.start_soon(self._watch_signals, tg.cancel_scope)
                await self._serve_stdio()
                tg.cancel_scope.cancel()
        logger.info("MCP %s server stopped", self._catalog.name)

    async def _serve_stdio(self) -> None:
        async with stdin_lines() as lines:
            # The transport only iterates stdin, so the bridged stream stands in for the file
            async with stdio_server(stdin=lines) as (read_stream, write_stream):  # type: ignore[arg-type]
                logger.info("MCP %s server running on stdio", self._catalog.name)
                await self.server.run(
                    read_stream,
                    write_stream,
                    self.server.create_initialization_options(),
                )

    async def _watch_signals(self, scope: CancelScope) -> None:
        with anyio.open_signal_receiver(signal.SIGINT, signal.SIGTERM) as signals:
            async for signum in signals:
                logger.info("Received %s, shutting down", signal.Signals(signum).name)
                scope.cancel()
                return
