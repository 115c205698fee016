"""Helper functions for E2E tests: in-memory MCP clients and real server processes."""
from __future__ import annotations

import json
import os
import subprocess
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator

from mcp import ClientSession
from mcp.shared.memory import create_connected_server_and_client_session
from mcp.types import LATEST_PROTOCOL_VERSION

from toolbox_mcp_server.mcp_server import McpServer


@asynccontextmanager
async def connect(server: McpServer) -> AsyncIterator[ClientSession]:
    """Open an initialized client session talking to server over memory streams."""
    async with create_connected_server_and_client_session(server.server) as client:
        yield client


async def call_tool(client: ClientSession, name: str, args: dict[str, Any] | None = None) -> dict[str, Any]:
    """Call an MCP tool and return {"isError": ..., "text": ...}.

    Args:
        client: Connected client session
        name: Tool name (e.g., "read_file", "find")
        args: Tool arguments as dict

    Returns:
        The error flag and the single text item of the envelope.
    """
    result = await client.call_tool(name, args or {})
    assert len(result.content) == 1
    return {"isError": bool(result.isError), "text": result.content[0].text}


async def call_json_tool(client: ClientSession, name: str, args: dict[str, Any] | None = None) -> dict[str, Any]:
    """Call a document-store tool and parse its JSON text."""
    result = await call_tool(client, name, args)
    return {"isError": result["isError"], **json.loads(result["text"])}


async def list_tools(client: ClientSession) -> list[dict[str, Any]]:
    """List all available MCP tools as plain dicts."""
    result = await client.list_tools()
    return [tool.model_dump() for tool in result.tools]


# ------------------------------------------------------------------------------
# Server processes - the real CLI over stdio pipes
# ------------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parents[2]


def start_server(*args: str) -> subprocess.Popen:
    """Start ``python <args>`` from the project root with piped stdio."""
    return subprocess.Popen(
        [sys.executable, *args],
        cwd=PROJECT_ROOT,
        stdin=subprocess.PIPE,
        stdout=subprocess.PIPE,
        stderr=subprocess.PIPE,
        env={**os.environ, "PYTHONUNBUFFERED": "1", "TOOLBOX_LOG_LEVEL": "INFO"},
    )


def initialize(proc: subprocess.Popen) -> dict[str, Any]:
    """Send the MCP initialize request and return the server's reply."""
    request = {
        "jsonrpc": "2.0",
        "id": 1,
        "method": "initialize",
        "params": {
            "protocolVersion": LATEST_PROTOCOL_VERSION,
            "capabilities": {},
            "clientInfo": {"name": "toolbox-tests", "version": "0"},
        },
    }
    proc.stdin.write(json.dumps(request).encode() + b"\n")
    proc.stdin.flush()
    return json.loads(proc.stdout.readline())


def finish(proc: subprocess.Popen) -> str:
    """Kill the process if it is still running; return everything it logged."""
    if proc.poll() is None:
        proc.kill()
        proc.wait()
    proc.stdin.close()
    proc.stdout.close()
    stderr = proc.stderr.read().decode("utf-8", errors="replace")
    proc.stderr.close()
    return stderr
