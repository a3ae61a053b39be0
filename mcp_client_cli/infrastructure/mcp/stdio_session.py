"""
MCP server connection over stdio.

Responsibilities:
- Choose the command that runs a server script (.py with this interpreter, .js with node)
- Launch the server, perform the MCP handshake and own the session lifetime
- Expose the two raw operations the rest of the client needs:
  - list_tools() -> list of MCP Tool descriptors
  - call_tool(name, arguments) -> MCP CallToolResult

Notes:
- The connection is opened once and closed once; any call after close raises
  ServerConnectionError.
- Failures while connecting are normalized into ServerConnectionError; failures
  during call_tool propagate so the invoker can decide how to surface them.
"""

from __future__ import annotations

import logging
import shutil
import sys
from contextlib import AsyncExitStack
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from mcp import ClientSession, StdioServerParameters
from mcp.client.stdio import stdio_client

from mcp_client_cli.exceptions import ServerConnectionError

logger = logging.getLogger(__name__)


def resolve_server_command(server_script_path: str) -> Tuple[str, List[str]]:
    """
    Map a server script path to the (command, args) pair that launches it.

    Raises:
        ServerConnectionError: If the script is neither a .py nor a .js file
    """
    suffix = Path(server_script_path).suffix.lower()
    if suffix == ".py":
        command = sys.executable or ("python" if sys.platform == "win32" else "python3")
    elif suffix == ".js":
        command = shutil.which("node") or "node"
    else:
        raise ServerConnectionError("Server script must be a .js or .py file")
    return command, [server_script_path]


class MCPServerConnection:
    """
    A live stdio session with one MCP server process.

    Usage:
        connection = MCPServerConnection("weather_server.py")
        await connection.connect()
        tools = await connection.list_tools()
        ...
        await connection.aclose()
    """

    def __init__(
        self,
        server_script_path: str,
        env: Optional[Dict[str, str]] = None,
    ) -> None:
        self.server_script_path = server_script_path
        self.env = env
        self._exit_stack = AsyncExitStack()
        self._session: Optional[ClientSession] = None
        self._closed = False

    @property
    def is_connected(self) -> bool:
        return self._session is not None and not self._closed

    async def connect(self) -> None:
        if self._closed:
            raise ServerConnectionError("Connection already closed")
        if self._session is not None:
            return

        command, args = resolve_server_command(self.server_script_path)
        params = StdioServerParameters(command=command, args=args, env=self.env)
        logger.info(f"Launching MCP server: {command} {' '.join(args)}")
        try:
            read, write = await self._exit_stack.enter_async_context(stdio_client(params))
            session = await self._exit_stack.enter_async_context(ClientSession(read, write))
            await session.initialize()
        except Exception as e:
            await self._exit_stack.aclose()
            self._closed = True
            raise ServerConnectionError(f"Failed to connect to MCP server: {e}") from e
        self._session = session

    def _require_session(self) -> ClientSession:
        if self._closed:
            raise ServerConnectionError("Connection already closed")
        if self._session is None:
            raise ServerConnectionError("Not connected; call connect() first")
        return self._session

    async def list_tools(self) -> List[Any]:
        session = self._require_session()
        try:
            result = await session.list_tools()
        except Exception as e:
            raise ServerConnectionError(f"Tool discovery failed: {e}") from e
        return list(result.tools)

    async def call_tool(self, name: str, arguments: Dict[str, Any]) -> Any:
        session = self._require_session()
        return await session.call_tool(name, arguments)

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._session = None
        await self._exit_stack.aclose()

    async def __aenter__(self) -> "MCPServerConnection":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


__all__ = ["MCPServerConnection", "resolve_server_command"]
