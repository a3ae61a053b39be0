"""
Tool invocation adapter implementing IToolInvoker over an MCP session.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, TYPE_CHECKING

from mcp_client_cli.abstractions.dto.tools import ToolCallResult
from mcp_client_cli.exceptions import ToolInvocationError

if TYPE_CHECKING:
    from mcp_client_cli.infrastructure.mcp.stdio_session import MCPServerConnection

logger = logging.getLogger(__name__)


def _dump(value: Any) -> str:
    if hasattr(value, "model_dump"):
        value = value.model_dump(mode="json", exclude_none=True)
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(value)


def flatten_content(result: Any) -> str:
    """
    Flatten an MCP CallToolResult into text for the next model turn.

    - text blocks contribute their text
    - any other block (image, resource, ...) is serialized as JSON
    - with no content blocks, structuredContent is serialized as JSON
    """
    blocks = getattr(result, "content", None) or []
    parts: List[str] = []
    for block in blocks:
        if getattr(block, "type", None) == "text":
            parts.append(getattr(block, "text", "") or "")
        else:
            parts.append(_dump(block))
    if not parts:
        structured = getattr(result, "structuredContent", None)
        if structured is not None:
            return _dump(structured)
    return "\n".join(parts)


class MCPToolInvoker:
    """
    Forward tool calls to the MCP server.

    Catalog membership is not checked here; unknown names are sent as-is and
    whatever the server reports is surfaced. Transport errors and error results
    are both raised as ToolInvocationError.
    """

    def __init__(self, connection: "MCPServerConnection") -> None:
        self.connection = connection

    async def invoke(self, name: str, arguments: Dict[str, Any]) -> ToolCallResult:
        logger.info(f"Calling tool {name}")
        try:
            result = await self.connection.call_tool(name, arguments)
        except Exception as e:
            raise ToolInvocationError(name, str(e) or type(e).__name__) from e

        content = flatten_content(result)
        if getattr(result, "isError", False):
            raise ToolInvocationError(name, content or "tool reported an error")

        logger.debug(f"Tool {name} returned {len(content)} chars")
        return ToolCallResult(tool_name=name, content=content)


__all__ = ["MCPToolInvoker", "flatten_content"]
