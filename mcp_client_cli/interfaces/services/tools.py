"""
Tool catalog and invocation ports.
"""
from __future__ import annotations
from typing import Protocol, List, Optional, Dict, Any, TYPE_CHECKING

if TYPE_CHECKING:
    from mcp_client_cli.abstractions.dto.tools import ToolDescriptor, ToolCallResult


class IToolCatalog(Protocol):
    def list_tools(self) -> List["ToolDescriptor"]:
        ...
    def get_tool(self, name: str) -> Optional["ToolDescriptor"]:
        ...
    def to_openai_tools(self) -> List[Dict[str, Any]]:
        ...


class IToolInvoker(Protocol):
    async def invoke(self, name: str, arguments: Dict[str, Any]) -> "ToolCallResult":
        ...


__all__ = ["IToolCatalog", "IToolInvoker"]
