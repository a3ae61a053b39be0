"""
Tool catalog built from MCP discovery results, implementing IToolCatalog.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, TYPE_CHECKING

from mcp_client_cli.abstractions.dto.tools import ToolDescriptor
from mcp_client_cli.exceptions import CatalogError

if TYPE_CHECKING:
    from mcp_client_cli.interfaces.services.tools import IToolCatalog

logger = logging.getLogger(__name__)

_EMPTY_SCHEMA: Dict[str, Any] = {"type": "object", "properties": {}}


def _field(raw: Any, *names: str) -> Any:
    """Read the first present attribute/key among names from an SDK object or mapping."""
    for name in names:
        if isinstance(raw, dict):
            if name in raw:
                return raw[name]
        else:
            value = getattr(raw, name, None)
            if value is not None:
                return value
    return None


def _to_descriptor(raw: Any) -> ToolDescriptor:
    name = _field(raw, "name")
    if not isinstance(name, str) or not name.strip():
        raise CatalogError(f"Tool descriptor without a name: {raw!r}")
    schema = _field(raw, "inputSchema", "input_schema")
    return ToolDescriptor(
        name=name,
        description=_field(raw, "description") or "",
        input_schema=copy.deepcopy(schema) if isinstance(schema, dict) else copy.deepcopy(_EMPTY_SCHEMA),
    )


class ToolCatalog:
    """
    Immutable, name-keyed set of tools exposed by the MCP server.

    Built once after connecting and shared read-only by every query.
    """

    def __init__(self, descriptors: Iterable[ToolDescriptor] = ()) -> None:
        tools: Dict[str, ToolDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.name in tools:
                raise CatalogError(f"Duplicate tool name '{descriptor.name}'")
            tools[descriptor.name] = descriptor
        self._tools = tools

    @classmethod
    def build(cls, raw_descriptors: Iterable[Any]) -> "ToolCatalog":
        """
        Convert discovery results (MCP Tool objects or plain dicts) into a catalog.

        Raises:
            CatalogError: If a descriptor lacks a name or a name repeats
        """
        catalog = cls(_to_descriptor(raw) for raw in raw_descriptors)
        logger.info(f"Discovered tools: {catalog.names()}")
        return catalog

    def list_tools(self) -> List[ToolDescriptor]:
        return list(self._tools.values())

    def get_tool(self, name: str) -> Optional[ToolDescriptor]:
        return self._tools.get(name)

    def names(self) -> List[str]:
        return list(self._tools)

    def to_openai_tools(self) -> List[Dict[str, Any]]:
        """
        Build the OpenAI-compatible tools array.
        """
        return [
            {
                "type": "function",
                "function": {
                    "name": descriptor.name,
                    "description": descriptor.description,
                    "parameters": descriptor.input_schema,
                },
            }
            for descriptor in self._tools.values()
        ]

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __iter__(self) -> Iterator[ToolDescriptor]:
        return iter(self._tools.values())

    def __len__(self) -> int:
        return len(self._tools)


__all__ = ["ToolCatalog"]
