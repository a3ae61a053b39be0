"""
Composition module for CLI DI (edge wiring).
"""

from __future__ import annotations

from typing import Any, Iterable, TYPE_CHECKING

if TYPE_CHECKING:
    from mcp_client_cli.domain.query_resolver import QueryResolver
    from mcp_client_cli.infrastructure.config import LLMConfig
    from mcp_client_cli.infrastructure.mcp.stdio_session import MCPServerConnection
    from mcp_client_cli.interfaces.services.llm import IModelGateway
    from mcp_client_cli.interfaces.services.tools import IToolCatalog, IToolInvoker


def build_server_connection(server_script_path: str) -> "MCPServerConnection":
    """
    Construct (but do not open) the stdio connection to the MCP server.
    """
    from mcp_client_cli.infrastructure.mcp.stdio_session import MCPServerConnection
    return MCPServerConnection(server_script_path)


def build_tool_catalog(raw_descriptors: Iterable[Any]) -> "IToolCatalog":
    """
    Construct and return an IToolCatalog from discovery results.
    """
    from mcp_client_cli.infrastructure.tools.catalog_adapter import ToolCatalog
    return ToolCatalog.build(raw_descriptors)


def build_tool_invoker(connection: "MCPServerConnection") -> "IToolInvoker":
    """
    Construct and return an IToolInvoker bound to the connection.
    """
    from mcp_client_cli.infrastructure.tools.invocation_adapter import MCPToolInvoker
    return MCPToolInvoker(connection)


def build_model_gateway(config: "LLMConfig") -> "IModelGateway":
    """
    Construct and return an IModelGateway for the configured provider.
    """
    from mcp_client_cli.infrastructure.llm.openai_gateway import OpenAIModelGateway
    return OpenAIModelGateway(config)


def build_query_resolver(
    config: "LLMConfig",
    connection: "MCPServerConnection",
    catalog: "IToolCatalog",
) -> "QueryResolver":
    """
    Wire gateway, invoker and catalog into a QueryResolver.
    """
    from mcp_client_cli.domain.query_resolver import QueryResolver
    return QueryResolver(
        gateway=build_model_gateway(config),
        invoker=build_tool_invoker(connection),
        catalog=catalog,
    )
