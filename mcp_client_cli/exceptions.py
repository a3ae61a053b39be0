"""
Exception types raised across the client.

Startup failures (ConfigError, ServerConnectionError, CatalogError) terminate
the process. Query failures (InferenceError, ToolInvocationError,
ToolArgumentsError) abort a single query and leave the session running.
"""


class MCPClientError(Exception):
    """Base class for all client errors."""


class ConfigError(MCPClientError):
    """Required configuration is missing or invalid."""


class ServerConnectionError(MCPClientError):
    """The MCP server could not be launched, reached or is already closed."""


class CatalogError(MCPClientError):
    """A discovered tool descriptor is malformed."""


class QueryError(MCPClientError):
    """Base class for errors that abort only the current query."""


class InferenceError(QueryError):
    """The model API call failed."""


class ToolInvocationError(QueryError):
    """The tool call failed in transport or inside the tool."""

    def __init__(self, tool_name: str, message: str) -> None:
        super().__init__(f"Tool '{tool_name}' failed: {message}")
        self.tool_name = tool_name


class ToolArgumentsError(QueryError):
    """The model emitted tool arguments that are not a JSON object."""

    def __init__(self, tool_name: str, raw_arguments: str, message: str) -> None:
        super().__init__(f"Invalid arguments for tool '{tool_name}': {message}")
        self.tool_name = tool_name
        self.raw_arguments = raw_arguments


__all__ = [
    "MCPClientError",
    "ConfigError",
    "ServerConnectionError",
    "CatalogError",
    "QueryError",
    "InferenceError",
    "ToolInvocationError",
    "ToolArgumentsError",
]
