"""
Interactive CLI: chat with an OpenAI-compatible model that can call MCP tools.

Run:
  mcp-client-cli <path_to_server_script>
  or
  python -m mcp_client_cli <path_to_server_script>

Environment (or .env):
  LLM_API_KEY, LLM_BASE_URL, LLM_MODEL   required
  LLM_MAX_TOKENS                          optional, default 1000
  CLI_THEME, CLI_COLOR, MCP_CLI_LOG_LEVEL optional presentation settings

Type 'quit' to exit.
"""

from __future__ import annotations

import asyncio
import logging
import sys
from typing import Awaitable, Callable, List, Optional

from dotenv import load_dotenv
from prompt_toolkit import PromptSession
from prompt_toolkit.history import InMemoryHistory
from prompt_toolkit.patch_stdout import patch_stdout
from rich.console import Console
from rich.text import Text

from mcp_client_cli.api.di.cli_composition import (
    build_query_resolver,
    build_server_connection,
    build_tool_catalog,
)
from mcp_client_cli.domain.query_resolver import QueryResolver
from mcp_client_cli.exceptions import (
    CatalogError,
    ConfigError,
    MCPClientError,
    ServerConnectionError,
)
from mcp_client_cli.infrastructure.config import CLISettings, LLMConfig
from mcp_client_cli.infrastructure.logging_setup import setup_logging
from .console import make_console
from .handlers import list_tools, show_answer, show_banner, show_error

logger = logging.getLogger(__name__)

USAGE = "Usage: mcp-client-cli <path_to_server_script>"

LineReader = Callable[[], Awaitable[str]]


def _prompt_reader() -> LineReader:
    session = PromptSession(history=InMemoryHistory())

    async def read_line() -> str:
        with patch_stdout():
            return await session.prompt_async("\nQuery: ")

    return read_line


async def chat_loop(resolver: QueryResolver, console: Console, read_line: Optional[LineReader] = None) -> None:
    """
    Read queries until 'quit' (any case), EOF or Ctrl-C.

    A failing query is reported and the loop moves on to the next one.
    """
    read_line = read_line or _prompt_reader()
    show_banner(console)

    while True:
        try:
            query = await read_line()
        except (KeyboardInterrupt, EOFError):
            console.print("\nExiting...", style="warning")
            break

        if query.lower() == "quit":
            break

        try:
            answer = await resolver.resolve(query)
        except MCPClientError as e:
            logger.debug("Query failed", exc_info=True)
            show_error(console, e)
            continue
        show_answer(console, answer)


async def run(
    server_script_path: str,
    config: LLMConfig,
    console: Console,
    read_line: Optional[LineReader] = None,
) -> int:
    """Connect, discover tools, chat, and always release the server connection."""
    connection = build_server_connection(server_script_path)
    try:
        try:
            await connection.connect()
            catalog = build_tool_catalog(await connection.list_tools())
        except (ServerConnectionError, CatalogError) as e:
            logger.debug("Startup failed", exc_info=True)
            show_error(console, e)
            return 1

        list_tools(console, catalog)
        resolver = build_query_resolver(config, connection, catalog)
        await chat_loop(resolver, console, read_line)
        return 0
    finally:
        await connection.aclose()


def main(argv: Optional[List[str]] = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    if not args:
        print(USAGE)
        return 0

    load_dotenv()
    try:
        settings = CLISettings.from_env()
        config = LLMConfig.from_env(load_dotenv_file=False)
    except ConfigError as e:
        Console(stderr=True).print(Text(f"Configuration error: {e}", style="bold red"))
        return 1

    console = make_console(settings.theme, use_color=settings.use_color)
    setup_logging(settings.log_level)
    logger.info(f"Using model {config.model} at {config.base_url}")

    return asyncio.run(run(args[0], config, console))


if __name__ == "__main__":
    raise SystemExit(main())
