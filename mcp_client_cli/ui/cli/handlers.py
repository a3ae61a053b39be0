"""
Rendering helpers for CLI.
"""
from __future__ import annotations

from rich.console import Console
from rich.table import Table
from rich.text import Text
from rich.box import ROUNDED

from mcp_client_cli.interfaces.services.tools import IToolCatalog

_TRACE_PREFIX = "[Calling tool "


def list_tools(console: Console, catalog: IToolCatalog) -> None:
    """Render the connection line and a table of discovered tools."""
    names = [descriptor.name for descriptor in catalog.list_tools()]
    console.print(Text(f"Connected to server with tools: {names}", style="accent"))
    if not names:
        return

    table = Table(title="Server Tools", box=ROUNDED)
    table.add_column("Name", no_wrap=True)
    table.add_column("Description")
    table.add_column("Required Params")
    for descriptor in catalog.list_tools():
        req = ", ".join(descriptor.input_schema.get("required", []) or [])
        table.add_row(descriptor.name, descriptor.description, req or "-")
    console.print(table)


def show_banner(console: Console) -> None:
    console.print("\nMCP Client Started!", style="accent")
    console.print("Type your queries or 'quit' to exit.", style="muted")


def show_answer(console: Console, answer: str) -> None:
    """Print the answer line by line, highlighting tool traces, then a blank line."""
    console.print()
    for line in answer.split("\n"):
        style = "trace" if line.startswith(_TRACE_PREFIX) else "primary"
        console.print(Text(line, style=style))
    console.print()


def show_error(console: Console, error: Exception) -> None:
    console.print(Text(f"Error: {error}", style="error"))
    console.print()


__all__ = ["list_tools", "show_banner", "show_answer", "show_error"]
