"""
Console utilities for CLI.
"""

from typing import IO, Optional
from rich.console import Console
from rich.theme import Theme
import os
import sys


def _build_theme(theme_name: str) -> Theme:
    if theme_name == "light":
        return Theme(
            {
                "primary": "black",
                "accent": "dark_green",
                "warning": "dark_orange",
                "error": "red",
                "muted": "grey42",
                "trace": "dark_cyan",
            }
        )
    else:
        # dark
        return Theme(
            {
                "primary": "white",
                "accent": "cyan",
                "warning": "yellow",
                "error": "bold red",
                "muted": "grey70",
                "trace": "cyan",
            }
        )


def _should_enable_color(enable: Optional[bool]):
    """
    Compute effective color enablement, force_terminal, and color_system.

    Rules:
    - Respect NO_COLOR unless MCP_CLI_FORCE_COLOR is set
    - When enable is None: auto-detect via isatty
    - If enable is False: disable and force_terminal=False
    """
    force_color = (os.getenv("MCP_CLI_FORCE_COLOR") or "").lower() in ("1", "true", "yes", "on")
    no_color_env = os.getenv("NO_COLOR") is not None
    tty = bool(getattr(sys.stdout, "isatty", lambda: False)())

    desired_raw = tty if enable is None else bool(enable)
    desired = desired_raw and (not no_color_env or force_color)

    if enable is False:
        force_terminal = False
    elif force_color:
        force_terminal = True
    else:
        force_terminal = bool(desired and tty)

    color_system = "auto" if desired else None
    return desired, force_terminal, color_system


def make_console(theme_name: str = "dark", use_color: Optional[bool] = None, file: Optional[IO[str]] = None) -> Console:
    """Create a Rich console with the selected theme and color policy."""
    theme = _build_theme("light" if theme_name == "light" else "dark")
    desired, force_terminal, color_system = _should_enable_color(use_color)

    return Console(
        file=file,
        theme=theme,
        no_color=not desired,
        color_system=color_system,
        force_terminal=force_terminal,
        markup=True,
        emoji=False,
        highlight=False,
    )


__all__ = ["make_console"]
