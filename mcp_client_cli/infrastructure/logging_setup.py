"""
Logging configuration for the CLI.

Library modules only create module-level loggers; handlers are installed
here, once, by the entry point.
"""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


def setup_logging(level: int = logging.WARNING, console: Optional[Console] = None) -> None:
    """Route all records through a single RichHandler writing to stderr."""
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root_logger.addHandler(handler)

    # The SDKs are chatty at INFO; keep them one level quieter than ours
    for noisy in ("httpx", "openai", "mcp"):
        logging.getLogger(noisy).setLevel(max(level, logging.WARNING))


__all__ = ["setup_logging"]
