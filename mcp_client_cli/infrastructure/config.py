"""
Configuration module for loading environment variables and settings.

This module handles:
1. Loading LLM_* settings from the environment and an optional .env file
2. Setting defaults for optional values
3. Validating required settings once, at process start

The resulting values are immutable and passed explicitly to the components
that need them; nothing reads os.environ while a query is being resolved.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from mcp_client_cli.exceptions import ConfigError

DEFAULT_MAX_TOKENS = 1000
DEFAULT_LOG_LEVEL = "WARNING"

_TRUTHY = ("1", "true", "yes", "on")
_FALSY = ("0", "false", "no", "off")


def _read_required(env: Mapping[str, str], key: str) -> str:
    value = (env.get(key) or "").strip()
    if not value:
        raise ConfigError(f"{key} is not set")
    return value


@dataclass(frozen=True)
class LLMConfig:
    """Connection settings for the OpenAI-compatible model API."""

    api_key: str
    base_url: str
    model: str
    max_tokens: int = DEFAULT_MAX_TOKENS

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None, load_dotenv_file: bool = True) -> "LLMConfig":
        """
        Build and validate the configuration.

        Args:
            env: Mapping to read from (defaults to os.environ)
            load_dotenv_file: Whether to load a .env file into os.environ first

        Raises:
            ConfigError: If a required variable is missing or LLM_MAX_TOKENS is invalid
        """
        if load_dotenv_file:
            load_dotenv()
        source = os.environ if env is None else env

        raw_max = (source.get("LLM_MAX_TOKENS") or "").strip()
        if raw_max:
            try:
                max_tokens = int(raw_max)
            except ValueError:
                raise ConfigError(f"LLM_MAX_TOKENS must be an integer, got {raw_max!r}") from None
            if max_tokens <= 0:
                raise ConfigError(f"LLM_MAX_TOKENS must be positive, got {max_tokens}")
        else:
            max_tokens = DEFAULT_MAX_TOKENS

        return cls(
            api_key=_read_required(source, "LLM_API_KEY"),
            base_url=_read_required(source, "LLM_BASE_URL"),
            model=_read_required(source, "LLM_MODEL"),
            max_tokens=max_tokens,
        )

    def __repr__(self) -> str:
        # Never echo the key into logs or tracebacks
        return (
            f"LLMConfig(api_key='***', base_url={self.base_url!r}, "
            f"model={self.model!r}, max_tokens={self.max_tokens})"
        )


@dataclass(frozen=True)
class CLISettings:
    """Presentation settings for the interactive surface."""

    theme: str = "dark"
    use_color: Optional[bool] = None
    log_level: int = logging.WARNING

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "CLISettings":
        source = os.environ if env is None else env

        theme = (source.get("CLI_THEME") or "dark").strip().lower()
        theme = "light" if theme in ("light", "white") else "dark"

        color_raw = (source.get("CLI_COLOR") or "").strip().lower()
        if color_raw in _TRUTHY:
            use_color: Optional[bool] = True
        elif color_raw in _FALSY:
            use_color = False
        else:
            # Auto-detect from the terminal
            use_color = None

        level_name = (source.get("MCP_CLI_LOG_LEVEL") or DEFAULT_LOG_LEVEL).strip().upper()
        level = logging.getLevelName(level_name)
        if not isinstance(level, int):
            raise ConfigError(f"MCP_CLI_LOG_LEVEL has unknown level {level_name!r}")

        return cls(theme=theme, use_color=use_color, log_level=level)


__all__ = ["LLMConfig", "CLISettings", "DEFAULT_MAX_TOKENS"]
