"""
Shared tool DTOs for catalogs and invocation results.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Any


@dataclass(frozen=True)
class ToolDescriptor:
    name: str
    description: str
    input_schema: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class ToolCallResult:
    tool_name: str
    content: str


__all__ = ["ToolDescriptor", "ToolCallResult"]
