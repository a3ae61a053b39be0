"""
Shared test fixtures: deterministic stubs for the model gateway and tool invoker.

Nothing here talks to a network or launches a process; the stubs record every
call so tests can assert on ordering and on what was (not) invoked.
"""

import os
import sys
import copy
from typing import Any, Dict, List, Optional

import pytest

# Ensure project root is on sys.path so package imports resolve in tests
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _PROJECT_ROOT not in sys.path:
    sys.path.insert(0, _PROJECT_ROOT)

from mcp_client_cli.abstractions.dto.conversation import Candidate, ModelResponse
from mcp_client_cli.abstractions.dto.tools import ToolCallResult
from mcp_client_cli.exceptions import ToolInvocationError
from mcp_client_cli.infrastructure.tools.catalog_adapter import ToolCatalog


class StubGateway:
    """Returns scripted responses in order and snapshots each request."""

    model = "stub-model"

    def __init__(self, responses: List[ModelResponse]) -> None:
        self._responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    async def complete(self, conversation, tool_catalog=None) -> ModelResponse:
        self.calls.append(
            {"conversation": copy.deepcopy(list(conversation)), "tool_catalog": tool_catalog}
        )
        if not self._responses:
            raise AssertionError("StubGateway ran out of scripted responses")
        return self._responses.pop(0)


class StubInvoker:
    """Returns canned results per tool name, or raises for names listed in failures."""

    def __init__(self, results: Optional[Dict[str, str]] = None, failures: Optional[Dict[str, str]] = None) -> None:
        self.results = results or {}
        self.failures = failures or {}
        self.calls: List[Dict[str, Any]] = []

    async def invoke(self, name: str, arguments: Dict[str, Any]) -> ToolCallResult:
        self.calls.append({"name": name, "arguments": arguments})
        if name in self.failures:
            raise ToolInvocationError(name, self.failures[name])
        return ToolCallResult(tool_name=name, content=self.results.get(name, ""))


def text_response(*texts: str) -> ModelResponse:
    return ModelResponse(candidates=[Candidate.text(t) for t in texts])


def tool_response(name: str, arguments: str) -> ModelResponse:
    return ModelResponse(candidates=[Candidate.tool_call(name, arguments)])


@pytest.fixture
def weather_catalog() -> ToolCatalog:
    return ToolCatalog.build(
        [
            {
                "name": "get_weather",
                "description": "Current weather for a city",
                "inputSchema": {
                    "type": "object",
                    "properties": {"city": {"type": "string"}},
                    "required": ["city"],
                },
            }
        ]
    )


@pytest.fixture
def empty_catalog() -> ToolCatalog:
    return ToolCatalog.build([])
