"""
Query resolution: one user query in, one combined text answer out.

The resolver interleaves model inference with tool invocation:

    Start -> AwaitingFirstResponse -> (ResolvingTools)* -> Done

Each candidate of the first response is either kept as text or resolved
through at most MAX_TOOL_ROUNDS rounds of
{trace -> invoke tool -> fold result into conversation -> re-query model}.
A tool result is never itself checked for a further tool call once the
round budget is spent; the final follow-up request carries no tools.
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, TYPE_CHECKING

from mcp_client_cli.abstractions.dto.conversation import (
    Candidate,
    Conversation,
    Message,
    ToolCallRequest,
)
from mcp_client_cli.exceptions import InferenceError, ToolArgumentsError

if TYPE_CHECKING:
    from mcp_client_cli.interfaces.services.llm import IModelGateway
    from mcp_client_cli.interfaces.services.tools import IToolCatalog, IToolInvoker

logger = logging.getLogger(__name__)

MAX_TOOL_ROUNDS = 1


def _reject_constant(token: str) -> Any:
    raise ValueError(f"{token} is not valid JSON")


def _js_numbers(value: Any) -> Any:
    # Whole floats print without a fraction, as JSON.stringify does
    if isinstance(value, float) and value.is_integer() and abs(value) < 1e21:
        return int(value)
    if isinstance(value, dict):
        return {k: _js_numbers(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_js_numbers(v) for v in value]
    return value


def parse_tool_arguments(request: ToolCallRequest) -> Dict[str, Any]:
    """
    Parse the serialized arguments of a tool call into a JSON object.

    Anything that is not a strict JSON object (including blank text and the
    NaN/Infinity tokens) raises ToolArgumentsError.
    """
    raw = request.arguments
    try:
        parsed = json.loads(raw, parse_constant=_reject_constant)
    except (TypeError, ValueError) as e:
        raise ToolArgumentsError(request.tool_name, raw, str(e)) from e
    if not isinstance(parsed, dict):
        raise ToolArgumentsError(
            request.tool_name, raw, f"expected a JSON object, got {type(parsed).__name__}"
        )
    return parsed


def format_tool_trace(tool_name: str, arguments: Dict[str, Any]) -> str:
    """Human-readable line recording a tool call in the answer."""
    serialized = json.dumps(_js_numbers(arguments), separators=(",", ":"), ensure_ascii=False)
    return f"[Calling tool {tool_name} with args {serialized}]"


class QueryResolver:
    """
    Resolve a query against injected collaborators.

    Args:
        gateway: Model inference port
        invoker: Tool invocation port
        catalog: Tools offered to the model on the first call
    """

    def __init__(
        self,
        gateway: "IModelGateway",
        invoker: "IToolInvoker",
        catalog: "IToolCatalog",
        max_tool_rounds: int = MAX_TOOL_ROUNDS,
    ) -> None:
        if max_tool_rounds < 1:
            raise ValueError("max_tool_rounds must be at least 1")
        self.gateway = gateway
        self.invoker = invoker
        self.catalog = catalog
        self.max_tool_rounds = max_tool_rounds

    async def resolve(self, query: str) -> str:
        conversation: Conversation = [Message(role="user", content=query)]
        response = await self.gateway.complete(conversation, self.catalog)
        logger.debug(f"First response: {len(response)} candidate(s)")

        output: List[str] = []
        for candidate in response:
            if candidate.is_tool_call:
                await self._resolve_tool_call(conversation, candidate, output)
            else:
                output.append(candidate.content)
        return "\n".join(output)

    async def _resolve_tool_call(
        self,
        conversation: Conversation,
        candidate: Candidate,
        output: List[str],
    ) -> None:
        rounds = 0
        while candidate.is_tool_call and rounds < self.max_tool_rounds:
            request = candidate.request
            arguments = parse_tool_arguments(request)
            output.append(format_tool_trace(request.tool_name, arguments))

            result = await self.invoker.invoke(request.tool_name, arguments)
            conversation.append(Message(role="tool_result", content=result.content))
            rounds += 1

            offer_tools = self.catalog if rounds < self.max_tool_rounds else None
            follow_up = await self.gateway.complete(conversation, offer_tools)
            first = follow_up.first()
            if first is None:
                raise InferenceError(
                    f"Model returned no candidates after calling tool '{request.tool_name}'"
                )
            candidate = first

        # Only the first follow-up candidate counts, whatever its kind
        output.append(candidate.content)


__all__ = ["QueryResolver", "MAX_TOOL_ROUNDS", "parse_tool_arguments", "format_tool_trace"]
