"""
OpenAI-compatible model gateway.

Supports any provider exposing an OpenAI Chat Completions-compatible API:
- OpenAI (https://api.openai.com/v1)
- DeepSeek (https://api.deepseek.com)
- Ollama (http://localhost:11434/v1)

Behavior:
- Converts the conversation into chat messages; this is the only place that
  knows tool results travel to the model under the "user" role
- Attaches the catalog as the native `tools` array when one is supplied
- Normalizes every returned choice into a Candidate (text or tool call)
- Wraps SDK failures into InferenceError; no retries
"""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from openai import AsyncOpenAI, OpenAIError

from mcp_client_cli.abstractions.dto.conversation import (
    Candidate,
    Conversation,
    Message,
    ModelResponse,
)
from mcp_client_cli.exceptions import InferenceError

if TYPE_CHECKING:
    from mcp_client_cli.infrastructure.config import LLMConfig
    from mcp_client_cli.interfaces.services.tools import IToolCatalog

logger = logging.getLogger(__name__)

# The target API expects tool output folded back as a user turn.
TOOL_RESULT_WIRE_ROLE = "user"

_WIRE_ROLES = {
    "user": "user",
    "assistant": "assistant",
    "tool_result": TOOL_RESULT_WIRE_ROLE,
}


def _message_to_wire(message: Message) -> Dict[str, Any]:
    content = message.content
    if not isinstance(content, str):
        content = json.dumps(content, ensure_ascii=False)
    return {"role": _WIRE_ROLES[message.role], "content": content}


def _read(obj: Any, name: str) -> Any:
    if isinstance(obj, dict):
        return obj.get(name)
    return getattr(obj, name, None)


def _choice_to_candidate(choice: Any) -> Candidate:
    message = _read(choice, "message")
    content = _read(message, "content")
    tool_calls = _read(message, "tool_calls") or []
    if not tool_calls:
        return Candidate.text(content)

    # Only the first tool call of a choice is honored
    fn = _read(tool_calls[0], "function")
    name = str(_read(fn, "name") or "")
    arguments = _read(fn, "arguments")
    if not isinstance(arguments, str):
        arguments = json.dumps(arguments if arguments is not None else {}, ensure_ascii=False)
    return Candidate.tool_call(name, arguments, content)


class OpenAIModelGateway:
    """
    IModelGateway over the async OpenAI SDK.

    Example:
        gateway = OpenAIModelGateway(LLMConfig.from_env())
        response = await gateway.complete([Message("user", "hi")])
    """

    def __init__(self, config: "LLMConfig", client: Optional[Any] = None) -> None:
        self.config = config
        self.client = client or AsyncOpenAI(api_key=config.api_key, base_url=config.base_url)

    @property
    def model(self) -> str:
        return self.config.model

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def build_payload(
        self,
        conversation: Conversation,
        tool_catalog: Optional["IToolCatalog"] = None,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {
            "model": self.config.model,
            "max_tokens": self.config.max_tokens,
            "messages": [_message_to_wire(m) for m in conversation],
        }
        if tool_catalog is not None:
            tools: List[Dict[str, Any]] = tool_catalog.to_openai_tools()
            # An empty tools array is rejected by several providers
            if tools:
                payload["tools"] = tools
        return payload

    async def complete(
        self,
        conversation: Conversation,
        tool_catalog: Optional["IToolCatalog"] = None,
    ) -> ModelResponse:
        payload = self.build_payload(conversation, tool_catalog)
        logger.debug(
            f"Chat completion: model={self.config.model} messages={len(payload['messages'])} "
            f"tools={len(payload.get('tools', []))}"
        )
        try:
            response = await self.client.chat.completions.create(**payload)
        except OpenAIError as e:
            raise InferenceError(f"Inference failed: {e}") from e

        choices = _read(response, "choices") or []
        return ModelResponse(candidates=[_choice_to_candidate(c) for c in choices])


__all__ = ["OpenAIModelGateway", "TOOL_RESULT_WIRE_ROLE"]
