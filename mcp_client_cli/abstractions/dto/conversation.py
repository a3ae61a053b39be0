"""
Conversation DTOs shared by the model gateway and the query resolver.

These are pure data: the gateway converts SDK objects into them and the
resolver only ever sees these types.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional, Union

# Roles as seen by the resolver. The wire role sent to the model API for
# "tool_result" is decided by the gateway.
Role = Literal["user", "assistant", "tool_result"]

CandidateKind = Literal["text", "tool_call"]


@dataclass(frozen=True)
class Message:
    role: Role
    content: Union[str, Dict[str, Any], List[Any]]


# Ordered message history; order is causal and must be preserved.
Conversation = List[Message]


@dataclass(frozen=True)
class ToolCallRequest:
    """
    A tool call as emitted by the model.

    `arguments` is the serialized payload exactly as received; parsing is the
    resolver's job so that malformed payloads abort before any invocation.
    """
    tool_name: str
    arguments: str


@dataclass(frozen=True)
class Candidate:
    kind: CandidateKind
    content: str = ""
    request: Optional[ToolCallRequest] = None

    @classmethod
    def text(cls, content: Optional[str]) -> "Candidate":
        return cls(kind="text", content=content or "")

    @classmethod
    def tool_call(cls, tool_name: str, arguments: str, content: Optional[str] = None) -> "Candidate":
        return cls(
            kind="tool_call",
            content=content or "",
            request=ToolCallRequest(tool_name=tool_name, arguments=arguments),
        )

    @property
    def is_tool_call(self) -> bool:
        return self.kind == "tool_call" and self.request is not None


@dataclass(frozen=True)
class ModelResponse:
    candidates: List[Candidate] = field(default_factory=list)

    def first(self) -> Optional[Candidate]:
        return self.candidates[0] if self.candidates else None

    def __iter__(self):
        return iter(self.candidates)

    def __len__(self) -> int:
        return len(self.candidates)


__all__ = [
    "Role",
    "CandidateKind",
    "Message",
    "Conversation",
    "ToolCallRequest",
    "Candidate",
    "ModelResponse",
]
