"""
Model gateway port. The resolver depends on this; infra implements.
"""
from __future__ import annotations
from typing import Protocol, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from mcp_client_cli.abstractions.dto.conversation import Conversation, ModelResponse
    from mcp_client_cli.interfaces.services.tools import IToolCatalog


class IModelGateway(Protocol):
    @property
    def model(self) -> str:
        ...
    async def complete(
        self,
        conversation: "Conversation",
        tool_catalog: Optional["IToolCatalog"] = None,
    ) -> "ModelResponse":
        """
        Run one inference call.

        When tool_catalog is given the model may answer any candidate with a
        tool call; without it only text candidates are produced.
        """
        ...


__all__ = ["IModelGateway"]
