"""Collaborator protocol definitions.

This module defines the structural interfaces the agent loop consumes, so
providers, memory stores and tools are interchangeable implementations.
"""

from collections.abc import AsyncIterator, Sequence
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel

from agentsea.platform.agent.config import RetryConfig
from agentsea.platform.agent.messages import (
    LLMResponse,
    LLMStreamChunk,
    Message,
    ProviderConfig,
    ToolCall,
    ToolContext,
)


@runtime_checkable
class LLMProvider(Protocol):
    """Protocol for a language model provider."""

    async def generate_response(
        self,
        messages: Sequence[Message],
        config: ProviderConfig,
    ) -> LLMResponse:
        """Generate a complete response for the conversation.

        Args:
            messages: Conversation in order
            config: Model, sampling parameters and bound tools

        Returns:
            The provider response
        """
        ...

    def parse_tool_calls(self, response: LLMResponse) -> list[ToolCall]:
        """Extract the tool calls requested in a response."""
        ...


@runtime_checkable
class StreamingLLMProvider(LLMProvider, Protocol):
    """Protocol for a provider that can stream partial output."""

    def stream_response(
        self,
        messages: Sequence[Message],
        config: ProviderConfig,
    ) -> AsyncIterator[LLMStreamChunk]:
        """Stream a response as content and tool call chunks.

        Yields:
            LLMStreamChunk objects, ending with a "done" chunk or stream exhaustion
        """
        ...


@runtime_checkable
class MemoryStore(Protocol):
    """Protocol for conversation history storage."""

    async def save(self, conversation_id: str, messages: Sequence[Message]) -> None: ...

    async def load(self, conversation_id: str) -> list[Message]: ...

    async def clear(self, conversation_id: str) -> None: ...


@runtime_checkable
class Tool(Protocol):
    """Protocol for a callable tool."""

    @property
    def name(self) -> str: ...

    @property
    def description(self) -> str: ...

    @property
    def parameters(self) -> type[BaseModel]:
        """Pydantic model used to validate call parameters."""
        ...

    @property
    def retry_config(self) -> RetryConfig | None: ...

    async def execute(self, params: dict[str, Any], context: ToolContext) -> Any:
        """Run the tool with validated parameters."""
        ...

    def json_schema(self) -> dict[str, Any]:
        """JSON schema of the parameters, for binding to a model."""
        ...
