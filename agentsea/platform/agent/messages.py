"""Message, tool call, response and stream event types.

These types define the common vocabulary shared by providers, tools, the
agent execution loop and the workflow orchestrator.
"""

from dataclasses import dataclass, field, replace
from enum import StrEnum
from typing import Any, Literal, TypeAlias

from agentsea.platform.agent.config import OutputFormat


class Role(StrEnum):
    """Conversation role of a message."""

    SYSTEM = "system"
    USER = "user"
    ASSISTANT = "assistant"
    TOOL = "tool"


class FinishReason(StrEnum):
    """Why a response ended."""

    STOP = "stop"
    LENGTH = "length"
    TOOL_CALLS = "tool_calls"
    ERROR = "error"

    @classmethod
    def from_stop_reason(cls, stop_reason: str | None) -> "FinishReason":
        """Normalise a provider stop reason into a FinishReason."""
        match stop_reason:
            case "length" | "max_tokens":
                return cls.LENGTH
            case "tool_calls" | "tool_use":
                return cls.TOOL_CALLS
            case "error":
                return cls.ERROR
            case _:
                return cls.STOP


@dataclass(frozen=True)
class Message:
    """A single conversation message.

    Attributes:
        role: Message role ("system", "user", "assistant", "tool")
        content: Message text content
        tool_calls: Tool call dicts requested by an assistant message
        tool_call_id: ID of the tool call this message responds to (for tool messages)
        name: Tool name (for tool messages)
    """

    role: Role
    content: str
    tool_calls: list[dict[str, Any]] | None = None
    tool_call_id: str | None = None
    name: str | None = None


@dataclass(frozen=True)
class ToolCall:
    """A model request to invoke a named tool.

    A call is settled exactly once, with either a result or an error.
    """

    id: str
    tool_name: str
    parameters: dict[str, Any] = field(default_factory=dict)
    result: Any = None
    error: str | None = None
    settled: bool = False

    @property
    def succeeded(self) -> bool:
        return self.settled and self.error is None

    def with_result(self, result: Any) -> "ToolCall":
        """Return a copy settled with a result."""
        self._ensure_pending()
        return replace(self, result=result, settled=True)

    def with_error(self, error: str) -> "ToolCall":
        """Return a copy settled with an error message."""
        self._ensure_pending()
        return replace(self, error=error, settled=True)

    def as_dict(self) -> dict[str, Any]:
        """Render the request part of the call for assistant messages."""
        return {"id": self.id, "name": self.tool_name, "args": self.parameters}

    def _ensure_pending(self) -> None:
        if self.settled:
            raise ValueError(f"Tool call '{self.id}' is already settled")


@dataclass(frozen=True)
class ToolContext:
    """Context passed to tools during execution."""

    agent_name: str
    conversation_id: str
    metadata: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TokenUsage:
    input_tokens: int = 0
    output_tokens: int = 0

    @property
    def total(self) -> int:
        return self.input_tokens + self.output_tokens


@dataclass(frozen=True)
class ProviderConfig:
    """Per-call configuration handed to a model provider."""

    model: str
    temperature: float | None = None
    max_tokens: int | None = None
    tools: tuple[Any, ...] = ()
    system_prompt: str | None = None
    top_p: float | None = None
    stop_sequences: tuple[str, ...] = ()


@dataclass(frozen=True)
class LLMResponse:
    """Response from a model provider.

    Attributes:
        content: Generated text
        stop_reason: Provider stop reason
        usage: Token usage for this call
        raw_response: Provider-specific response object, used by parse_tool_calls
        next_agent: Optional explicit hand-off target surfaced by the provider
    """

    content: str
    stop_reason: str = "stop"
    usage: TokenUsage = field(default_factory=TokenUsage)
    raw_response: Any = None
    next_agent: str | None = None


@dataclass(frozen=True)
class LLMStreamChunk:
    """Partial output from a streaming provider.

    Attributes:
        type: "content", "tool_call" or "done"
        content: Text fragment for content chunks
        tool_call: Partial tool call description (id, tool_name, parameters)
        usage: Token usage, typically carried by the final chunk
    """

    type: Literal["content", "tool_call", "done"]
    content: str | None = None
    tool_call: dict[str, Any] | None = None
    usage: TokenUsage | None = None


@dataclass
class AgentContext:
    """Per-invocation state.

    Mutable only by the orchestrator layer: metadata carries routing scratch
    state (such as the round-robin cursor) across workflow steps.
    """

    conversation_id: str
    session_data: dict[str, Any] = field(default_factory=dict)
    history: list[Message] = field(default_factory=list)
    metadata: dict[str, Any] = field(default_factory=dict)
    user_id: str | None = None


@dataclass(frozen=True)
class ResponseMetadata:
    tokens_used: int = 0
    latency_ms: int = 0
    iterations: int = 0
    cost: float | None = None


@dataclass(frozen=True)
class ContentMetadata:
    """Structural features detected in formatted content."""

    has_code_blocks: bool = False
    has_tables: bool = False
    has_lists: bool = False
    links: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class FormattedContent:
    raw: str
    format: OutputFormat
    rendered: str | None = None
    metadata: ContentMetadata | None = None


@dataclass(frozen=True)
class AgentResponse:
    """Output of one agent invocation.

    Attributes:
        content: Final answer text
        metadata: Token, latency and iteration counts
        tool_calls: Settled tool calls made during the invocation
        formatted: Optional formatted rendering of the content
        next_agent: Optional explicit hand-off target
        finish_reason: Why the response ended
    """

    content: str
    metadata: ResponseMetadata = field(default_factory=ResponseMetadata)
    tool_calls: tuple[ToolCall, ...] = ()
    formatted: FormattedContent | None = None
    next_agent: str | None = None
    finish_reason: FinishReason = FinishReason.STOP


@dataclass(frozen=True)
class IterationEvent:
    iteration: int
    event_type: Literal["iteration"] = field(default="iteration", init=False)


@dataclass(frozen=True)
class ContentEvent:
    content: str
    delta: bool = False
    event_type: Literal["content"] = field(default="content", init=False)


@dataclass(frozen=True)
class ToolCallsEvent:
    tool_calls: tuple[ToolCall, ...]
    event_type: Literal["tool_calls"] = field(default="tool_calls", init=False)


@dataclass(frozen=True)
class ToolResultEvent:
    tool_call: ToolCall
    event_type: Literal["tool_result"] = field(default="tool_result", init=False)


@dataclass(frozen=True)
class DoneEvent:
    metadata: ResponseMetadata
    event_type: Literal["done"] = field(default="done", init=False)


@dataclass(frozen=True)
class ErrorEvent:
    error: str
    event_type: Literal["error"] = field(default="error", init=False)


StreamEvent: TypeAlias = (
    IterationEvent | ContentEvent | ToolCallsEvent | ToolResultEvent | DoneEvent | ErrorEvent
)
