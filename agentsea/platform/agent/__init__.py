"""Agent infrastructure module.

This module provides the core abstractions for running agents:
- Collaborator protocols (providers, memory stores, tools)
- Configuration dataclasses
- Message, response and stream event types
- The agent execution loop
- Agent-specific metrics
"""

from agentsea.platform.agent.agent import Agent
from agentsea.platform.agent.config import (
    AgentConfig,
    BackoffStrategy,
    ErrorHandlingStrategy,
    FormatOptions,
    OutputFormat,
    RetryConfig,
    RoutingLogic,
    RoutingRule,
    RoutingStrategy,
    WorkflowConfig,
    WorkflowType,
)
from agentsea.platform.agent.exceptions import (
    AgentExecutionError,
    AgentNotFoundError,
    AgentseaError,
    InvalidParametersError,
    MaxIterationsExceededError,
    ToolError,
    ToolNotFoundError,
    WorkflowError,
    WorkflowExecutionError,
)
from agentsea.platform.agent.messages import (
    AgentContext,
    AgentResponse,
    ContentEvent,
    DoneEvent,
    ErrorEvent,
    FinishReason,
    IterationEvent,
    LLMResponse,
    LLMStreamChunk,
    Message,
    ProviderConfig,
    ResponseMetadata,
    Role,
    StreamEvent,
    TokenUsage,
    ToolCall,
    ToolCallsEvent,
    ToolContext,
    ToolResultEvent,
)
from agentsea.platform.agent.protocol import LLMProvider, MemoryStore, StreamingLLMProvider, Tool

__all__ = [
    "Agent",
    "AgentConfig",
    "AgentContext",
    "AgentExecutionError",
    "AgentNotFoundError",
    "AgentResponse",
    "AgentseaError",
    "BackoffStrategy",
    "ContentEvent",
    "DoneEvent",
    "ErrorEvent",
    "ErrorHandlingStrategy",
    "FinishReason",
    "FormatOptions",
    "InvalidParametersError",
    "IterationEvent",
    "LLMProvider",
    "LLMResponse",
    "LLMStreamChunk",
    "MaxIterationsExceededError",
    "MemoryStore",
    "Message",
    "OutputFormat",
    "ProviderConfig",
    "ResponseMetadata",
    "RetryConfig",
    "Role",
    "RoutingLogic",
    "RoutingRule",
    "RoutingStrategy",
    "StreamEvent",
    "StreamingLLMProvider",
    "TokenUsage",
    "Tool",
    "ToolCall",
    "ToolCallsEvent",
    "ToolContext",
    "ToolError",
    "ToolNotFoundError",
    "ToolResultEvent",
    "WorkflowConfig",
    "WorkflowError",
    "WorkflowExecutionError",
    "WorkflowType",
]
