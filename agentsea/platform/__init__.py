"""Agent platform infrastructure module.

This module provides the building blocks for agentic applications:
- Agent execution loop with concurrent tool calls and streaming
- Tool definitions and the tool registry
- Multi-agent workflows (sequential, parallel, supervisor)
- Conversation memory and response formatting
- LiteLLM provider
- Settings and observability utilities
"""

from agentsea.platform.agent import (
    Agent,
    AgentConfig,
    AgentContext,
    AgentResponse,
    WorkflowConfig,
)
from agentsea.platform.formatters import ContentFormatter
from agentsea.platform.memory import BufferMemory, SummaryMemory
from agentsea.platform.orchestration import Workflow, WorkflowFactory
from agentsea.platform.providers import LiteLLMProvider
from agentsea.platform.settings import Settings
from agentsea.platform.tools import FunctionTool, ToolRegistry, tool

__all__ = [
    "Agent",
    "AgentConfig",
    "AgentContext",
    "AgentResponse",
    "BufferMemory",
    "ContentFormatter",
    "FunctionTool",
    "LiteLLMProvider",
    "Settings",
    "SummaryMemory",
    "ToolRegistry",
    "Workflow",
    "WorkflowConfig",
    "WorkflowFactory",
    "tool",
]
