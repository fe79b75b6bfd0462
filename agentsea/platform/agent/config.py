"""Configuration dataclasses for agents and workflows.

This module provides immutable configuration objects for agent behavior,
tool retry policies, output formatting, and multi-agent workflow routing.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from agentsea.platform.agent.messages import AgentContext, AgentResponse

DEFAULT_MAX_ITERATIONS = 10


class BackoffStrategy(StrEnum):
    """Delay growth between tool retry attempts."""

    LINEAR = "linear"
    EXPONENTIAL = "exponential"


class OutputFormat(StrEnum):
    """Rendering applied to a final agent response."""

    TEXT = "text"
    MARKDOWN = "markdown"
    HTML = "html"
    REACT = "react"


class WorkflowType(StrEnum):
    """Coordination strategy for a workflow."""

    SEQUENTIAL = "sequential"
    PARALLEL = "parallel"
    SUPERVISOR = "supervisor"
    CUSTOM = "custom"


class ErrorHandlingStrategy(StrEnum):
    """What a workflow does when one of its agents fails."""

    FAIL_FAST = "fail-fast"
    RETRY = "retry"
    FALLBACK = "fallback"
    CONTINUE = "continue"


class RoutingStrategy(StrEnum):
    """Routing mode used by the supervisor workflow."""

    CONDITIONAL = "conditional"
    ROUND_ROBIN = "round-robin"
    DYNAMIC = "dynamic"


@dataclass(frozen=True)
class RetryConfig:
    """Retry policy for a tool or a workflow step.

    Attributes:
        max_attempts: Total number of attempts, including the first one
        backoff: Linear (initial * (k + 1)) or exponential (initial * 2^k) delays
        initial_delay_ms: Delay after the first failed attempt
        max_delay_ms: Upper bound applied to every delay
        retryable_errors: Error messages that may be retried. None retries everything.
    """

    max_attempts: int
    backoff: BackoffStrategy = BackoffStrategy.EXPONENTIAL
    initial_delay_ms: int = 1000
    max_delay_ms: int = 30000
    retryable_errors: frozenset[str] | None = None

    def __post_init__(self) -> None:
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

    def is_retryable(self, error: BaseException) -> bool:
        """Whether an error is in the retryable allow-list."""
        if self.retryable_errors is None:
            return True
        return str(error) in self.retryable_errors


@dataclass(frozen=True)
class FormatOptions:
    """Options for content formatting.

    Attributes:
        include_metadata: Extract code block, table, list and link metadata
        sanitize_html: Strip scripts, inline handlers and javascript: links
        highlight_code: Add highlighter classes to fenced code blocks
        theme: Optional theme name for the wrapping container ("light", "dark", "auto")
    """

    include_metadata: bool = False
    sanitize_html: bool = False
    highlight_code: bool = False
    theme: str | None = None


@dataclass(frozen=True)
class AgentConfig:
    """Configuration for a single agent.

    Attributes:
        name: Unique agent name, used as the workflow key
        model: Model identifier passed to the provider
        description: Brief description of the agent's capabilities
        provider: Informational name of the provider backing the agent
        system_prompt: Optional system prompt handed to the provider
        tools: Tools whose schemas are bound to the model
        temperature: Sampling temperature
        max_tokens: Maximum output tokens per provider call
        max_iterations: Maximum provider calls per invocation
        output_format: Optional rendering applied to the final answer
        format_options: Options for the rendering
    """

    name: str
    model: str
    description: str = ""
    provider: str = ""
    system_prompt: str | None = None
    tools: tuple[Any, ...] = ()
    temperature: float | None = None
    max_tokens: int | None = None
    max_iterations: int = DEFAULT_MAX_ITERATIONS
    output_format: OutputFormat | None = None
    format_options: FormatOptions = field(default_factory=FormatOptions)


RoutingCondition: TypeAlias = Callable[["AgentContext", "AgentResponse"], bool]


@dataclass(frozen=True)
class RoutingRule:
    """A predicate paired with the agent to hand off to when it matches."""

    condition: RoutingCondition
    next_agent: str


@dataclass(frozen=True)
class RoutingLogic:
    """Routing configuration for supervisor workflows.

    Attributes:
        strategy: Routing mode; round-robin cycles through declared agents once
        rules: Rules evaluated in declaration order, first match wins
    """

    strategy: RoutingStrategy = RoutingStrategy.CONDITIONAL
    rules: tuple[RoutingRule, ...] = ()


DEFAULT_WORKFLOW_RETRY = RetryConfig(
    max_attempts=3,
    backoff=BackoffStrategy.EXPONENTIAL,
    initial_delay_ms=1000,
    max_delay_ms=30000,
)


@dataclass(frozen=True)
class WorkflowConfig:
    """Configuration for a multi-agent workflow.

    Attributes:
        name: Workflow name, used for logging and metrics
        type: Coordination strategy
        agents: Agents in declaration order
        routing: Optional routing logic (supervisor only)
        error_handling: Policy applied when an agent fails
        retry: Retry policy used by the "retry" error handling strategy
    """

    name: str
    type: WorkflowType
    agents: tuple[AgentConfig, ...]
    routing: RoutingLogic | None = None
    error_handling: ErrorHandlingStrategy = ErrorHandlingStrategy.FAIL_FAST
    retry: RetryConfig = DEFAULT_WORKFLOW_RETRY
