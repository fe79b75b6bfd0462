"""Base workflow for orchestrating multiple agents.

A workflow builds one Agent per configured AgentConfig, keyed by name, and
applies the configured error handling policy whenever one of them fails.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import AsyncIterator, Mapping
from contextlib import asynccontextmanager
from dataclasses import replace
from types import MappingProxyType

from opentelemetry import trace

from agentsea.platform.agent.agent import Agent
from agentsea.platform.agent.config import ErrorHandlingStrategy, WorkflowConfig
from agentsea.platform.agent.exceptions import AgentNotFoundError, MaxIterationsExceededError
from agentsea.platform.agent.messages import (
    AgentContext,
    AgentResponse,
    FinishReason,
    ResponseMetadata,
)
from agentsea.platform.agent.metrics import WorkflowMetricsLabels, collect_workflow_metrics
from agentsea.platform.agent.protocol import LLMProvider, MemoryStore
from agentsea.platform.agent.retry import SleepFunction, build_retrying
from agentsea.platform.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


def _is_retryable(error: BaseException) -> bool:
    return not isinstance(error, AgentNotFoundError | MaxIterationsExceededError)


class Workflow(ABC):
    """Abstract base for multi-agent workflows."""

    def __init__(
        self,
        config: WorkflowConfig,
        provider: LLMProvider,
        tool_registry: ToolRegistry,
        memory: MemoryStore | None = None,
        sleep: SleepFunction = asyncio.sleep,
    ) -> None:
        """Initialize the workflow and its agents.

        Args:
            config: Workflow configuration
            provider: Provider shared by every agent
            tool_registry: Tool registry shared by every agent
            memory: Optional memory store shared by every agent
            sleep: Sleep coroutine used between retry attempts
        """
        self._config = config
        self._sleep = sleep
        self._agents: dict[str, Agent] = {
            agent_config.name: Agent(agent_config, provider, tool_registry, memory)
            for agent_config in config.agents
        }

    @property
    def config(self) -> WorkflowConfig:
        return self._config

    @property
    def name(self) -> str:
        return self._config.name

    @property
    def agents(self) -> Mapping[str, Agent]:
        return MappingProxyType(self._agents)

    @abstractmethod
    async def execute(self, input: str, context: AgentContext) -> AgentResponse:
        """Run the workflow on an input.

        Args:
            input: Initial user input
            context: Invocation context shared by every agent

        Returns:
            The workflow's final response with aggregated metadata
        """
        ...

    def get_agent(self, name: str) -> Agent:
        """Look up an agent by name.

        Raises:
            AgentNotFoundError: If the workflow holds no agent with that name
        """
        agent = self._agents.get(name)
        if agent is None:
            raise AgentNotFoundError(name)
        return agent

    def handle_error(
        self, error: Exception, agent_name: str, context: AgentContext
    ) -> AgentResponse | None:
        """Apply the error handling policy to an agent failure.

        Returns:
            A synthetic response for "fallback", None for "continue"

        Raises:
            Exception: The original error for "fail-fast" and exhausted "retry"
        """
        match self._config.error_handling:
            case ErrorHandlingStrategy.FALLBACK:
                logger.warning("Agent '%s' failed, using fallback: %s", agent_name, error)
                return AgentResponse(
                    content=f"Agent {agent_name} failed: {error}. Using fallback response.",
                    metadata=ResponseMetadata(),
                    finish_reason=FinishReason.ERROR,
                )
            case ErrorHandlingStrategy.CONTINUE:
                logger.warning("Agent '%s' failed, continuing: %s", agent_name, error)
                return None
            case _:
                raise error

    async def _run_agent(self, agent: Agent, input: str, context: AgentContext) -> AgentResponse:
        """Invoke an agent, retrying failures under the "retry" policy."""
        if self._config.error_handling != ErrorHandlingStrategy.RETRY:
            return await agent.execute(input, context)

        retry_config = self._config.retry
        async for attempt in build_retrying(retry_config, _is_retryable, sleep=self._sleep):
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    logger.info(
                        "Retrying agent '%s' (attempt %d/%d)",
                        agent.name,
                        attempt.retry_state.attempt_number,
                        retry_config.max_attempts,
                    )
                response = await agent.execute(input, context)
        return response

    @asynccontextmanager
    async def _observe(self) -> AsyncIterator[None]:
        """Trace and time one workflow run."""
        labels = WorkflowMetricsLabels(self.name, self._config.type)
        with tracer.start_as_current_span(self.name):
            async with collect_workflow_metrics(labels):
                yield

    @staticmethod
    def _with_metadata(
        response: AgentResponse, tokens_used: int, latency_ms: int, iterations: int
    ) -> AgentResponse:
        return replace(
            response,
            metadata=replace(
                response.metadata,
                tokens_used=tokens_used,
                latency_ms=latency_ms,
                iterations=iterations,
            ),
        )
