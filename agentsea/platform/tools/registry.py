"""Tool registry and invoker.

Resolves tool calls to registered tools, validates parameters against the
tool's Pydantic model and executes with the tool's retry policy.
"""

import asyncio
import logging
from time import monotonic
from typing import Any

from pydantic import ValidationError

from agentsea.platform.agent.exceptions import InvalidParametersError, ToolNotFoundError
from agentsea.platform.agent.messages import ToolCall, ToolContext
from agentsea.platform.agent.metrics import ToolMetricsLabels, record_tool_call
from agentsea.platform.agent.protocol import Tool
from agentsea.platform.agent.retry import SleepFunction, build_retrying

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Registry for managing and executing tools."""

    def __init__(self, tools: list[Tool] | None = None, sleep: SleepFunction = asyncio.sleep):
        """Initialize the registry.

        Args:
            tools: Optional tools to register up front
            sleep: Sleep coroutine used between retry attempts
        """
        self._tools: dict[str, Tool] = {}
        self._sleep = sleep
        if tools:
            self.register_many(tools)

    def register(self, tool: Tool) -> None:
        """Register a tool.

        Raises:
            ValueError: If a tool with the same name is already registered
        """
        if tool.name in self._tools:
            raise ValueError(f"Tool '{tool.name}' is already registered")
        self._tools[tool.name] = tool

    def register_many(self, tools: list[Tool]) -> None:
        for tool in tools:
            self.register(tool)

    def get(self, name: str) -> Tool | None:
        return self._tools.get(name)

    def get_all(self) -> list[Tool]:
        return list(self._tools.values())

    def has(self, name: str) -> bool:
        return name in self._tools

    def unregister(self, name: str) -> bool:
        return self._tools.pop(name, None) is not None

    def clear(self) -> None:
        self._tools.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    async def execute(self, tool_call: ToolCall, context: ToolContext) -> Any:
        """Execute a tool call.

        Args:
            tool_call: The call to execute
            context: Context passed through to the tool

        Returns:
            The tool's result

        Raises:
            ToolNotFoundError: If no tool with the call's name is registered
            InvalidParametersError: If parameters fail validation (never retried)
            Exception: The last execution error once retries are exhausted
        """
        tool = self._tools.get(tool_call.tool_name)
        if tool is None:
            raise ToolNotFoundError(tool_call.tool_name)

        try:
            validated = tool.parameters.model_validate(tool_call.parameters or {})
        except ValidationError as e:
            raise InvalidParametersError(tool.name, str(e)) from e
        params = validated.model_dump()

        labels = ToolMetricsLabels(context.agent_name, tool.name)
        start_time = monotonic()
        try:
            result = await self._run(tool, params, context)
        except Exception:
            record_tool_call(labels, duration=monotonic() - start_time, error=True)
            raise
        record_tool_call(labels, duration=monotonic() - start_time)
        return result

    async def _run(self, tool: Tool, params: dict[str, Any], context: ToolContext) -> Any:
        if tool.retry_config is None:
            return await tool.execute(params, context)

        async for attempt in build_retrying(tool.retry_config, sleep=self._sleep):
            with attempt:
                if attempt.retry_state.attempt_number > 1:
                    logger.debug(
                        "Retrying tool '%s' (attempt %d/%d)",
                        tool.name,
                        attempt.retry_state.attempt_number,
                        tool.retry_config.max_attempts,
                    )
                result = await tool.execute(params, context)
        return result
