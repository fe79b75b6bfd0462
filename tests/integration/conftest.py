"""Integration test fixtures.

This module provides shared fixtures for integration tests including:
- Tool registries with the calculator and a slow tool
- Memory stores and invocation contexts
- A sleep replacement for retry policies

Scripted providers live in scripted.py.
"""

import pytest
from scripted import sleep_tool

from agentsea.platform.agent.messages import AgentContext
from agentsea.platform.memory import BufferMemory
from agentsea.platform.tools import ToolRegistry
from agentsea.platform.tools.builtin import calculator_tool


@pytest.fixture
def tool_registry() -> ToolRegistry:
    return ToolRegistry([calculator_tool, sleep_tool])


@pytest.fixture
def memory() -> BufferMemory:
    return BufferMemory()


@pytest.fixture
def context() -> AgentContext:
    return AgentContext(conversation_id="conv-1")


class RecordingSleep:
    """Sleep replacement recording delays without waiting."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def no_sleep() -> RecordingSleep:
    return RecordingSleep()
