"""Unit tests for the tool registry and invoker."""

import pytest
from pydantic import BaseModel

from agentsea.platform.agent.config import BackoffStrategy, RetryConfig
from agentsea.platform.agent.exceptions import InvalidParametersError, ToolNotFoundError
from agentsea.platform.agent.messages import ToolCall, ToolContext
from agentsea.platform.tools import FunctionTool, ToolRegistry, tool


class EchoParams(BaseModel):
    text: str


class RecordingSleep:
    """Sleep replacement that records requested delays."""

    def __init__(self):
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def context() -> ToolContext:
    return ToolContext(agent_name="test-agent", conversation_id="conv-1")


@pytest.fixture
def echo_tool() -> FunctionTool:
    @tool("echo", "Echo text back", EchoParams)
    async def echo(params, context):
        return params["text"]

    return echo


def flaky_tool(failures: int, retry_config: RetryConfig, message: str = "flaky") -> FunctionTool:
    """Build a tool failing `failures` times before succeeding."""
    calls = {"count": 0}

    def run(params, context):
        calls["count"] += 1
        if calls["count"] <= failures:
            raise RuntimeError(message)
        return {"attempts": calls["count"]}

    return FunctionTool(
        name="flaky",
        description="Fails a few times",
        parameters=EchoParams,
        func=run,
        retry_config=retry_config,
    )


class TestRegistration:
    """Tests for registering and looking up tools."""

    def test_register_and_get(self, echo_tool):
        """Registered tools can be looked up by name."""
        registry = ToolRegistry()
        registry.register(echo_tool)
        assert registry.get("echo") is echo_tool
        assert registry.has("echo")
        assert "echo" in registry
        assert len(registry) == 1

    def test_duplicate_name_raises(self, echo_tool):
        """Registering a name twice raises ValueError."""
        registry = ToolRegistry([echo_tool])
        with pytest.raises(ValueError, match="already registered"):
            registry.register(echo_tool)

    def test_unregister_and_clear(self, echo_tool):
        """Tools can be removed individually or all at once."""
        registry = ToolRegistry([echo_tool])
        assert registry.unregister("echo")
        assert not registry.unregister("echo")
        registry.register(echo_tool)
        registry.clear()
        assert registry.get_all() == []

    def test_get_missing_returns_none(self):
        """Unknown names return None."""
        assert ToolRegistry().get("missing") is None


class TestExecute:
    """Tests for executing tool calls."""

    async def test_executes_async_tool(self, echo_tool, context):
        """Async tools are awaited."""
        registry = ToolRegistry([echo_tool])
        call = ToolCall(id="c1", tool_name="echo", parameters={"text": "hi"})
        assert await registry.execute(call, context) == "hi"

    async def test_executes_sync_tool(self, context):
        """Sync tools are called directly."""
        sync_tool = FunctionTool(
            name="upper",
            description="Upper-case text",
            parameters=EchoParams,
            func=lambda params, ctx: params["text"].upper(),
        )
        registry = ToolRegistry([sync_tool])
        call = ToolCall(id="c1", tool_name="upper", parameters={"text": "hi"})
        assert await registry.execute(call, context) == "HI"

    async def test_unknown_tool_raises(self, context):
        """Calls to unregistered tools raise ToolNotFoundError."""
        with pytest.raises(ToolNotFoundError) as exc_info:
            await ToolRegistry().execute(ToolCall(id="c1", tool_name="nope"), context)
        assert exc_info.value.tool_name == "nope"

    async def test_invalid_parameters_raise(self, echo_tool, context):
        """Parameters failing validation raise InvalidParametersError."""
        registry = ToolRegistry([echo_tool])
        with pytest.raises(InvalidParametersError) as exc_info:
            await registry.execute(ToolCall(id="c1", tool_name="echo", parameters={}), context)
        assert exc_info.value.tool_name == "echo"


class TestRetries:
    """Tests for tool retry policies."""

    async def test_exponential_retry_delays(self, context):
        """Two failures with exponential backoff wait 100 ms then 200 ms."""
        sleep = RecordingSleep()
        retry = RetryConfig(
            max_attempts=3,
            backoff=BackoffStrategy.EXPONENTIAL,
            initial_delay_ms=100,
            max_delay_ms=10_000,
        )
        registry = ToolRegistry([flaky_tool(2, retry)], sleep=sleep)

        call = ToolCall(id="c1", tool_name="flaky", parameters={"text": "x"})
        result = await registry.execute(call, context)

        assert result == {"attempts": 3}
        assert sleep.delays == pytest.approx([0.1, 0.2])

    async def test_exhaustion_reraises_last_error(self, context):
        """The last error propagates unchanged once attempts run out."""
        sleep = RecordingSleep()
        retry = RetryConfig(max_attempts=2, initial_delay_ms=100)
        registry = ToolRegistry([flaky_tool(5, retry)], sleep=sleep)

        with pytest.raises(RuntimeError, match="flaky"):
            await registry.execute(
                ToolCall(id="c1", tool_name="flaky", parameters={"text": "x"}), context
            )
        assert sleep.delays == pytest.approx([0.1])

    async def test_non_retryable_error_fails_immediately(self, context):
        """Errors outside retryable_errors are not retried."""
        sleep = RecordingSleep()
        retry = RetryConfig(
            max_attempts=3, initial_delay_ms=100, retryable_errors=frozenset({"timeout"})
        )
        registry = ToolRegistry([flaky_tool(1, retry, message="fatal")], sleep=sleep)

        with pytest.raises(RuntimeError, match="fatal"):
            await registry.execute(
                ToolCall(id="c1", tool_name="flaky", parameters={"text": "x"}), context
            )
        assert sleep.delays == []

    async def test_retryable_error_is_retried(self, context):
        """Errors listed in retryable_errors are retried."""
        sleep = RecordingSleep()
        retry = RetryConfig(
            max_attempts=3, initial_delay_ms=100, retryable_errors=frozenset({"timeout"})
        )
        registry = ToolRegistry([flaky_tool(1, retry, message="timeout")], sleep=sleep)

        result = await registry.execute(
            ToolCall(id="c1", tool_name="flaky", parameters={"text": "x"}), context
        )
        assert result == {"attempts": 2}

    async def test_invalid_parameters_not_retried(self, context):
        """Validation failures never reach the retry loop."""
        sleep = RecordingSleep()
        registry = ToolRegistry([flaky_tool(0, RetryConfig(max_attempts=3))], sleep=sleep)

        with pytest.raises(InvalidParametersError):
            await registry.execute(ToolCall(id="c1", tool_name="flaky", parameters={}), context)
        assert sleep.delays == []


class TestFunctionTool:
    """Tests for FunctionTool schemas."""

    def test_json_schema_from_model(self, echo_tool):
        """json_schema comes from the parameters model."""
        schema = echo_tool.json_schema()
        assert schema["properties"]["text"]["type"] == "string"
        assert schema["required"] == ["text"]

    def test_openai_schema(self, echo_tool):
        """to_openai_schema wraps the schema in a function definition."""
        schema = echo_tool.to_openai_schema()
        assert schema["type"] == "function"
        assert schema["function"]["name"] == "echo"
        assert schema["function"]["description"] == "Echo text back"
