"""Unit tests for message, tool call and stream event types."""

from dataclasses import FrozenInstanceError

import pytest

from agentsea.platform.agent.messages import (
    AgentContext,
    AgentResponse,
    ContentEvent,
    DoneEvent,
    ErrorEvent,
    FinishReason,
    IterationEvent,
    Message,
    ResponseMetadata,
    Role,
    TokenUsage,
    ToolCall,
)


class TestMessage:
    """Tests for the Message dataclass."""

    def test_optional_fields_default_to_none(self):
        """Tool-related fields are optional."""
        msg = Message(role=Role.USER, content="hi")
        assert msg.tool_calls is None
        assert msg.tool_call_id is None
        assert msg.name is None

    def test_role_is_string_enum(self):
        """Roles compare equal to their string values."""
        assert Message(role=Role.TOOL, content="{}").role == "tool"

    def test_frozen(self):
        """Messages are immutable."""
        msg = Message(role=Role.USER, content="hi")
        with pytest.raises(FrozenInstanceError):
            msg.content = "bye"  # type: ignore


class TestToolCall:
    """Tests for ToolCall settlement."""

    def test_with_result_settles(self):
        """with_result returns a settled copy carrying the result."""
        call = ToolCall(id="c1", tool_name="calculator", parameters={"a": 1})
        settled = call.with_result({"result": 2})
        assert settled.settled
        assert settled.succeeded
        assert settled.result == {"result": 2}
        assert not call.settled

    def test_with_error_settles(self):
        """with_error returns a settled copy carrying the error."""
        settled = ToolCall(id="c1", tool_name="calculator").with_error("boom")
        assert settled.settled
        assert not settled.succeeded
        assert settled.error == "boom"
        assert settled.result is None

    def test_cannot_settle_twice(self):
        """A settled call cannot be settled again."""
        settled = ToolCall(id="c1", tool_name="calculator").with_result(1)
        with pytest.raises(ValueError, match="already settled"):
            settled.with_error("late")

    def test_as_dict(self):
        """as_dict renders the request part of the call."""
        call = ToolCall(id="c1", tool_name="search", parameters={"q": "x"})
        assert call.as_dict() == {"id": "c1", "name": "search", "args": {"q": "x"}}


class TestFinishReason:
    """Tests for stop reason normalisation."""

    @pytest.mark.parametrize(
        ("stop_reason", "expected"),
        [
            ("stop", FinishReason.STOP),
            ("end_turn", FinishReason.STOP),
            (None, FinishReason.STOP),
            ("length", FinishReason.LENGTH),
            ("max_tokens", FinishReason.LENGTH),
            ("tool_calls", FinishReason.TOOL_CALLS),
            ("tool_use", FinishReason.TOOL_CALLS),
            ("error", FinishReason.ERROR),
        ],
    )
    def test_from_stop_reason(self, stop_reason, expected):
        """Provider stop reasons map onto the closed FinishReason set."""
        assert FinishReason.from_stop_reason(stop_reason) == expected


class TestResponses:
    """Tests for response and context types."""

    def test_token_usage_total(self):
        """Total is the sum of input and output tokens."""
        assert TokenUsage(input_tokens=10, output_tokens=5).total == 15

    def test_agent_response_defaults(self):
        """AgentResponse defaults to a stop with empty metadata."""
        response = AgentResponse(content="done")
        assert response.finish_reason == FinishReason.STOP
        assert response.metadata == ResponseMetadata()
        assert response.tool_calls == ()
        assert response.next_agent is None

    def test_context_metadata_is_per_instance(self):
        """Each context gets its own metadata dict."""
        first = AgentContext(conversation_id="a")
        second = AgentContext(conversation_id="b")
        first.metadata["k"] = 1
        assert second.metadata == {}


class TestStreamEvents:
    """Tests for stream event discriminators."""

    def test_event_types(self):
        """Each event carries a fixed event_type tag."""
        assert IterationEvent(iteration=1).event_type == "iteration"
        assert ContentEvent(content="x", delta=True).event_type == "content"
        assert DoneEvent(metadata=ResponseMetadata()).event_type == "done"
        assert ErrorEvent(error="boom").event_type == "error"

    def test_event_type_not_settable(self):
        """event_type is not an init argument."""
        with pytest.raises(TypeError):
            ErrorEvent(error="boom", event_type="done")  # type: ignore
