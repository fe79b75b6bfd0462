"""Unit tests for the exception hierarchy."""

import pytest

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


class TestExceptionHierarchy:
    """Tests for exception messages and base classes."""

    @pytest.mark.parametrize(
        "error",
        [
            AgentExecutionError("boom"),
            MaxIterationsExceededError(3),
            ToolNotFoundError("search"),
            InvalidParametersError("search", "q is required"),
            AgentNotFoundError("writer"),
            WorkflowExecutionError("nothing"),
        ],
    )
    def test_rooted_at_agentsea_error(self, error):
        """Every error derives from AgentseaError."""
        assert isinstance(error, AgentseaError)

    def test_agent_execution_error_message(self):
        """AgentExecutionError prefixes its message."""
        assert str(AgentExecutionError("provider down")) == "Agent execution failed: provider down"

    def test_max_iterations_carries_limit(self):
        """MaxIterationsExceededError exposes the limit."""
        error = MaxIterationsExceededError(5, agent_name="writer")
        assert error.max_iterations == 5
        assert error.agent_name == "writer"
        assert str(error) == "Agent exceeded maximum iterations (5)"

    def test_tool_errors(self):
        """Tool errors carry the tool name."""
        not_found = ToolNotFoundError("search")
        invalid = InvalidParametersError("search", "bad")
        assert isinstance(not_found, ToolError)
        assert isinstance(invalid, ToolError)
        assert not_found.tool_name == invalid.tool_name == "search"
        assert str(not_found) == "Tool 'search' not found"
        assert invalid.details == "bad"

    def test_workflow_errors(self):
        """Workflow errors share WorkflowError as base."""
        error = AgentNotFoundError("writer")
        assert isinstance(error, WorkflowError)
        assert error.agent_name == "writer"
        assert str(error) == "Agent 'writer' not found in workflow"
        assert isinstance(WorkflowExecutionError("x"), WorkflowError)
