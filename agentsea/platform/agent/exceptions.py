"""Exception hierarchy for agent, tool and workflow failures."""


class AgentseaError(Exception):
    """Base exception for all agentsea errors."""


class AgentExecutionError(AgentseaError):
    """Raised when an agent invocation fails for a reason other than the iteration limit."""

    def __init__(self, message: str, agent_name: str | None = None):
        self.agent_name = agent_name
        super().__init__(f"Agent execution failed: {message}")


class MaxIterationsExceededError(AgentseaError):
    """Raised when the model keeps requesting tools past the iteration ceiling."""

    def __init__(self, max_iterations: int, agent_name: str | None = None):
        self.max_iterations = max_iterations
        self.agent_name = agent_name
        super().__init__(f"Agent exceeded maximum iterations ({max_iterations})")


class ToolError(AgentseaError):
    """Base exception for terminal tool call errors."""

    def __init__(self, message: str, tool_name: str):
        self.tool_name = tool_name
        super().__init__(message)


class ToolNotFoundError(ToolError):
    """Raised when a tool call names an unregistered tool."""

    def __init__(self, tool_name: str):
        super().__init__(f"Tool '{tool_name}' not found", tool_name=tool_name)


class InvalidParametersError(ToolError):
    """Raised when tool call parameters fail schema validation."""

    def __init__(self, tool_name: str, details: str):
        self.details = details
        super().__init__(f"Invalid parameters for tool '{tool_name}': {details}", tool_name=tool_name)


class WorkflowError(AgentseaError):
    """Base exception for workflow errors."""


class AgentNotFoundError(WorkflowError):
    """Raised when a workflow is asked for an agent it does not hold."""

    def __init__(self, agent_name: str):
        self.agent_name = agent_name
        super().__init__(f"Agent '{agent_name}' not found in workflow")


class WorkflowExecutionError(WorkflowError):
    """Raised when a workflow cannot produce any response."""
