"""Function-backed tool definitions.

Tools are described by a Pydantic parameters model and a sync or async
function. The model validates call parameters and provides the JSON schema
bound to the language model.
"""

import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, TypeAlias

from pydantic import BaseModel

from agentsea.platform.agent.config import RetryConfig
from agentsea.platform.agent.messages import ToolContext

ToolFunction: TypeAlias = Callable[[dict[str, Any], ToolContext], Any | Awaitable[Any]]


@dataclass(frozen=True)
class FunctionTool:
    """A tool that delegates execution to a plain function.

    Attributes:
        name: Unique tool name (snake_case)
        description: What the tool does, shown to the model
        parameters: Pydantic model validating call parameters
        func: Callable receiving (params, context); may be sync or async
        retry_config: Optional retry policy for failed executions
    """

    name: str
    description: str
    parameters: type[BaseModel]
    func: ToolFunction
    retry_config: RetryConfig | None = None

    async def execute(self, params: dict[str, Any], context: ToolContext) -> Any:
        result = self.func(params, context)
        if inspect.isawaitable(result):
            return await result
        return result

    def json_schema(self) -> dict[str, Any]:
        return self.parameters.model_json_schema()

    def to_openai_schema(self) -> dict[str, Any]:
        """Render the tool in the OpenAI function calling format."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.json_schema(),
            },
        }


def tool(
    name: str,
    description: str,
    parameters: type[BaseModel],
    retry_config: RetryConfig | None = None,
) -> Callable[[ToolFunction], FunctionTool]:
    """Decorator turning a function into a FunctionTool.

    Usage:
        ```
        class EchoParams(BaseModel):
            text: str

        @tool("echo", "Echo text back", EchoParams)
        async def echo(params, context):
            return params["text"]
        ```
    """

    def decorator(func: ToolFunction) -> FunctionTool:
        return FunctionTool(
            name=name,
            description=description,
            parameters=parameters,
            func=func,
            retry_config=retry_config,
        )

    return decorator
