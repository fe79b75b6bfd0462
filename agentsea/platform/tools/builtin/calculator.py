"""Calculator tool for basic arithmetic."""

from typing import Any, Literal

from pydantic import BaseModel, Field

from agentsea.platform.agent.messages import ToolContext
from agentsea.platform.tools.definition import tool


class CalculatorParams(BaseModel):
    operation: Literal["add", "subtract", "multiply", "divide"] = Field(
        description="The arithmetic operation to perform"
    )
    a: float = Field(description="First number")
    b: float = Field(description="Second number")


@tool(
    name="calculator",
    description="Perform basic arithmetic operations (add, subtract, multiply, divide)",
    parameters=CalculatorParams,
)
def calculator_tool(params: dict[str, Any], context: ToolContext) -> dict[str, float]:
    a, b = params["a"], params["b"]
    match params["operation"]:
        case "add":
            return {"result": a + b}
        case "subtract":
            return {"result": a - b}
        case "multiply":
            return {"result": a * b}
        case "divide":
            if b == 0:
                raise ValueError("Cannot divide by zero")
            return {"result": a / b}
        case operation:
            raise ValueError(f"Unknown operation: {operation}")
