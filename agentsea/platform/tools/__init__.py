"""Tool definitions, built-in tools and the tool registry."""

from agentsea.platform.tools.definition import FunctionTool, tool
from agentsea.platform.tools.registry import ToolRegistry

__all__ = [
    "FunctionTool",
    "ToolRegistry",
    "tool",
]
