"""Built-in tools."""

from agentsea.platform.tools.builtin.calculator import CalculatorParams, calculator_tool
from agentsea.platform.tools.builtin.http_request import (
    HTTP_RETRY_CONFIG,
    HttpRequestParams,
    build_http_request_tool,
    http_request_tool,
)
from agentsea.platform.tools.builtin.text import (
    StringTransformParams,
    TextSummaryParams,
    string_transform_tool,
    text_summary_tool,
)

__all__ = [
    "HTTP_RETRY_CONFIG",
    "CalculatorParams",
    "HttpRequestParams",
    "StringTransformParams",
    "TextSummaryParams",
    "build_http_request_tool",
    "calculator_tool",
    "http_request_tool",
    "string_transform_tool",
    "text_summary_tool",
]
