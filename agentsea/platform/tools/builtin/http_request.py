"""HTTP request tool for calling external APIs."""

from typing import Any, Literal

import httpx
from pydantic import BaseModel, Field, HttpUrl

from agentsea.platform.agent.config import BackoffStrategy, RetryConfig
from agentsea.platform.agent.exceptions import ToolError
from agentsea.platform.agent.messages import ToolContext
from agentsea.platform.tools.definition import FunctionTool, tool

HTTP_REQUEST_TOOL_NAME = "http_request"
REQUEST_TIMEOUT_ERROR = "Request timeout"
NETWORK_ERROR = "Network error"

HTTP_RETRY_CONFIG = RetryConfig(
    max_attempts=3,
    backoff=BackoffStrategy.EXPONENTIAL,
    initial_delay_ms=1000,
    max_delay_ms=10000,
    retryable_errors=frozenset({REQUEST_TIMEOUT_ERROR, NETWORK_ERROR}),
)

_BODY_METHODS = frozenset({"POST", "PUT", "PATCH"})


class HttpRequestParams(BaseModel):
    url: HttpUrl = Field(description="The URL to make the request to")
    method: Literal["GET", "POST", "PUT", "DELETE", "PATCH"] = Field(
        "GET", description="HTTP method"
    )
    headers: dict[str, str] | None = Field(None, description="HTTP headers")
    body: Any = Field(None, description="Request body (for POST, PUT, PATCH)")
    timeout: int = Field(10000, gt=0, description="Request timeout in milliseconds")


def build_http_request_tool(transport: httpx.AsyncBaseTransport | None = None) -> FunctionTool:
    """Build the http_request tool.

    Timeouts and connection failures raise ToolError with the exact messages
    listed in HTTP_RETRY_CONFIG, so the registry retries them. Other failures
    are not retried.

    Args:
        transport: Optional httpx transport, e.g. a MockTransport in tests

    Returns:
        The http_request FunctionTool
    """

    @tool(
        name=HTTP_REQUEST_TOOL_NAME,
        description=(
            "Make HTTP requests to external APIs. Supports GET, POST, PUT, DELETE, PATCH methods."
        ),
        parameters=HttpRequestParams,
        retry_config=HTTP_RETRY_CONFIG,
    )
    async def http_request(params: dict[str, Any], context: ToolContext) -> dict[str, Any]:
        method = params["method"]
        headers = {"Content-Type": "application/json", **(params["headers"] or {})}
        body = params["body"] if method in _BODY_METHODS else None

        try:
            async with httpx.AsyncClient(
                transport=transport, timeout=params["timeout"] / 1000
            ) as client:
                response = await client.request(
                    method, str(params["url"]), headers=headers, json=body
                )
        except httpx.TimeoutException as e:
            raise ToolError(REQUEST_TIMEOUT_ERROR, tool_name=HTTP_REQUEST_TOOL_NAME) from e
        except httpx.TransportError as e:
            raise ToolError(NETWORK_ERROR, tool_name=HTTP_REQUEST_TOOL_NAME) from e
        except httpx.HTTPError as e:
            raise ToolError(f"HTTP request failed: {e}", tool_name=HTTP_REQUEST_TOOL_NAME) from e

        if "application/json" in response.headers.get("content-type", ""):
            data = response.json()
        else:
            data = response.text

        return {
            "status": response.status_code,
            "status_text": response.reason_phrase,
            "headers": dict(response.headers),
            "data": data,
        }

    return http_request


http_request_tool = build_http_request_tool()
