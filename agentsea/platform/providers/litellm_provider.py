"""LLM provider implementation using LiteLLM."""

import json
import logging
from collections.abc import AsyncIterator, Sequence
from typing import Any, Self

import litellm

from agentsea.platform.agent.messages import (
    LLMResponse,
    LLMStreamChunk,
    Message,
    ProviderConfig,
    Role,
    TokenUsage,
    ToolCall,
)
from agentsea.platform.agent.protocol import Tool
from agentsea.platform.settings import LitellmSettings

logger = logging.getLogger(__name__)


class LiteLLMProvider:
    """Provider that talks to any LiteLLM-supported model.

    Messages and tools are sent in the OpenAI chat completion format, which
    LiteLLM translates for the target vendor.
    """

    def __init__(self, api_key: str | None = None, api_base: str | None = None):
        """Initialize the provider.

        Args:
            api_key: API key for authentication
            api_base: Base URL of the model endpoint or LiteLLM proxy
        """
        self._api_key = api_key
        self._api_base = api_base

    @classmethod
    def from_settings(cls, settings: LitellmSettings) -> Self:
        return cls(api_key=settings.api_key, api_base=settings.api_base)

    async def generate_response(
        self,
        messages: Sequence[Message],
        config: ProviderConfig,
    ) -> LLMResponse:
        response = await litellm.acompletion(**self._request(messages, config))
        choice = response.choices[0]
        return LLMResponse(
            content=choice.message.content or "",
            stop_reason=choice.finish_reason or "stop",
            usage=self._extract_usage(response),
            raw_response=response,
        )

    async def stream_response(
        self,
        messages: Sequence[Message],
        config: ProviderConfig,
    ) -> AsyncIterator[LLMStreamChunk]:
        """Stream a response.

        Tool call arguments arrive as string fragments keyed by index; they are
        assembled and yielded as complete tool call chunks once the stream ends.
        """
        request = self._request(messages, config)
        request["stream"] = True
        request["stream_options"] = {"include_usage": True}
        response = await litellm.acompletion(**request)

        accumulated: dict[int, dict[str, Any]] = {}
        usage: TokenUsage | None = None
        async for chunk in response:
            chunk_usage = getattr(chunk, "usage", None)
            if chunk_usage:
                usage = TokenUsage(
                    input_tokens=chunk_usage.prompt_tokens or 0,
                    output_tokens=chunk_usage.completion_tokens or 0,
                )
            if not chunk.choices:
                continue

            delta = chunk.choices[0].delta
            if delta.content:
                yield LLMStreamChunk(type="content", content=delta.content)

            for fragment in delta.tool_calls or []:
                entry = accumulated.setdefault(
                    fragment.index, {"id": None, "name": "", "arguments": ""}
                )
                if fragment.id:
                    entry["id"] = fragment.id
                if fragment.function is not None:
                    if fragment.function.name:
                        entry["name"] = fragment.function.name
                    if fragment.function.arguments:
                        entry["arguments"] += fragment.function.arguments

        for index, entry in sorted(accumulated.items()):
            yield LLMStreamChunk(
                type="tool_call",
                tool_call={
                    "id": entry["id"] or f"call_{index}",
                    "tool_name": entry["name"],
                    "parameters": _parse_arguments(entry["arguments"]),
                },
            )
        yield LLMStreamChunk(type="done", usage=usage)

    def parse_tool_calls(self, response: LLMResponse) -> list[ToolCall]:
        raw = response.raw_response
        if raw is None or not getattr(raw, "choices", None):
            return []

        tool_calls = raw.choices[0].message.tool_calls or []
        return [
            ToolCall(
                id=tc.id,
                tool_name=tc.function.name,
                parameters=_parse_arguments(tc.function.arguments),
            )
            for tc in tool_calls
        ]

    def _request(self, messages: Sequence[Message], config: ProviderConfig) -> dict[str, Any]:
        request: dict[str, Any] = {
            "model": config.model,
            "messages": self._convert_messages(messages, config.system_prompt),
            "api_key": self._api_key,
            "api_base": self._api_base,
        }
        if config.temperature is not None:
            request["temperature"] = config.temperature
        if config.max_tokens is not None:
            request["max_tokens"] = config.max_tokens
        if config.top_p is not None:
            request["top_p"] = config.top_p
        if config.stop_sequences:
            request["stop"] = list(config.stop_sequences)
        if config.tools:
            request["tools"] = [_tool_schema(tool) for tool in config.tools]
        return request

    @staticmethod
    def _convert_messages(
        messages: Sequence[Message], system_prompt: str | None
    ) -> list[dict[str, Any]]:
        """Convert messages to the OpenAI chat format, prepending the system prompt."""
        converted: list[dict[str, Any]] = []
        if system_prompt:
            converted.append({"role": "system", "content": system_prompt})

        for msg in messages:
            entry: dict[str, Any] = {"role": str(msg.role), "content": msg.content or ""}
            if msg.tool_calls:
                entry["tool_calls"] = [
                    {
                        "id": tc["id"],
                        "type": "function",
                        "function": {"name": tc["name"], "arguments": json.dumps(tc["args"])},
                    }
                    for tc in msg.tool_calls
                ]
            if msg.role == Role.TOOL and msg.tool_call_id:
                entry["tool_call_id"] = msg.tool_call_id
                if msg.name:
                    entry["name"] = msg.name
            converted.append(entry)
        return converted

    @staticmethod
    def _extract_usage(response: Any) -> TokenUsage:
        usage = getattr(response, "usage", None)
        if not usage:
            return TokenUsage()
        return TokenUsage(
            input_tokens=usage.prompt_tokens or 0,
            output_tokens=usage.completion_tokens or 0,
        )


def _tool_schema(tool: Tool) -> dict[str, Any]:
    to_openai_schema = getattr(tool, "to_openai_schema", None)
    if to_openai_schema is not None:
        return to_openai_schema()
    return {
        "type": "function",
        "function": {
            "name": tool.name,
            "description": tool.description,
            "parameters": tool.json_schema(),
        },
    }


def _parse_arguments(arguments: str | dict[str, Any] | None) -> dict[str, Any]:
    if not arguments:
        return {}
    if isinstance(arguments, dict):
        return arguments
    try:
        return json.loads(arguments)
    except json.JSONDecodeError:
        logger.warning("Failed to parse tool call arguments: %s", arguments)
        return {}
