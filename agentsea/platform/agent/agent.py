"""Agent execution loop.

An Agent converses with a language model, executes the tools it asks for
and feeds the results back until the model produces a final answer or the
iteration ceiling is reached. Both a batched and a streaming form are
provided.
"""

import asyncio
import json
import logging
from collections.abc import AsyncIterator, Sequence
from contextlib import aclosing
from dataclasses import replace
from time import monotonic
from typing import Any

from opentelemetry import trace

from agentsea.platform.agent.config import AgentConfig, OutputFormat
from agentsea.platform.agent.exceptions import AgentExecutionError, MaxIterationsExceededError
from agentsea.platform.agent.messages import (
    AgentContext,
    AgentResponse,
    ContentEvent,
    DoneEvent,
    ErrorEvent,
    FinishReason,
    IterationEvent,
    LLMResponse,
    Message,
    ProviderConfig,
    ResponseMetadata,
    Role,
    StreamEvent,
    TokenUsage,
    ToolCall,
    ToolCallsEvent,
    ToolContext,
    ToolResultEvent,
)
from agentsea.platform.agent.metrics import (
    AgentMetricsLabels,
    collect_agent_metrics,
    record_agent_run,
    record_agent_tokens,
)
from agentsea.platform.agent.protocol import LLMProvider, MemoryStore, StreamingLLMProvider
from agentsea.platform.formatters import ContentFormatter
from agentsea.platform.observability.logging import bound_conversation
from agentsea.platform.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class Agent:
    """A configured agent bound to a provider, a tool registry and optional memory."""

    def __init__(
        self,
        config: AgentConfig,
        provider: LLMProvider,
        tool_registry: ToolRegistry,
        memory: MemoryStore | None = None,
    ) -> None:
        """Initialize the agent.

        Args:
            config: Agent configuration
            provider: Language model provider
            tool_registry: Registry resolving the tools the model calls
            memory: Optional store used to load and persist conversation history
        """
        self._config = config
        self._provider = provider
        self._tool_registry = tool_registry
        self._memory = memory

    @property
    def config(self) -> AgentConfig:
        return self._config

    @property
    def name(self) -> str:
        return self._config.name

    async def execute(self, input: str, context: AgentContext) -> AgentResponse:
        """Run the agent to completion.

        Args:
            input: User input for this turn
            context: Invocation context

        Returns:
            The final AgentResponse

        Raises:
            MaxIterationsExceededError: If the model keeps requesting tools past max_iterations
            AgentExecutionError: For any other failure, chained to its cause
        """
        with bound_conversation(context.conversation_id), tracer.start_as_current_span(self.name):
            async with collect_agent_metrics(AgentMetricsLabels(self.name)):
                return await self._execute(input, context)

    async def _execute(self, input: str, context: AgentContext) -> AgentResponse:
        messages = await self._load_history(context)
        messages.append(Message(role=Role.USER, content=input))
        try:
            response = await self._run_loop(messages, context)
        except MaxIterationsExceededError:
            await self._save_history(context, messages)
            raise
        except AgentExecutionError:
            raise
        except Exception as e:
            raise AgentExecutionError(str(e), agent_name=self.name) from e
        await self._save_history(context, messages)
        return response

    async def _run_loop(self, messages: list[Message], context: AgentContext) -> AgentResponse:
        provider_config = self._provider_config()
        start_time = monotonic()
        tokens_used = 0
        iterations = 0
        tool_calls_made: list[ToolCall] = []

        while iterations < self._config.max_iterations:
            iterations += 1
            logger.debug("Agent '%s' iteration %d", self.name, iterations)

            llm_response = await self._provider.generate_response(list(messages), provider_config)
            tokens_used += self._record_usage(llm_response.usage)

            tool_calls = self._provider.parse_tool_calls(llm_response)
            if not tool_calls:
                messages.append(Message(role=Role.ASSISTANT, content=llm_response.content))
                response = self._build_response(
                    llm_response,
                    tool_calls_made,
                    ResponseMetadata(
                        tokens_used=tokens_used,
                        latency_ms=_elapsed_ms(start_time),
                        iterations=iterations,
                    ),
                )
                return self.format_response(response)

            messages.append(_assistant_message(llm_response.content, tool_calls))
            settled = await self._execute_tools(tool_calls, context)
            tool_calls_made.extend(settled)
            messages.extend(_tool_message(call) for call in settled)

        raise MaxIterationsExceededError(self._config.max_iterations, agent_name=self.name)

    async def execute_stream(self, input: str, context: AgentContext) -> AsyncIterator[StreamEvent]:
        """Run the agent, yielding events as they happen.

        Failures never propagate to the consumer: they end the stream with a
        single ErrorEvent instead of a DoneEvent.

        Args:
            input: User input for this turn
            context: Invocation context

        Yields:
            IterationEvent, ContentEvent, ToolCallsEvent, ToolResultEvent and
            finally a DoneEvent or an ErrorEvent
        """
        # A consumer may stop early and the generator is then closed from another
        # context, so context variables are only attached while a step runs.
        span = tracer.start_span(self.name)
        start_time = monotonic()
        failed = False
        stream = self._execute_stream(input, context)
        try:
            while True:
                with (
                    bound_conversation(context.conversation_id),
                    trace.use_span(span, end_on_exit=False),
                ):
                    event = await anext(stream, None)
                if event is None:
                    break
                if isinstance(event, ErrorEvent):
                    failed = True
                    span.set_status(trace.Status(trace.StatusCode.ERROR, event.error))
                yield event
        finally:
            await stream.aclose()
            record_agent_run(AgentMetricsLabels(self.name), monotonic() - start_time, error=failed)
            span.end()

    async def _execute_stream(
        self, input: str, context: AgentContext
    ) -> AsyncIterator[StreamEvent]:
        messages = await self._load_history(context)
        messages.append(Message(role=Role.USER, content=input))
        try:
            async with aclosing(self._stream_loop(messages, context)) as events:
                async for event in events:
                    if isinstance(event, DoneEvent):
                        await self._save_history(context, messages)
                    yield event
        except Exception as e:
            logger.warning("Agent '%s' stream failed: %s", self.name, e)
            await self._save_history(context, messages)
            yield ErrorEvent(error=str(e))

    async def _stream_loop(
        self, messages: list[Message], context: AgentContext
    ) -> AsyncIterator[StreamEvent]:
        provider_config = self._provider_config()
        start_time = monotonic()
        tokens_used = 0
        iterations = 0

        while iterations < self._config.max_iterations:
            iterations += 1
            yield IterationEvent(iteration=iterations)

            if isinstance(self._provider, StreamingLLMProvider):
                content_parts: list[str] = []
                fragments: list[dict[str, Any]] = []
                async for chunk in self._provider.stream_response(list(messages), provider_config):
                    if chunk.type == "content" and chunk.content:
                        content_parts.append(chunk.content)
                        yield ContentEvent(content=chunk.content, delta=True)
                    elif chunk.type == "tool_call" and chunk.tool_call:
                        _merge_tool_call_fragment(fragments, chunk.tool_call)
                    if chunk.usage is not None:
                        tokens_used += self._record_usage(chunk.usage)
                content = "".join(content_parts)
                tool_calls = [_tool_call_from_fragment(fragment) for fragment in fragments]
            else:
                llm_response = await self._provider.generate_response(
                    list(messages), provider_config
                )
                tokens_used += self._record_usage(llm_response.usage)
                content = llm_response.content
                yield ContentEvent(content=content)
                tool_calls = self._provider.parse_tool_calls(llm_response)

            if not tool_calls:
                messages.append(Message(role=Role.ASSISTANT, content=content))
                yield DoneEvent(
                    metadata=ResponseMetadata(
                        tokens_used=tokens_used,
                        latency_ms=_elapsed_ms(start_time),
                        iterations=iterations,
                    )
                )
                return

            messages.append(_assistant_message(content, tool_calls))
            yield ToolCallsEvent(tool_calls=tuple(tool_calls))
            settled = await self._execute_tools(tool_calls, context)
            for call in settled:
                messages.append(_tool_message(call))
                yield ToolResultEvent(tool_call=call)

        raise MaxIterationsExceededError(self._config.max_iterations, agent_name=self.name)

    def format_response(self, response: AgentResponse) -> AgentResponse:
        """Apply the configured output format to a response.

        Returns the response unchanged when no format (or plain text) is configured.
        """
        output_format = self._config.output_format
        if output_format is None or output_format == OutputFormat.TEXT:
            return response
        formatted = ContentFormatter.format(
            response.content, output_format, self._config.format_options
        )
        return replace(response, formatted=formatted)

    async def _execute_tools(
        self, tool_calls: Sequence[ToolCall], context: AgentContext
    ) -> list[ToolCall]:
        """Execute sibling tool calls concurrently and wait for all of them.

        Each task settles its own call, so one failure never cancels the others.
        """
        tool_context = ToolContext(
            agent_name=self.name,
            conversation_id=context.conversation_id,
            metadata=dict(context.metadata),
        )

        async def run(call: ToolCall) -> ToolCall:
            logger.debug("Dispatching tool '%s' (%s)", call.tool_name, call.id)
            try:
                result = await self._tool_registry.execute(call, tool_context)
            except Exception as e:
                logger.warning("Tool '%s' failed: %s", call.tool_name, e)
                return call.with_error(str(e))
            return call.with_result(result)

        async with asyncio.TaskGroup() as tg:
            tasks = [tg.create_task(run(call)) for call in tool_calls]

        return [task.result() for task in tasks]

    async def _load_history(self, context: AgentContext) -> list[Message]:
        if self._memory is None:
            return list(context.history)
        try:
            return list(await self._memory.load(context.conversation_id))
        except Exception as e:
            logger.warning("Failed to load conversation history: %s", e)
            return list(context.history)

    async def _save_history(self, context: AgentContext, messages: list[Message]) -> None:
        if self._memory is None:
            return
        try:
            await self._memory.save(context.conversation_id, messages)
        except Exception as e:
            logger.warning("Failed to save conversation history: %s", e)

    def _provider_config(self) -> ProviderConfig:
        return ProviderConfig(
            model=self._config.model,
            temperature=self._config.temperature,
            max_tokens=self._config.max_tokens,
            tools=tuple(self._config.tools),
            system_prompt=self._config.system_prompt,
        )

    def _record_usage(self, usage: TokenUsage) -> int:
        record_agent_tokens(self.name, self._config.model, usage.input_tokens, usage.output_tokens)
        return usage.total

    @staticmethod
    def _build_response(
        llm_response: LLMResponse,
        tool_calls: list[ToolCall],
        metadata: ResponseMetadata,
    ) -> AgentResponse:
        return AgentResponse(
            content=llm_response.content,
            metadata=metadata,
            tool_calls=tuple(tool_calls),
            next_agent=llm_response.next_agent,
            finish_reason=FinishReason.from_stop_reason(llm_response.stop_reason),
        )


def _elapsed_ms(start_time: float) -> int:
    return int((monotonic() - start_time) * 1000)


def _assistant_message(content: str, tool_calls: Sequence[ToolCall]) -> Message:
    return Message(
        role=Role.ASSISTANT,
        content=content,
        tool_calls=[call.as_dict() for call in tool_calls],
    )


def _tool_message(call: ToolCall) -> Message:
    if call.error is not None:
        content = f"Error: {call.error}"
    else:
        content = json.dumps(call.result, default=str)
    return Message(role=Role.TOOL, content=content, tool_call_id=call.id, name=call.tool_name)


def _merge_tool_call_fragment(fragments: list[dict[str, Any]], fragment: dict[str, Any]) -> None:
    """Merge a streamed tool call fragment into the pending calls.

    Fragments are merged by id; a fragment without an id extends the latest call.
    """
    call_id = fragment.get("id")
    target = None
    if call_id:
        target = next((f for f in fragments if f["id"] == call_id), None)
    elif fragments:
        target = fragments[-1]

    if target is None:
        target = {"id": call_id or f"call_{len(fragments)}", "tool_name": "", "parameters": {}}
        fragments.append(target)

    tool_name = fragment.get("tool_name") or fragment.get("name")
    if tool_name:
        target["tool_name"] = tool_name
    parameters = fragment.get("parameters")
    if parameters:
        target["parameters"].update(parameters)


def _tool_call_from_fragment(fragment: dict[str, Any]) -> ToolCall:
    return ToolCall(
        id=fragment["id"],
        tool_name=fragment["tool_name"],
        parameters=dict(fragment["parameters"]),
    )
