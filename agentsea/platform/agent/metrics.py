"""Agent, tool and workflow metrics.

Label tuples, Prometheus instruments and helpers used by the agent loop,
the tool registry and the workflow orchestrator.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from time import monotonic
from typing import NamedTuple

import prometheus_client

from agentsea.platform.observability.metrics import setup_counter, setup_histogram


class AgentMetricsLabels(NamedTuple):
    agent: str


class ToolMetricsLabels(NamedTuple):
    agent: str
    tool_name: str


class WorkflowMetricsLabels(NamedTuple):
    workflow: str
    workflow_type: str


_STATUS_SUCCESS = "success"
_STATUS_ERROR = "error"

agent_run_histogram = setup_histogram(
    prometheus_client.REGISTRY,
    name="agentsea_agent_run_duration_seconds",
    documentation="Agent invocation duration (seconds)",
    labelnames=AgentMetricsLabels._fields + ("status",),
)
tool_call_histogram = setup_histogram(
    prometheus_client.REGISTRY,
    name="agentsea_tool_call_duration_seconds",
    documentation="Tool call duration (seconds)",
    labelnames=ToolMetricsLabels._fields + ("status",),
)
workflow_run_histogram = setup_histogram(
    prometheus_client.REGISTRY,
    name="agentsea_workflow_run_duration_seconds",
    documentation="Workflow run duration (seconds)",
    labelnames=WorkflowMetricsLabels._fields + ("status",),
)
token_counter = setup_counter(
    prometheus_client.REGISTRY,
    name="agentsea_agent_tokens",
    documentation="Tokens consumed by agent provider calls",
    labelnames=("agent", "model", "direction"),
)


@asynccontextmanager
async def collect_agent_metrics(labels: AgentMetricsLabels) -> AsyncIterator[None]:
    """Time an agent invocation and record it with its outcome.

    Args:
        labels: Agent labels
    """
    start_time = monotonic()
    status = _STATUS_SUCCESS
    try:
        yield
    except BaseException:
        status = _STATUS_ERROR
        raise
    finally:
        agent_run_histogram.labels(*labels, status).observe(monotonic() - start_time)


@asynccontextmanager
async def collect_workflow_metrics(labels: WorkflowMetricsLabels) -> AsyncIterator[None]:
    """Time a workflow run and record it with its outcome.

    Args:
        labels: Workflow labels
    """
    start_time = monotonic()
    status = _STATUS_SUCCESS
    try:
        yield
    except BaseException:
        status = _STATUS_ERROR
        raise
    finally:
        workflow_run_histogram.labels(*labels, status).observe(monotonic() - start_time)


def record_agent_run(labels: AgentMetricsLabels, duration: float, error: bool = False) -> None:
    """Record an agent invocation timed outside collect_agent_metrics.

    Used by streaming runs, whose failures end the stream instead of raising.
    """
    status = _STATUS_ERROR if error else _STATUS_SUCCESS
    agent_run_histogram.labels(*labels, status).observe(duration)


def record_tool_call(labels: ToolMetricsLabels, duration: float, error: bool = False) -> None:
    """Record a single tool call.

    Args:
        labels: Tool labels
        duration: Call duration in seconds, retries included
        error: Whether the call ended in an error
    """
    status = _STATUS_ERROR if error else _STATUS_SUCCESS
    tool_call_histogram.labels(*labels, status).observe(duration)


def record_agent_tokens(agent: str, model: str, input_tokens: int, output_tokens: int) -> None:
    """Record token usage of one provider call.

    Zero counts are skipped.
    """
    if input_tokens > 0:
        token_counter.labels(agent, model, "input").inc(input_tokens)
    if output_tokens > 0:
        token_counter.labels(agent, model, "output").inc(output_tokens)
