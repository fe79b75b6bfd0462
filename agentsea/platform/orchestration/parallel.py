"""Parallel workflow: every agent answers the same input concurrently."""

import asyncio
from time import monotonic

from agentsea.platform.agent.agent import Agent
from agentsea.platform.agent.messages import (
    AgentContext,
    AgentResponse,
    FinishReason,
    ResponseMetadata,
)
from agentsea.platform.orchestration.base import Workflow


class ParallelWorkflow(Workflow):
    """Runs all agents concurrently on the original input.

    The combined response holds one "[name]: content" block per agent that
    produced an answer, in declaration order. Failures are passed through the
    error handling policy only once every agent has settled.
    """

    async def execute(self, input: str, context: AgentContext) -> AgentResponse:
        async with self._observe():
            start_time = monotonic()
            agents = [self.get_agent(agent_config.name) for agent_config in self._config.agents]

            async def run(agent: Agent) -> AgentResponse | Exception:
                try:
                    return await self._run_agent(agent, input, context)
                except Exception as e:
                    return e

            async with asyncio.TaskGroup() as tg:
                tasks = [tg.create_task(run(agent)) for agent in agents]

            blocks: list[str] = []
            errors: list[str] = []
            tokens_used = iterations = 0
            for agent, task in zip(agents, tasks):
                result = task.result()
                if isinstance(result, Exception):
                    fallback = self.handle_error(result, agent.name, context)
                    if fallback is None:
                        errors.append(f"[{agent.name}]: {result}")
                    else:
                        blocks.append(f"[{agent.name}]: {fallback.content}")
                    continue
                blocks.append(f"[{agent.name}]: {result.content}")
                tokens_used += result.metadata.tokens_used
                iterations += result.metadata.iterations

            if blocks:
                content = "\n\n".join(blocks)
                finish_reason = FinishReason.STOP
            else:
                content = "Workflow completed with errors:\n" + "\n".join(errors)
                finish_reason = FinishReason.ERROR

            return AgentResponse(
                content=content,
                metadata=ResponseMetadata(
                    tokens_used=tokens_used,
                    latency_ms=int((monotonic() - start_time) * 1000),
                    iterations=iterations,
                ),
                finish_reason=finish_reason,
            )
