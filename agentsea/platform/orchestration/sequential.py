"""Sequential workflow: each agent's output is the next agent's input."""

import logging

from agentsea.platform.agent.exceptions import WorkflowExecutionError
from agentsea.platform.agent.messages import AgentContext, AgentResponse
from agentsea.platform.orchestration.base import Workflow

logger = logging.getLogger(__name__)


class SequentialWorkflow(Workflow):
    """Runs agents one after another in declaration order.

    Token, latency and iteration counts are summed over every step. A
    fallback response is fed forward like a real one; a skipped step
    ("continue") leaves the input unchanged.
    """

    async def execute(self, input: str, context: AgentContext) -> AgentResponse:
        async with self._observe():
            current_input = input
            final_response: AgentResponse | None = None
            tokens_used = latency_ms = iterations = 0

            for agent_config in self._config.agents:
                agent = self.get_agent(agent_config.name)
                try:
                    response = await self._run_agent(agent, current_input, context)
                except Exception as e:
                    response = self.handle_error(e, agent.name, context)
                    if response is None:
                        continue

                if response.next_agent and response.next_agent not in self._agents:
                    logger.warning(
                        "Next agent '%s' not found, continuing sequence", response.next_agent
                    )

                tokens_used += response.metadata.tokens_used
                latency_ms += response.metadata.latency_ms
                iterations += response.metadata.iterations
                current_input = response.content
                final_response = response

            if final_response is None:
                raise WorkflowExecutionError("No agents produced a response")

            return self._with_metadata(final_response, tokens_used, latency_ms, iterations)
