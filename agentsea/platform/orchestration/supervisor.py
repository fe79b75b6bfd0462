"""Supervisor workflow: agents hand control to each other through routing."""

import logging

from agentsea.platform.agent.config import RoutingStrategy
from agentsea.platform.agent.exceptions import WorkflowExecutionError
from agentsea.platform.agent.messages import AgentContext, AgentResponse
from agentsea.platform.orchestration.base import Workflow

logger = logging.getLogger(__name__)

MAX_ROUTING_HOPS = 10
ROUND_ROBIN_INDEX_KEY = "round_robin_index"


class SupervisorWorkflow(Workflow):
    """Starts at the first declared agent and follows routing decisions.

    The next agent is resolved from, in order: the response's explicit
    next_agent, the first matching routing rule, the round-robin cursor (when
    that strategy is configured). When none applies the workflow stops.
    Routing is bounded by MAX_ROUTING_HOPS; reaching the bound returns the
    last response.
    """

    async def execute(self, input: str, context: AgentContext) -> AgentResponse:
        async with self._observe():
            if not self._config.agents:
                raise WorkflowExecutionError("No agents configured in workflow")

            current_name: str | None = self._config.agents[0].name
            current_input = input
            final_response: AgentResponse | None = None
            tokens_used = latency_ms = iterations = 0
            hops = 0

            while current_name is not None and hops < MAX_ROUTING_HOPS:
                hops += 1
                agent = self.get_agent(current_name)
                try:
                    response = await self._run_agent(agent, current_input, context)
                except Exception as e:
                    response = self.handle_error(e, agent.name, context)
                    if response is None:
                        next_name = self._next_declared_agent(agent.name)
                        if next_name is None:
                            raise
                        current_name = next_name
                        continue

                tokens_used += response.metadata.tokens_used
                latency_ms += response.metadata.latency_ms
                iterations += response.metadata.iterations
                final_response = response
                current_input = response.content
                current_name = self._route(response, context)

            if current_name is not None:
                logger.warning(
                    "Supervisor workflow '%s' reached maximum routing hops (%d)",
                    self.name,
                    MAX_ROUTING_HOPS,
                )

            if final_response is None:
                raise WorkflowExecutionError("Workflow failed to produce a response")

            return self._with_metadata(final_response, tokens_used, latency_ms, iterations)

    def _route(self, response: AgentResponse, context: AgentContext) -> str | None:
        if response.next_agent:
            return response.next_agent

        routing = self._config.routing
        if routing is None:
            return None

        for rule in routing.rules:
            if rule.condition(context, response):
                return rule.next_agent

        if routing.strategy == RoutingStrategy.ROUND_ROBIN:
            return self._next_round_robin_agent(context)
        return None

    def _next_round_robin_agent(self, context: AgentContext) -> str | None:
        """Advance the round-robin cursor; None once a full cycle completes."""
        names = [agent_config.name for agent_config in self._config.agents]
        current_index = context.metadata.get(ROUND_ROBIN_INDEX_KEY, 0)
        next_index = (current_index + 1) % len(names)
        context.metadata[ROUND_ROBIN_INDEX_KEY] = next_index
        if next_index == 0:
            return None
        return names[next_index]

    def _next_declared_agent(self, name: str) -> str | None:
        names = [agent_config.name for agent_config in self._config.agents]
        index = names.index(name) if name in names else -1
        if 0 <= index < len(names) - 1:
            return names[index + 1]
        return None
