"""Workflow construction from configuration."""

import asyncio

from agentsea.platform.agent.config import WorkflowConfig, WorkflowType
from agentsea.platform.agent.protocol import LLMProvider, MemoryStore
from agentsea.platform.agent.retry import SleepFunction
from agentsea.platform.orchestration.base import Workflow
from agentsea.platform.orchestration.parallel import ParallelWorkflow
from agentsea.platform.orchestration.sequential import SequentialWorkflow
from agentsea.platform.orchestration.supervisor import SupervisorWorkflow
from agentsea.platform.tools.registry import ToolRegistry

_WORKFLOW_CLASSES: dict[WorkflowType, type[Workflow]] = {
    WorkflowType.SEQUENTIAL: SequentialWorkflow,
    WorkflowType.PARALLEL: ParallelWorkflow,
    WorkflowType.SUPERVISOR: SupervisorWorkflow,
}


class WorkflowFactory:
    """Creates workflows keyed on their configured type."""

    @staticmethod
    def create(
        config: WorkflowConfig,
        provider: LLMProvider,
        tool_registry: ToolRegistry,
        memory: MemoryStore | None = None,
        sleep: SleepFunction = asyncio.sleep,
    ) -> Workflow:
        """Create a workflow for a configuration.

        Raises:
            ValueError: For custom workflows, which subclass Workflow directly,
                and for unknown types
        """
        if config.type == WorkflowType.CUSTOM:
            raise ValueError("Custom workflows must be instantiated directly")
        workflow_class = _WORKFLOW_CLASSES.get(config.type)
        if workflow_class is None:
            raise ValueError(f"Unknown workflow type: {config.type}")
        return workflow_class(config, provider, tool_registry, memory, sleep=sleep)
