"""Multi-agent workflow orchestration.

This module provides workflows coordinating several agents:
- Sequential hand-off, each output feeding the next agent
- Parallel fan-out over the same input
- Supervisor routing driven by responses and routing rules
"""

from agentsea.platform.orchestration.base import Workflow
from agentsea.platform.orchestration.factory import WorkflowFactory
from agentsea.platform.orchestration.parallel import ParallelWorkflow
from agentsea.platform.orchestration.sequential import SequentialWorkflow
from agentsea.platform.orchestration.supervisor import MAX_ROUTING_HOPS, SupervisorWorkflow

__all__ = [
    "MAX_ROUTING_HOPS",
    "ParallelWorkflow",
    "SequentialWorkflow",
    "SupervisorWorkflow",
    "Workflow",
    "WorkflowFactory",
]
