"""Conversation memory stores."""

from agentsea.platform.memory.buffer import BufferMemory
from agentsea.platform.memory.summary import SummaryMemory

__all__ = ["BufferMemory", "SummaryMemory"]
