"""Response content formatting."""

from agentsea.platform.formatters.content import ContentFormatter

__all__ = ["ContentFormatter"]
