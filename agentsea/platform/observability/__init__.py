"""Observability infrastructure module.

This module provides monitoring for agent runs:
- Structured logging with conversation IDs
- Prometheus metrics
"""

from agentsea.platform.observability.logging import (
    bound_conversation,
    configure_logging,
    conversation_id_ctx,
    get_logger,
)
from agentsea.platform.observability.metrics import BUCKETS, metrics
from agentsea.platform.settings import Settings


def setup_observability(settings: Settings) -> None:
    """Apply logging configuration from settings."""
    configure_logging(settings.logging.level, json_output=settings.logging.json_output)


__all__ = [
    "BUCKETS",
    "bound_conversation",
    "configure_logging",
    "conversation_id_ctx",
    "get_logger",
    "metrics",
    "setup_observability",
]
