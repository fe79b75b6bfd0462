"""structlog setup for agentsea.

Both structlog loggers and plain ``logging`` loggers end up in a single
stdout handler. Records emitted while an agent works on a conversation carry
its ``conversation_id``.
"""

import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar

import structlog

# Model provider clients log every HTTP exchange at INFO
QUIET_LOGGERS = ("httpx", "httpcore", "LiteLLM")

conversation_id_ctx: ContextVar[str | None] = ContextVar("conversation_id", default=None)


@contextmanager
def bound_conversation(conversation_id: str) -> Iterator[None]:
    """Tag log records emitted inside the block with a conversation ID.

    The binding is undone on exit, so the block must not span a ``yield`` of
    a generator that may be finalized from another context.
    """
    token = conversation_id_ctx.set(conversation_id)
    try:
        yield
    finally:
        conversation_id_ctx.reset(token)


def add_conversation_id(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: structlog.types.EventDict,
) -> structlog.types.EventDict:
    conversation_id = conversation_id_ctx.get()
    if conversation_id:
        event_dict["conversation_id"] = conversation_id
    return event_dict


def _pre_chain() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_conversation_id,
        structlog.processors.UnicodeDecoder(),
    ]


def _stdout_handler(renderer: structlog.types.Processor) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_pre_chain(),
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    return handler


def configure_logging(log_level: str, json_output: bool = True) -> None:
    """Route all logging through structlog.

    Args:
        log_level: Root level name such as "INFO" or "DEBUG"
        json_output: One JSON object per line when True, colored console text otherwise
    """
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer(colors=True)
    )

    structlog.configure(
        processors=[*_pre_chain(), structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    root = logging.getLogger()
    root.handlers[:] = [_stdout_handler(renderer)]
    root.setLevel(log_level)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
