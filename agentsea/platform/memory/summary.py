"""Conversation memory that summarizes older messages with a language model."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from agentsea.platform.agent.messages import Message, ProviderConfig, Role
from agentsea.platform.agent.protocol import LLMProvider

logger = logging.getLogger(__name__)

SUMMARY_PREFIX = "Previous conversation summary: "
DEFAULT_SUMMARY_MODEL = "gpt-4o-mini"


@dataclass
class _Conversation:
    summary: str = ""
    recent: list[Message] = field(default_factory=list)


class SummaryMemory:
    """Memory store keeping recent messages verbatim and a summary of older ones.

    When a save holds more than max_recent_messages messages, the older ones
    are folded into a running summary produced by the provider. Loading
    returns the summary as a system message followed by the recent messages.
    The summary message handed out by load is dropped again on save.
    """

    def __init__(
        self,
        provider: LLMProvider,
        max_recent_messages: int = 10,
        summary_model: str = DEFAULT_SUMMARY_MODEL,
    ):
        """Initialize the memory.

        Args:
            provider: Provider used to write summaries
            max_recent_messages: Messages kept verbatim per conversation
            summary_model: Model identifier used for summaries
        """
        if max_recent_messages < 1:
            raise ValueError("max_recent_messages must be at least 1")
        self._provider = provider
        self._max_recent_messages = max_recent_messages
        self._summary_model = summary_model
        self._store: dict[str, _Conversation] = {}

    async def save(self, conversation_id: str, messages: Sequence[Message]) -> None:
        messages = [m for m in messages if not _is_summary(m)]
        existing = self._store.get(conversation_id, _Conversation())

        if len(messages) <= self._max_recent_messages:
            self._store[conversation_id] = _Conversation(existing.summary, messages)
            return

        older = messages[: -self._max_recent_messages]
        recent = messages[-self._max_recent_messages :]
        summary = await self._summarize(existing.summary, older)
        self._store[conversation_id] = _Conversation(summary, recent)

    async def load(self, conversation_id: str) -> list[Message]:
        conversation = self._store.get(conversation_id)
        if conversation is None:
            return []

        messages: list[Message] = []
        if conversation.summary:
            messages.append(
                Message(role=Role.SYSTEM, content=SUMMARY_PREFIX + conversation.summary)
            )
        messages.extend(conversation.recent)
        return messages

    async def clear(self, conversation_id: str) -> None:
        self._store.pop(conversation_id, None)

    def summary(self, conversation_id: str) -> str:
        """Current summary of a conversation, empty when nothing was summarized."""
        conversation = self._store.get(conversation_id)
        return conversation.summary if conversation else ""

    async def _summarize(self, existing_summary: str, messages: Sequence[Message]) -> str:
        conversation_text = "\n".join(f"{m.role}: {m.content}" for m in messages)
        if existing_summary:
            prompt = (
                f"Previous summary: {existing_summary}\n\n"
                f"New messages:\n{conversation_text}\n\n"
                "Please create an updated summary that incorporates both the previous "
                "summary and the new messages. Be concise but comprehensive."
            )
        else:
            prompt = f"Please summarize the following conversation concisely:\n\n{conversation_text}"

        try:
            response = await self._provider.generate_response(
                [Message(role=Role.USER, content=prompt)],
                ProviderConfig(model=self._summary_model, temperature=0.3, max_tokens=500),
            )
        except Exception as e:
            # Keep the raw text so nothing is lost
            logger.warning("Failed to create conversation summary: %s", e)
            if existing_summary:
                return f"{existing_summary}\n\n{conversation_text}"
            return conversation_text
        return response.content


def _is_summary(message: Message) -> bool:
    return message.role == Role.SYSTEM and message.content.startswith(SUMMARY_PREFIX)
