"""In-process conversation buffer."""

from collections.abc import Sequence

from agentsea.platform.agent.messages import Message


class BufferMemory:
    """Memory store keeping conversation history in a dict.

    When max_messages is set, only the most recent messages of each
    conversation are kept.
    """

    def __init__(self, max_messages: int | None = None):
        self._max_messages = max_messages
        self._store: dict[str, list[Message]] = {}

    async def save(self, conversation_id: str, messages: Sequence[Message]) -> None:
        messages_to_store = list(messages)
        if self._max_messages and len(messages_to_store) > self._max_messages:
            messages_to_store = messages_to_store[-self._max_messages :]
        self._store[conversation_id] = messages_to_store

    async def load(self, conversation_id: str) -> list[Message]:
        return list(self._store.get(conversation_id, []))

    async def clear(self, conversation_id: str) -> None:
        self._store.pop(conversation_id, None)

    def clear_all(self) -> None:
        self._store.clear()

    @property
    def conversation_ids(self) -> list[str]:
        return list(self._store)

    def __len__(self) -> int:
        return len(self._store)
