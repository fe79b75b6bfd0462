"""Unit tests for the in-process buffer memory."""

from agentsea.platform.agent.messages import Message, Role
from agentsea.platform.agent.protocol import MemoryStore
from agentsea.platform.memory import BufferMemory


def conversation(count: int) -> list[Message]:
    return [Message(role=Role.USER, content=f"message {i}") for i in range(count)]


class TestBufferMemory:
    """Tests for BufferMemory."""

    def test_satisfies_memory_protocol(self):
        """BufferMemory is a MemoryStore."""
        assert isinstance(BufferMemory(), MemoryStore)

    async def test_round_trip_preserves_order(self):
        """Loaded messages match saved roles, contents and order."""
        memory = BufferMemory()
        messages = [
            Message(role=Role.USER, content="hi"),
            Message(role=Role.ASSISTANT, content="hello"),
            Message(role=Role.TOOL, content="{}", tool_call_id="c1", name="calculator"),
        ]
        await memory.save("conv-1", messages)
        loaded = await memory.load("conv-1")
        assert [(m.role, m.content) for m in loaded] == [(m.role, m.content) for m in messages]

    async def test_unknown_conversation_is_empty(self):
        """Loading an unknown conversation returns an empty list."""
        assert await BufferMemory().load("missing") == []

    async def test_truncates_to_max_messages(self):
        """Only the most recent max_messages are kept."""
        memory = BufferMemory(max_messages=2)
        await memory.save("conv-1", conversation(5))
        loaded = await memory.load("conv-1")
        assert [m.content for m in loaded] == ["message 3", "message 4"]

    async def test_load_returns_copy(self):
        """Mutating a loaded list does not change stored history."""
        memory = BufferMemory()
        await memory.save("conv-1", conversation(1))
        loaded = await memory.load("conv-1")
        loaded.append(Message(role=Role.USER, content="extra"))
        assert len(await memory.load("conv-1")) == 1

    async def test_clear(self):
        """clear removes one conversation, clear_all removes every one."""
        memory = BufferMemory()
        await memory.save("a", conversation(1))
        await memory.save("b", conversation(1))
        await memory.clear("a")
        assert memory.conversation_ids == ["b"]
        memory.clear_all()
        assert len(memory) == 0
