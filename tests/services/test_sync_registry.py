"""
Tests for SyncRegistry.
"""

import asyncio

import pytest

from notecanvas.config import SyncConfig
from notecanvas.services import SyncRegistry

CANVAS = "boards/Main.canvas"


@pytest.fixture
def registry(memory_store):
    return SyncRegistry(memory_store, SyncConfig(section_name="Related"))


@pytest.fixture
def linked_board(memory_store, file_node, edge, canvas_json):
    memory_store.documents.update({"A.md": "# A", "B.md": "# B"})
    nodes = [file_node("n1", "A.md"), file_node("n2", "B.md")]
    memory_store.documents[CANVAS] = canvas_json(nodes)

    def _connect():
        memory_store.documents[CANVAS] = canvas_json(nodes, [edge("e1", "n1", "n2")])

    return _connect


class TestRegistryState:
    """Tests for synchronizer bookkeeping."""

    def test_one_synchronizer_per_canvas(self, registry):
        first = registry.get(CANVAS)

        assert registry.get(CANVAS) is first
        assert registry.get("other.canvas") is not first
        assert registry.canvases() == ["boards/Main.canvas", "other.canvas"]

    def test_synchronizer_uses_config(self, registry):
        assert registry.get(CANVAS).section_name == "Related"



@pytest.mark.asyncio
class TestRegistryPasses:
    """Tests for passes run through the registry."""

    async def test_initialize_then_modify(self, memory_store, registry, linked_board):
        assert await registry.initialize(CANVAS) is True

        linked_board()
        result = await registry.on_modified(CANVAS)

        assert result.added_edges == ["e1"]
        assert memory_store.documents["A.md"] == "# A\n\n## Related\n\n- [[B]]"

    async def test_disabled(self, memory_store, linked_board):
        registry = SyncRegistry(memory_store, SyncConfig(enable_edge_sync=False))
        linked_board()

        result = await registry.on_modified(CANVAS)

        assert result.aborted
        assert result.reason == "edge sync disabled"
        assert memory_store.documents["A.md"] == "# A"

    async def test_concurrent_passes_are_serialized(self, memory_store, registry, linked_board):
        """Test two events for one canvas never double-write a document."""
        await registry.initialize(CANVAS)
        linked_board()

        first, second = await asyncio.gather(
            registry.on_modified(CANVAS), registry.on_modified(CANVAS)
        )

        assert first.added_edges == ["e1"]
        assert second.added_edges == []
        assert memory_store.documents["B.md"] == "# B\n\n## Related\n\n- [[A]]"

    async def test_reset_unknown_canvas(self, registry):
        await registry.reset("never-seen.canvas")
        assert registry.canvases() == []

    async def test_discard(self, registry):
        registry.get(CANVAS)
        await registry.discard(CANVAS)
        await registry.discard("never-seen.canvas")

        assert registry.canvases() == []


@pytest.fixture
def gated_store(memory_store):
    """Store whose reads block until ``gate`` is set; ``waiting`` counts blocked reads."""
    read = memory_store.read
    memory_store.gate = asyncio.Event()
    memory_store.waiting = 0

    async def gated_read(doc_id):
        memory_store.waiting += 1
        await memory_store.gate.wait()
        memory_store.waiting -= 1
        return await read(doc_id)

    memory_store.read = gated_read
    return memory_store


@pytest.mark.asyncio
class TestRegistryOrdering:
    """Reset and discard wait for a pass that is already running."""

    async def test_reset_lands_after_running_pass(self, gated_store, registry, linked_board):
        gated_store.gate.set()
        await registry.initialize(CANVAS)
        gated_store.gate.clear()
        linked_board()

        running = asyncio.create_task(registry.on_modified(CANVAS))
        await asyncio.sleep(0)
        resetting = asyncio.create_task(registry.reset(CANVAS))
        await asyncio.sleep(0)

        assert gated_store.waiting == 1
        assert not resetting.done()

        gated_store.gate.set()
        result = await running
        await resetting

        assert result.added_edges == ["e1"]
        assert registry.get(CANVAS).snapshot.is_empty

    async def test_discard_keeps_passes_serialized(self, gated_store, registry, linked_board):
        linked_board()

        running = asyncio.create_task(registry.on_modified(CANVAS))
        await asyncio.sleep(0)
        discarding = asyncio.create_task(registry.discard(CANVAS))
        await asyncio.sleep(0)
        following = asyncio.create_task(registry.on_modified(CANVAS))
        await asyncio.sleep(0)

        assert gated_store.waiting == 1
        assert not discarding.done()

        gated_store.gate.set()
        first = await running
        await discarding
        second = await following

        assert first.added_edges == ["e1"]
        assert second.added_edges == ["e1"]
        assert gated_store.documents["A.md"] == "# A\n\n## Related\n\n- [[B]]"
        assert gated_store.documents["B.md"] == "# B\n\n## Related\n\n- [[A]]"
