"""
One EdgeSynchronizer per canvas, with passes serialized per canvas.

Hosts deliver change events for many canvases; each canvas gets its own
snapshot and its own lock so two passes never interleave on one canvas.
Reset and discard take the same lock, so they land between passes.
"""

import asyncio

from notecanvas.config import SyncConfig
from notecanvas.core.file_store.base import FileStore
from notecanvas.models.sync import SyncResult
from notecanvas.services.edge_sync import EdgeSynchronizer, FailureNotifier


class SyncRegistry:
    """Creates synchronizers lazily and runs their passes one at a time."""

    def __init__(
        self,
        file_store: FileStore,
        config: SyncConfig | None = None,
        notifier: FailureNotifier | None = None,
    ):
        self.file_store = file_store
        self.config = config or SyncConfig()
        self.notifier = notifier
        self._synchronizers: dict[str, EdgeSynchronizer] = {}
        # Locks outlive discard() so a pass still running on a discarded
        # synchronizer blocks the next pass on the same canvas
        self._locks: dict[str, asyncio.Lock] = {}

    def get(self, canvas_id: str) -> EdgeSynchronizer:
        if canvas_id not in self._synchronizers:
            self._synchronizers[canvas_id] = EdgeSynchronizer.from_config(
                self.file_store, self.config, notifier=self.notifier
            )
        return self._synchronizers[canvas_id]

    def lock(self, canvas_id: str) -> asyncio.Lock:
        return self._locks.setdefault(canvas_id, asyncio.Lock())

    def canvases(self) -> list[str]:
        return sorted(self._synchronizers)

    async def initialize(self, canvas_id: str) -> bool:
        async with self.lock(canvas_id):
            return await self.get(canvas_id).initialize_from_canvas(canvas_id)

    async def on_modified(self, canvas_id: str) -> SyncResult:
        """
        Run a pass for canvas_id.

        A canvas that was never initialized is diffed against an empty
        snapshot: every edge counts as added, which the duplicate guard
        turns into a no-op for links that already exist.
        """
        if not self.config.enable_edge_sync:
            return SyncResult(canvas_id=canvas_id, aborted=True, reason="edge sync disabled")

        async with self.lock(canvas_id):
            return await self.get(canvas_id).on_graph_modified(canvas_id)

    async def reset(self, canvas_id: str) -> None:
        """Forget the snapshot once any running pass has committed."""
        async with self.lock(canvas_id):
            sync = self._synchronizers.get(canvas_id)
            if sync is not None:
                sync.reset()

    async def discard(self, canvas_id: str) -> None:
        """Drop the synchronizer once any running pass has committed."""
        async with self.lock(canvas_id):
            self._synchronizers.pop(canvas_id, None)
