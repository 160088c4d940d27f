"""
Edge Sync - keeps connection backlinks consistent with canvas edges.

One EdgeSynchronizer owns the snapshot of one canvas. Each pass:

1. Load    read and parse the canvas; abort the pass if that fails
2. Removed edges gone since the snapshot; unlink both documents unless
           another edge still joins the same pair of nodes
3. Added   new edges; link both documents (duplicate-guarded)
4. Commit  snapshot := current canvas, whether or not anything changed

Failures on one edge are recorded and reported but never stop the pass.
"""

from collections.abc import Callable

import yaml

from notecanvas.config import SyncConfig
from notecanvas.core.file_store.base import FileStore
from notecanvas.core.graph.snapshot import GraphSnapshot, is_connected
from notecanvas.models.canvas import CanvasData, CanvasEdge, parse_canvas
from notecanvas.models.sync import ConnectionDirection, EdgeSyncFailure, SyncResult
from notecanvas.services.backlink_writer import BacklinkWriter
from notecanvas.utils.exceptions import (
    FileStoreError,
    MalformedGraphDocumentError,
    NoteCanvasError,
)
from notecanvas.utils.filenames import document_basename, is_canvas_path
from notecanvas.utils.logger import get_logger

logger = get_logger(__name__)

# Errors a single document mutation may raise; anything else is a bug and propagates
DOCUMENT_ERRORS = (NoteCanvasError, OSError, UnicodeError, yaml.YAMLError)

FailureNotifier = Callable[[EdgeSyncFailure], None]


class EdgeSynchronizer:
    """
    Mirrors canvas edges into "## Connections" bullets of the linked notes.

    Usage:
        sync = EdgeSynchronizer(store, section_name="Connections")
        await sync.initialize_from_canvas("boards/Research.canvas")
        ...
        result = await sync.on_graph_modified("boards/Research.canvas")
    """

    def __init__(
        self,
        file_store: FileStore,
        section_name: str = "Connections",
        backlink_writer: BacklinkWriter | None = None,
        frontmatter_connections: bool = False,
        notifier: FailureNotifier | None = None,
    ):
        """
        Initialize edge synchronizer.

        Args:
            file_store: Document storage holding the canvas and its notes
            section_name: Heading text of the connections section
            backlink_writer: Writer used for text mutations
            frontmatter_connections: Also mirror connections into front matter
            notifier: Called once per edge failure so the host can surface it
        """
        self.file_store = file_store
        self.section_name = section_name
        self.backlink_writer = backlink_writer or BacklinkWriter(file_store)
        self.frontmatter_connections = frontmatter_connections
        self.notifier = notifier
        self.snapshot = GraphSnapshot()

    @classmethod
    def from_config(
        cls,
        file_store: FileStore,
        config: SyncConfig,
        notifier: FailureNotifier | None = None,
    ) -> "EdgeSynchronizer":
        writer = BacklinkWriter(file_store, direction_markers=config.direction_markers)
        return cls(
            file_store=file_store,
            section_name=config.section_name,
            backlink_writer=writer,
            frontmatter_connections=config.frontmatter_connections,
            notifier=notifier,
        )

    def reset(self) -> None:
        """Forget the snapshot (canvas closed or sync restarted)."""
        self.snapshot.reset()

    async def initialize_from_canvas(self, canvas_id: str) -> bool:
        """
        Seed the snapshot from the canvas without touching any document.

        Returns:
            True if the snapshot was replaced
        """
        canvas = await self._load(canvas_id)
        if canvas is None:
            return False

        self._commit(canvas)
        logger.info(
            f"Snapshot seeded from {canvas_id}: "
            f"{self.snapshot.node_count} nodes, {self.snapshot.edge_count} edges"
        )
        return True

    async def on_graph_modified(self, canvas_id: str) -> SyncResult:
        """
        Run one synchronization pass for a modified canvas.

        Args:
            canvas_id: Path of the canvas document

        Returns:
            SyncResult describing what changed and what failed
        """
        result = SyncResult(canvas_id=canvas_id)

        if not is_canvas_path(canvas_id):
            result.aborted = True
            result.reason = "not a canvas document"
            return result

        canvas = await self._load(canvas_id, result)
        if canvas is None:
            return result

        for edge in self.snapshot.diff_removed(canvas.edges):
            await self._process_removed_edge(edge, canvas, result)

        current_nodes = canvas.nodes_by_id()
        for edge in self.snapshot.diff_added(canvas.edges):
            await self._process_added_edge(edge, current_nodes, result)

        self._commit(canvas)

        logger.info(
            f"Synced {canvas_id}: +{len(result.added_edges)} / -{len(result.removed_edges)} "
            f"connections, {len(result.documents_updated)} documents updated, "
            f"{len(result.failures)} failures"
        )
        return result

    async def _load(self, canvas_id: str, result: SyncResult | None = None) -> CanvasData | None:
        try:
            raw = await self.file_store.read(canvas_id)
            return parse_canvas(raw)
        except MalformedGraphDocumentError as e:
            logger.bind(canvas_id=canvas_id, context=e.context).warning(
                f"Skipping sync, canvas {canvas_id} is malformed: {e}"
            )
            reason = "malformed canvas"
        except (FileStoreError, OSError, UnicodeError) as e:
            logger.bind(canvas_id=canvas_id, error_type=type(e).__name__).warning(
                f"Skipping sync, canvas {canvas_id} could not be read: {e}"
            )
            reason = "canvas unavailable"

        if result is not None:
            result.aborted = True
            result.reason = reason
        return None

    def _commit(self, canvas: CanvasData) -> None:
        self.snapshot.set_snapshot(canvas.edges, canvas.nodes_by_id())

    def _resolve_documents(self, edge: CanvasEdge, nodes: dict) -> tuple[str, str] | None:
        from_node = nodes.get(edge.from_node)
        to_node = nodes.get(edge.to_node)
        if from_node is None or to_node is None:
            # Node vanished between events; the next pass sees a consistent graph
            logger.debug(f"Edge {edge.id} references an unknown node, skipped")
            return None

        from_doc = from_node.document_ref
        to_doc = to_node.document_ref
        if not from_doc or not to_doc or from_doc == to_doc:
            return None
        return from_doc, to_doc

    async def _process_removed_edge(
        self, edge: CanvasEdge, canvas: CanvasData, result: SyncResult
    ) -> None:
        docs = self._resolve_documents(edge, self.snapshot.nodes_by_id)
        if docs is None:
            return

        if is_connected(canvas.edges, edge.from_node, edge.to_node):
            logger.debug(f"Edge {edge.id} removed but its nodes are still connected")
            return

        from_doc, to_doc = docs
        result.removed_edges.append(edge.id)

        for doc_id, other_doc, direction in (
            (from_doc, to_doc, ConnectionDirection.OUTBOUND),
            (to_doc, from_doc, ConnectionDirection.INBOUND),
        ):
            target = document_basename(other_doc)
            try:
                changed = await self.backlink_writer.remove_from_connections_section(
                    doc_id, target, self.section_name
                )
                if self.frontmatter_connections:
                    changed = (
                        await self.backlink_writer.remove_frontmatter_connection(
                            doc_id, target, direction
                        )
                        or changed
                    )
            except DOCUMENT_ERRORS as e:
                self._record_failure(result, edge, doc_id, "remove", e)
                continue
            if changed:
                result.mark_updated(doc_id)

    async def _process_added_edge(
        self, edge: CanvasEdge, nodes: dict, result: SyncResult
    ) -> None:
        docs = self._resolve_documents(edge, nodes)
        if docs is None:
            return

        from_doc, to_doc = docs
        result.added_edges.append(edge.id)

        for doc_id, other_doc, direction in (
            (from_doc, to_doc, ConnectionDirection.OUTBOUND),
            (to_doc, from_doc, ConnectionDirection.INBOUND),
        ):
            target = document_basename(other_doc)
            try:
                changed = await self.backlink_writer.append_to_connections_section(
                    doc_id, target, self.section_name, direction
                )
                if self.frontmatter_connections:
                    changed = (
                        await self.backlink_writer.add_frontmatter_connection(
                            doc_id, target, direction
                        )
                        or changed
                    )
            except DOCUMENT_ERRORS as e:
                self._record_failure(result, edge, doc_id, "add", e)
                continue
            if changed:
                result.mark_updated(doc_id)

    def _record_failure(
        self,
        result: SyncResult,
        edge: CanvasEdge,
        doc_id: str,
        operation: str,
        error: Exception,
    ) -> None:
        failure = EdgeSyncFailure(
            edge_id=edge.id,
            doc_id=doc_id,
            operation=operation,
            error_type=type(error).__name__,
            message=str(error),
        )
        result.failures.append(failure)
        logger.bind(edge_id=edge.id, doc_id=doc_id, error_type=failure.error_type).error(
            f"Failed to {operation} connection for edge {edge.id} in {doc_id}: {error}"
        )
        if self.notifier is not None:
            self.notifier(failure)
