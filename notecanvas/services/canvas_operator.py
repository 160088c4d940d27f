"""
Canvas Operator - edits canvas documents through the file store.

Every operation reads the canvas JSON, changes it and writes it back.
Fields this package does not model (colors, sides, labels, unknown keys)
survive the round trip.
"""

from notecanvas.config import CanvasConfig
from notecanvas.core.canvas.layout import bounding_box, calculate_grid_positions
from notecanvas.core.file_store.base import FileStore
from notecanvas.models.canvas import (
    CanvasData,
    CanvasEdge,
    FileNode,
    GroupNode,
    dump_canvas,
    parse_canvas,
)
from notecanvas.utils.exceptions import ValidationError
from notecanvas.utils.id_generator import generate_canvas_id
from notecanvas.utils.logger import get_logger

logger = get_logger(__name__)


class CanvasOperator:
    """Adds file nodes, edges and groups to a canvas document."""

    def __init__(self, file_store: FileStore, config: CanvasConfig | None = None):
        """
        Initialize canvas operator.

        Args:
            file_store: Storage holding the canvas documents
            config: Node geometry, layout and default edge styling
        """
        self.file_store = file_store
        self.config = config or CanvasConfig()

    async def load(self, canvas_id: str) -> CanvasData:
        return parse_canvas(await self.file_store.read(canvas_id))

    async def save(self, canvas_id: str, data: CanvasData) -> None:
        await self.file_store.write(canvas_id, dump_canvas(data))

    def build_file_node(
        self, doc_id: str, position: tuple[float, float], subpath: str | None = None
    ) -> FileNode:
        return FileNode(
            id=generate_canvas_id(),
            file=doc_id,
            subpath=subpath,
            x=position[0],
            y=position[1],
            width=self.config.default_node_width,
            height=self.config.default_node_height,
        )

    async def add_file_node(
        self,
        canvas_id: str,
        doc_id: str,
        position: tuple[float, float],
        subpath: str | None = None,
    ) -> FileNode:
        """Place one document on the canvas with its top-left corner at ``position``."""
        data = await self.load(canvas_id)
        node = self.build_file_node(doc_id, position, subpath)
        data.nodes.append(node)
        await self.save(canvas_id, data)
        logger.info(f"Added {doc_id} to {canvas_id} as node {node.id}")
        return node

    async def add_file_nodes(
        self, canvas_id: str, doc_ids: list[str], origin: tuple[float, float]
    ) -> list[FileNode]:
        """Place several documents at once, laid out from ``origin``."""
        if not doc_ids:
            return []

        positions = calculate_grid_positions(
            origin,
            len(doc_ids),
            layout=self.config.layout,
            columns=self.config.columns,
            gap=self.config.gap,
            node_width=self.config.default_node_width,
            node_height=self.config.default_node_height,
        )
        data = await self.load(canvas_id)
        nodes = [self.build_file_node(doc_id, pos) for doc_id, pos in zip(doc_ids, positions)]
        data.nodes.extend(nodes)
        await self.save(canvas_id, data)
        logger.info(f"Added {len(nodes)} nodes to {canvas_id}")
        return nodes

    async def add_edge(
        self,
        canvas_id: str,
        from_node: str,
        to_node: str,
        color: str | None = None,
        label: str | None = None,
    ) -> CanvasEdge:
        """
        Connect two existing nodes, right side to left side with an arrow.

        Raises:
            ValidationError: If either node id is not on the canvas
        """
        data = await self.load(canvas_id)
        known = data.nodes_by_id()
        missing = [node_id for node_id in (from_node, to_node) if node_id not in known]
        if missing:
            raise ValidationError(
                f"Unknown node id(s) on {canvas_id}: {', '.join(missing)}",
                context={"canvas_id": canvas_id, "missing": missing},
            )

        edge = CanvasEdge(
            id=generate_canvas_id(),
            from_node=from_node,
            to_node=to_node,
            from_side="right",
            to_side="left",
            to_end="arrow",
            color=color if color is not None else self.config.default_edge_color,
            label=label if label is not None else self.config.default_edge_label,
        )
        data.edges.append(edge)
        await self.save(canvas_id, data)
        logger.info(f"Added edge {edge.id} ({from_node} -> {to_node}) to {canvas_id}")
        return edge

    async def add_group(
        self, canvas_id: str, node_ids: list[str], label: str | None = None
    ) -> GroupNode | None:
        """
        Draw a group around the given nodes.

        Returns:
            The group node, or None when no listed node is on the canvas
        """
        data = await self.load(canvas_id)
        known = data.nodes_by_id()
        boxes = [
            (node.x, node.y, node.width, node.height)
            for node_id in node_ids
            if (node := known.get(node_id)) is not None
        ]
        box = bounding_box(boxes, padding=self.config.group_padding)
        if box is None:
            return None

        group = GroupNode(
            id=generate_canvas_id(),
            label=label,
            x=box[0],
            y=box[1],
            width=box[2],
            height=box[3],
        )
        data.nodes.append(group)
        await self.save(canvas_id, data)
        logger.info(f"Grouped {len(boxes)} nodes on {canvas_id}")
        return group
