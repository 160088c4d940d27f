"""
Graph snapshot and edge diffing.

The snapshot is the last committed view of a canvas' nodes and edges.
Diffs are computed by edge id; "is this pair still connected" is decided
on the unordered node pair so that a reversed or duplicated edge keeps a
connection alive.
"""

from collections.abc import Iterable, Mapping

from notecanvas.models.canvas import CanvasEdge


def is_connected(edges: Iterable[CanvasEdge], node_a: str, node_b: str) -> bool:
    """True if any edge joins node_a and node_b, in either direction."""
    pair = frozenset((node_a, node_b))
    return any(edge.pair == pair for edge in edges)


class GraphSnapshot:
    """
    Point-in-time copy of a canvas graph used as the diff baseline.

    Owned by a single synchronizer; replaced wholesale on commit and never
    mutated in place.
    """

    def __init__(self) -> None:
        self.edges_by_id: dict[str, CanvasEdge] = {}
        self.nodes_by_id: dict = {}

    @property
    def edge_count(self) -> int:
        return len(self.edges_by_id)

    @property
    def node_count(self) -> int:
        return len(self.nodes_by_id)

    @property
    def is_empty(self) -> bool:
        return not self.edges_by_id and not self.nodes_by_id

    def set_snapshot(self, edges: Iterable[CanvasEdge], nodes_by_id: Mapping) -> None:
        """Replace both maps."""
        self.edges_by_id = {edge.id: edge for edge in edges}
        self.nodes_by_id = dict(nodes_by_id)

    def reset(self) -> None:
        self.edges_by_id = {}
        self.nodes_by_id = {}

    def node(self, node_id: str):
        """Node as it was when the snapshot was taken, or None."""
        return self.nodes_by_id.get(node_id)

    def diff_added(self, current_edges: Iterable[CanvasEdge]) -> list[CanvasEdge]:
        """Edges in current_edges whose id is not in the snapshot."""
        return [edge for edge in current_edges if edge.id not in self.edges_by_id]

    def diff_removed(self, current_edges: Iterable[CanvasEdge]) -> list[CanvasEdge]:
        """Snapshot edges whose id no longer appears in current_edges."""
        current_ids = {edge.id for edge in current_edges}
        return [edge for edge_id, edge in self.edges_by_id.items() if edge_id not in current_ids]
