"""
Tests for GraphSnapshot and edge diffing.
"""

import pytest

from notecanvas.core.graph import GraphSnapshot, is_connected
from notecanvas.models.canvas import CanvasEdge, FileNode


def make_edge(edge_id: str, from_node: str, to_node: str) -> CanvasEdge:
    return CanvasEdge(id=edge_id, fromNode=from_node, toNode=to_node)


@pytest.fixture
def e1():
    return make_edge("e1", "n1", "n2")


@pytest.fixture
def e2():
    return make_edge("e2", "n3", "n4")


class TestGraphSnapshot:
    """Tests for snapshot state."""

    def test_starts_empty(self):
        """Test a new snapshot has no edges or nodes."""
        snapshot = GraphSnapshot()

        assert snapshot.is_empty
        assert snapshot.edge_count == 0
        assert snapshot.node_count == 0

    def test_set_snapshot_replaces_maps(self, e1, e2):
        """Test set_snapshot replaces both maps wholesale."""
        snapshot = GraphSnapshot()
        snapshot.set_snapshot([e1], {"n1": FileNode(id="n1", file="A.md")})
        snapshot.set_snapshot([e2], {"n3": FileNode(id="n3", file="C.md")})

        assert list(snapshot.edges_by_id) == ["e2"]
        assert list(snapshot.nodes_by_id) == ["n3"]
        assert snapshot.node("n3").file == "C.md"
        assert snapshot.node("n1") is None

    def test_set_snapshot_copies_node_map(self, e1):
        """Test later changes to the caller's dict do not leak into the snapshot."""
        nodes = {"n1": FileNode(id="n1", file="A.md")}
        snapshot = GraphSnapshot()
        snapshot.set_snapshot([e1], nodes)
        nodes.clear()

        assert snapshot.node_count == 1

    def test_reset(self, e1):
        """Test reset clears both maps."""
        snapshot = GraphSnapshot()
        snapshot.set_snapshot([e1], {"n1": FileNode(id="n1", file="A.md")})
        snapshot.reset()

        assert snapshot.is_empty


class TestEdgeDiff:
    """Tests for diff_added and diff_removed."""

    def test_added_edge(self, e1, e2):
        """Test only the new edge is reported as added."""
        snapshot = GraphSnapshot()
        snapshot.set_snapshot([e1], {})

        assert snapshot.diff_added([e1, e2]) == [e2]
        assert snapshot.diff_removed([e1, e2]) == []

    def test_removed_edge(self, e1, e2):
        """Test a vanished edge is reported as removed."""
        snapshot = GraphSnapshot()
        snapshot.set_snapshot([e1, e2], {})

        assert snapshot.diff_removed([e2]) == [e1]
        assert snapshot.diff_added([e2]) == []

    def test_order_insensitive(self, e1, e2):
        """Test edge order does not matter."""
        snapshot = GraphSnapshot()
        snapshot.set_snapshot([e2, e1], {})

        assert snapshot.diff_added([e1, e2]) == []
        assert snapshot.diff_removed([e1, e2]) == []

    def test_diff_is_by_id(self, e1):
        """Test an edge re-created with a new id counts as added and removed."""
        snapshot = GraphSnapshot()
        snapshot.set_snapshot([e1], {})
        replacement = make_edge("e9", "n1", "n2")

        assert snapshot.diff_added([replacement]) == [replacement]
        assert snapshot.diff_removed([replacement]) == [e1]

    def test_empty_snapshot_reports_everything_added(self, e1, e2):
        """Test diffing against an empty snapshot."""
        assert GraphSnapshot().diff_added([e1, e2]) == [e1, e2]


class TestIsConnected:
    """Tests for the unordered pair rule."""

    def test_same_direction(self, e1):
        assert is_connected([e1], "n1", "n2")

    def test_reverse_direction(self):
        """Test an edge in the opposite direction keeps the pair connected."""
        e3 = make_edge("e3", "n2", "n1")
        assert is_connected([e3], "n1", "n2")

    def test_unrelated_edges(self, e2):
        assert not is_connected([e2], "n1", "n2")

    def test_no_edges(self):
        assert not is_connected([], "n1", "n2")
