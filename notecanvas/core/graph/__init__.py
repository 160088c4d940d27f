"""In-memory canvas graph snapshot and edge diffing."""

from notecanvas.core.graph.snapshot import GraphSnapshot, is_connected

__all__ = ["GraphSnapshot", "is_connected"]
