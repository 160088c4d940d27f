"""
ID generation utilities for notecanvas.

Canvas nodes and edges use the same id shape the canvas format uses
for hand-drawn elements: 16 lowercase hex characters.
"""

from uuid import uuid4


def generate_canvas_id() -> str:
    """
    Generate unique canvas node or edge ID.

    Returns:
        16 lowercase hex characters
    """
    return uuid4().hex[:16]
