"""Placement of several new nodes around a drop point."""

from enum import Enum

Position = tuple[float, float]


class LayoutMode(str, Enum):
    """How multiple nodes are arranged."""

    GRID = "grid"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


def calculate_grid_positions(
    origin: Position,
    count: int,
    layout: LayoutMode | str = LayoutMode.GRID,
    columns: int = 3,
    gap: float = 40,
    node_width: float = 400,
    node_height: float = 300,
) -> list[Position]:
    """
    Top-left positions for ``count`` nodes starting at ``origin``.

    Horizontal and vertical layouts form a single row or column; grid
    fills rows of ``columns`` nodes left to right.
    """
    if count <= 0:
        return []

    layout = LayoutMode(layout)
    x0, y0 = origin
    step_x = node_width + gap
    step_y = node_height + gap

    if layout is LayoutMode.HORIZONTAL:
        return [(x0 + i * step_x, y0) for i in range(count)]
    if layout is LayoutMode.VERTICAL:
        return [(x0, y0 + i * step_y) for i in range(count)]

    columns = max(columns, 1)
    return [(x0 + (i % columns) * step_x, y0 + (i // columns) * step_y) for i in range(count)]


def bounding_box(boxes: list[tuple[float, float, float, float]], padding: float = 0):
    """
    Smallest (x, y, width, height) enclosing every (x, y, width, height) box,
    grown by ``padding`` on each side. None for an empty list.
    """
    if not boxes:
        return None
    min_x = min(b[0] for b in boxes)
    min_y = min(b[1] for b in boxes)
    max_x = max(b[0] + b[2] for b in boxes)
    max_y = max(b[1] + b[3] for b in boxes)
    return (
        min_x - padding,
        min_y - padding,
        max_x - min_x + padding * 2,
        max_y - min_y + padding * 2,
    )
