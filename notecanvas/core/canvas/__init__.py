"""Canvas geometry helpers."""

from notecanvas.core.canvas.layout import LayoutMode, bounding_box, calculate_grid_positions

__all__ = ["LayoutMode", "bounding_box", "calculate_grid_positions"]
