"""Text rendering of layouts."""

from .layout_display import LayoutDisplay, get_occupancy_grid

__all__ = [
    "LayoutDisplay",
    "get_occupancy_grid",
]
