"""
Layout package: sizes, the two-pass engine, render projection and derived
drawing geometry.
"""

from .config import DEFAULT_VIEWPORT_WIDTH, LayoutConfig, default_viewport_width
from .engine import NodeBox, TreeLayout, calculate_layout, measure_subtrees
from .geometry import (
    BoundingBox,
    Connectors,
    ParentChildConnector,
    SpouseConnector,
    bounding_box,
    canvas_size,
    connectors,
)
from .render import RenderNode, render_nodes

__all__ = [
    "DEFAULT_VIEWPORT_WIDTH",
    "BoundingBox",
    "Connectors",
    "LayoutConfig",
    "NodeBox",
    "ParentChildConnector",
    "RenderNode",
    "SpouseConnector",
    "TreeLayout",
    "bounding_box",
    "calculate_layout",
    "canvas_size",
    "connectors",
    "default_viewport_width",
    "measure_subtrees",
    "render_nodes",
]
