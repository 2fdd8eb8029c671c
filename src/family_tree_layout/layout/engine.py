"""
Two-pass tidy layout for the rooted family tree.

1. Post-order: measure each subtree's width (children side by side plus
   gaps, never narrower than one card).
2. Pre-order: place each parent centred over its children's span and walk a
   cursor left to right through the children; each generation sits
   ``vertical_gap`` below the previous one.

Positions are written to a side table keyed by node id, so the tree itself
stays untouched and can be laid out again with another config.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from family_tree_layout.core.exceptions import CycleDetectedError
from family_tree_layout.entities.models import TreeNode
from family_tree_layout.logging import get_logger

from .config import LayoutConfig, default_viewport_width

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class NodeBox:
    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2


@dataclass
class TreeLayout:
    """Computed geometry for one tree; valid until the tree is rebuilt."""

    root: TreeNode
    config: LayoutConfig
    viewport_width: float
    boxes: Dict[str, NodeBox] = field(default_factory=dict)
    spouse_boxes: Dict[str, NodeBox] = field(default_factory=dict)
    subtree_widths: Dict[str, float] = field(default_factory=dict)

    def box(self, node_id: str) -> NodeBox:
        return self.boxes[node_id]

    def spouse_box(self, node_id: str) -> Optional[NodeBox]:
        return self.spouse_boxes.get(node_id)

    @property
    def total_width(self) -> float:
        return self.subtree_widths[self.root.id]


# ----------------------------------------------------------------------
# Pass 1: subtree widths
# ----------------------------------------------------------------------

def measure_subtrees(root: TreeNode, config: LayoutConfig) -> Dict[str, float]:
    """Return node id -> subtree width for every node under ``root``."""
    widths: Dict[str, float] = {}
    seen: Set[str] = set()
    # (node, children already measured)
    stack: List[Tuple[TreeNode, bool]] = [(root, False)]

    while stack:
        node, expanded = stack.pop()
        if expanded:
            if node.is_leaf:
                widths[node.id] = config.node_width
            else:
                spans = sum(widths[child.id] for child in node.children)
                widths[node.id] = max(
                    spans + config.horizontal_gap * (len(node.children) - 1),
                    config.node_width,
                )
            continue

        if node.id in seen:
            raise CycleDetectedError(f"Node {node.id} is reached more than once; not a tree")
        seen.add(node.id)
        stack.append((node, True))
        stack.extend((child, False) for child in reversed(node.children))

    return widths


# ----------------------------------------------------------------------
# Pass 2: positions
# ----------------------------------------------------------------------

def _assign_positions(layout: TreeLayout, start_x: float, start_y: float) -> None:
    """Pre-order placement; ``x`` on the stack is the left edge of the node's subtree."""
    config = layout.config
    stack: List[Tuple[TreeNode, float, float]] = [(layout.root, start_x, start_y)]

    while stack:
        node, x, y = stack.pop()
        if node.is_leaf:
            node_x = x
        else:
            node_x = x + layout.subtree_widths[node.id] / 2 - config.node_width / 2

        layout.boxes[node.id] = NodeBox(node_x, y, config.node_width, config.node_height)
        if node.spouse is not None:
            layout.spouse_boxes[node.id] = NodeBox(
                node_x + config.node_width + config.pair_gap,
                y,
                config.node_width,
                config.node_height,
            )

        placements = []
        child_x = x
        for child in node.children:
            placements.append((child, child_x, y + config.vertical_gap))
            child_x += layout.subtree_widths[child.id] + config.horizontal_gap
        stack.extend(reversed(placements))


def calculate_layout(
    root: Optional[TreeNode],
    config: Optional[LayoutConfig] = None,
    viewport_width: Optional[float] = None,
) -> Optional[TreeLayout]:
    """
    Lay out the tree under ``root``.

    ``config`` / ``viewport_width`` default to the ``layout`` section of the
    project configuration. Returns ``None`` when there is no root.
    """
    if root is None:
        return None

    config = config or LayoutConfig.from_config()
    if viewport_width is None:
        viewport_width = default_viewport_width()

    layout = TreeLayout(root=root, config=config, viewport_width=viewport_width)
    layout.subtree_widths = measure_subtrees(root, config)

    start_x = max(0, (viewport_width - layout.total_width) / 2)
    _assign_positions(layout, start_x, config.top_margin)

    log.debug(
        "Laid out %d nodes (tree width=%s, viewport=%s)",
        len(layout.boxes),
        layout.total_width,
        viewport_width,
    )
    return layout
