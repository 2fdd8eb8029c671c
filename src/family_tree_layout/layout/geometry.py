"""
Derived drawing geometry: bounding box, connector paths and canvas size.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from family_tree_layout.hierarchy.flatten import iter_tree

from .engine import NodeBox, TreeLayout

Point = Tuple[float, float]


@dataclass(frozen=True, slots=True)
class BoundingBox:
    x: float
    y: float
    width: float
    height: float

    @classmethod
    def enclosing(cls, boxes: List[NodeBox]) -> Optional["BoundingBox"]:
        if not boxes:
            return None
        min_x = min(b.x for b in boxes)
        min_y = min(b.y for b in boxes)
        max_x = max(b.right for b in boxes)
        max_y = max(b.bottom for b in boxes)
        return cls(min_x, min_y, max_x - min_x, max_y - min_y)


@dataclass(frozen=True, slots=True)
class ParentChildConnector:
    """Elbow from the parent's bottom centre to the child's top centre."""
    parent_id: str
    child_id: str
    points: Tuple[Point, ...]


@dataclass(frozen=True, slots=True)
class SpouseConnector:
    """Horizontal marriage line between a card and its spouse card."""
    node_id: str
    spouse_id: str
    start: Point
    end: Point


@dataclass
class Connectors:
    parent_child: List[ParentChildConnector] = field(default_factory=list)
    spouse: List[SpouseConnector] = field(default_factory=list)


def bounding_box(layout: Optional[TreeLayout], include_spouses: bool = True) -> Optional[BoundingBox]:
    """Smallest box around every card (spouse cards included by default)."""
    if layout is None:
        return None
    boxes = list(layout.boxes.values())
    if include_spouses:
        boxes.extend(layout.spouse_boxes.values())
    return BoundingBox.enclosing(boxes)


def connectors(layout: Optional[TreeLayout]) -> Connectors:
    result = Connectors()
    if layout is None:
        return result

    for node in iter_tree(layout.root):
        parent = layout.box(node.id)

        for child in node.children:
            child_box = layout.box(child.id)
            px, py = parent.center_x, parent.bottom
            cx, cy = child_box.center_x, child_box.y
            mid_y = (py + cy) / 2
            result.parent_child.append(
                ParentChildConnector(
                    parent_id=node.id,
                    child_id=child.id,
                    points=((px, py), (px, mid_y), (cx, mid_y), (cx, cy)),
                )
            )

        spouse_box = layout.spouse_box(node.id)
        if node.spouse is not None and spouse_box is not None:
            result.spouse.append(
                SpouseConnector(
                    node_id=node.id,
                    spouse_id=node.spouse.id,
                    start=(parent.right, parent.center_y),
                    end=(spouse_box.x, parent.center_y),
                )
            )

    return result


def canvas_size(
    layout: Optional[TreeLayout],
    width: float = 1400,
    min_height: float = 1000,
    bottom_padding: float = 200,
) -> Tuple[float, float]:
    """Drawing surface size: fixed width, tall enough for the deepest row."""
    if layout is None or not layout.boxes:
        return width, min_height
    deepest = max(b.bottom for b in layout.boxes.values())
    return width, max(min_height, deepest + bottom_padding)
