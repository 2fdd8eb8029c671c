from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from family_tree_layout.entities.models import Person
from family_tree_layout.hierarchy.flatten import iter_tree

from .engine import NodeBox, TreeLayout


@dataclass(frozen=True, slots=True)
class RenderNode:
    """Flat, positioned view of one tree node for the rendering layer."""
    id: str
    person: Person
    spouse: Optional[Person]
    children_ids: List[str] = field(default_factory=list)
    level: int = 0
    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0
    spouse_box: Optional[NodeBox] = None


def render_nodes(layout: Optional[TreeLayout]) -> List[RenderNode]:
    """Project a layout onto render nodes in breadth-first order."""
    if layout is None:
        return []

    nodes: List[RenderNode] = []
    for node in iter_tree(layout.root):
        box = layout.box(node.id)
        nodes.append(
            RenderNode(
                id=node.id,
                person=node.person,
                spouse=node.spouse,
                children_ids=node.children_ids,
                level=node.level,
                x=box.x,
                y=box.y,
                width=box.width,
                height=box.height,
                spouse_box=layout.spouse_box(node.id),
            )
        )
    return nodes
