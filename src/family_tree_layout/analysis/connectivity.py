"""
Root connectivity diagnostics.

Unlike the structure validator, which only counts people placed in the built
tree, this treats every relationship as an undirected link. It answers "can
this member be reached from the root at all?" which is what a user fixing a
broken tree needs to know.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set

from family_tree_layout.entities.models import Person, Relationship
from family_tree_layout.hierarchy.builder import NO_MEMBERS, find_root_members
from family_tree_layout.logging import get_logger

log = get_logger(__name__)

NO_ROOT_DIAGNOSTIC = "No root person found. Please set a root person first."


@dataclass
class TreeDiagnostic:
    root: Optional[Person] = None
    connected: Set[str] = field(default_factory=set)
    disconnected: List[Person] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and not self.disconnected


def find_connected_members(relationships: Sequence[Relationship], root_id: str) -> Set[str]:
    """Breadth-first search from ``root_id`` over relationships of any type."""
    neighbours: Dict[str, List[str]] = {}
    for rel in relationships:
        neighbours.setdefault(rel.person1_id, []).append(rel.person2_id)
        neighbours.setdefault(rel.person2_id, []).append(rel.person1_id)

    connected = {root_id}
    queue = deque([root_id])
    while queue:
        current = queue.popleft()
        for other in neighbours.get(current, []):
            if other not in connected:
                connected.add(other)
                queue.append(other)
    return connected


def diagnose_tree(members: Sequence[Person], relationships: Sequence[Relationship]) -> TreeDiagnostic:
    if not members:
        return TreeDiagnostic(error=NO_MEMBERS)

    roots = find_root_members(members)
    if not roots:
        return TreeDiagnostic(error=NO_ROOT_DIAGNOSTIC)

    root = roots[0]
    connected = find_connected_members(relationships, root.id)
    disconnected = [m for m in members if m.id not in connected]

    if disconnected:
        log.info(
            "%d of %d members are not linked to root %s",
            len(disconnected),
            len(members),
            root.id,
        )
    return TreeDiagnostic(root=root, connected=connected, disconnected=disconnected)
