"""
Hierarchy builder.

Turns a flat member/relationship snapshot into a rooted tree of
``TreeNode`` objects starting at the member flagged ``is_root``.

Rules:
  - one root person (first flagged member in list order wins)
  - at most one spouse per person, attached as a decoration on the node
  - children ordered by birth date, oldest on the left
  - every person appears at most once in the tree
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Set, Tuple

from family_tree_layout.core.exceptions import CycleDetectedError
from family_tree_layout.entities.models import Person, Relationship, TreeNode
from family_tree_layout.logging import get_logger

from .indexer import RelationshipIndex, build_relationship_index

log = get_logger(__name__)

NO_MEMBERS = "No members found"
NO_ROOT = "No root person found (is_root must be set for one member)"


@dataclass
class BuildResult:
    """
    Outcome of ``build_hierarchy``.

    Unpacks like the ``(root, error)`` pair callers expect::

        root, error = build_hierarchy(members, relationships)
    """
    root: Optional[TreeNode] = None
    error: Optional[str] = None
    warnings: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.root is not None and self.error is None

    def __iter__(self) -> Iterator[object]:
        yield self.root
        yield self.error


def find_root_members(members: Sequence[Person]) -> List[Person]:
    return [m for m in members if m.is_root]


class _TreeAssembler:
    """
    Depth-first assembly with an explicit stack of ``(node, pending child ids)``.

    Children are examined one at a time, after the previous sibling's subtree
    is complete, so "already placed" means placed earlier in pre-order.
    """

    def __init__(self, member_map: Dict[str, Person], index: RelationshipIndex):
        self.member_map = member_map
        self.index = index
        self.placed: Set[str] = set()

    def _node(self, member_id: str, level: int) -> TreeNode:
        self.placed.add(member_id)
        spouse_id = self.index.spouse(member_id)
        return TreeNode(
            id=member_id,
            person=self.member_map[member_id],
            spouse=self.member_map.get(spouse_id) if spouse_id else None,
            level=level,
        )

    def build(self, root_id: str) -> TreeNode:
        root = self._node(root_id, 0)
        path: List[str] = [root_id]
        on_path: Set[str] = {root_id}
        stack: List[Tuple[TreeNode, Iterator[str]]] = [(root, iter(self.index.children(root_id)))]

        while stack:
            node, pending = stack[-1]
            child_id = next(pending, None)
            if child_id is None:
                stack.pop()
                on_path.discard(path.pop())
                continue
            if child_id not in self.member_map:
                continue
            if child_id in on_path:
                cycle = path[path.index(child_id):] + [child_id]
                raise CycleDetectedError(
                    "Cycle detected in parent_child relationships: " + " -> ".join(cycle)
                )
            if child_id in self.placed:
                log.debug(
                    "Skipping %s under %s: already placed under another parent",
                    child_id,
                    node.id,
                )
                continue

            child = self._node(child_id, node.level + 1)
            node.children.append(child)
            path.append(child_id)
            on_path.add(child_id)
            stack.append((child, iter(self.index.children(child_id))))

        return root


def build_hierarchy(
    members: Sequence[Person],
    relationships: Sequence[Relationship],
) -> BuildResult:
    """
    Build the rooted tree for one snapshot.

    Expected data problems never raise; they come back in ``BuildResult.error``
    (fatal) or ``BuildResult.warnings`` (informational).
    """
    if not members:
        return BuildResult(error=NO_MEMBERS)

    roots = find_root_members(members)
    if not roots:
        return BuildResult(error=NO_ROOT)

    root_member = roots[0]
    warnings: List[str] = []
    if len(roots) > 1:
        others = ", ".join(r.id for r in roots[1:])
        msg = f"Multiple root persons flagged; using {root_member.id} and ignoring {others}"
        log.warning(msg)
        warnings.append(msg)

    member_map = {m.id: m for m in members}
    index = build_relationship_index(member_map, relationships)

    try:
        root = _TreeAssembler(member_map, index).build(root_member.id)
    except CycleDetectedError as exc:
        log.warning("Tree build aborted: %s", exc)
        return BuildResult(error=str(exc), warnings=warnings)

    log.debug("Built hierarchy rooted at %s", root.id)
    return BuildResult(root=root, warnings=warnings)
