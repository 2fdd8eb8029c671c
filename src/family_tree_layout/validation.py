"""
Phase 1 structure checks.

Reports problems as human-readable messages; nothing here raises or repairs
the tree.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from family_tree_layout.entities.models import Person, Relationship, TreeNode
from family_tree_layout.hierarchy.flatten import tree_member_ids
from family_tree_layout.logging import get_logger

log = get_logger(__name__)

NO_ROOT_NODE = "No root node"


def count_spouse_links(relationships: Sequence[Relationship]) -> Dict[str, int]:
    """Occurrences of each person id across spouse relationships, first-seen order."""
    counts: Dict[str, int] = {}
    for rel in relationships:
        if not rel.is_spouse:
            continue
        counts[rel.person1_id] = counts.get(rel.person1_id, 0) + 1
        counts[rel.person2_id] = counts.get(rel.person2_id, 0) + 1
    return counts


def validate_tree_structure(
    root: Optional[TreeNode],
    members: Sequence[Person],
    relationships: Sequence[Relationship],
) -> List[str]:
    errors: List[str] = []

    if root is None:
        errors.append(NO_ROOT_NODE)
        return errors

    member_map = {m.id: m for m in members}

    for person_id, count in count_spouse_links(relationships).items():
        if count > 1:
            member = member_map.get(person_id)
            name = member.first_name if member is not None else person_id
            errors.append(f"Phase 1 violation: {name} has multiple spouses")

    connected = tree_member_ids(root)
    for member in members:
        if member.id not in connected:
            errors.append(
                f"Member {member.first_name} {member.last_name} is not connected to root"
            )

    if errors:
        log.info("Tree rooted at %s has %d structure violation(s)", root.id, len(errors))
    return errors
