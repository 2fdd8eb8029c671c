from __future__ import annotations

from typing import FrozenSet, List, Sequence, Tuple

from family_tree_layout.entities.models import Person, Relationship
from family_tree_layout.hierarchy.indexer import build_relationship_index


def lineage_roots(members: Sequence[Person], relationships: Sequence[Relationship]) -> List[str]:
    """Members with no recorded parent; each may start its own lineage."""
    index = build_relationship_index(members, relationships)
    return [m.id for m in members if not index.parents(m.id)]


def calculate_generations(members: Sequence[Person], relationships: Sequence[Relationship]) -> int:
    """
    Longest parent->child chain in the snapshot, counted in generations.

    0 for an empty tree, 1 when there are no relationships. Spouses are not
    edges here: a married couple without children is still one generation.
    """
    if not members:
        return 0
    if not relationships:
        return 1

    index = build_relationship_index(members, relationships)
    max_generations = 1

    stack: List[Tuple[str, int, FrozenSet[str]]] = [
        (m.id, 1, frozenset()) for m in members if not index.parents(m.id)
    ]
    while stack:
        person_id, depth, seen = stack.pop()
        # Per-path guard: a loop in bad data stops instead of recursing forever
        if person_id in seen:
            continue
        max_generations = max(max_generations, depth)

        seen = seen | {person_id}
        for child_id in index.children(person_id):
            stack.append((child_id, depth + 1, seen))

    return max_generations
