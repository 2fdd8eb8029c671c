from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence

from family_tree_layout.entities.models import Person, Relationship


@dataclass(slots=True)
class RelationshipIndex:
    """
    Lookup tables derived from a flat relationship list.

    ``children_of`` lists are already ordered oldest-first by birth date.
    ``parent_of`` keeps the last parent edge seen for a child; every edge is
    still available in ``parents_of``.
    """
    spouse_of: Dict[str, str] = field(default_factory=dict)
    children_of: Dict[str, List[str]] = field(default_factory=dict)
    parent_of: Dict[str, str] = field(default_factory=dict)
    parents_of: Dict[str, List[str]] = field(default_factory=dict)

    def spouse(self, person_id: str) -> str | None:
        return self.spouse_of.get(person_id)

    def children(self, person_id: str) -> List[str]:
        return self.children_of.get(person_id, [])

    def parents(self, person_id: str) -> List[str]:
        return self.parents_of.get(person_id, [])


def sort_by_birth_date(child_ids: List[str], members: Dict[str, Person]) -> None:
    """
    Order child ids oldest first, in place.

    Missing birth dates (and unknown ids) use "" and therefore sort first.
    ``list.sort`` is stable, so equal dates keep relationship order.
    """
    def key(child_id: str) -> str:
        person = members.get(child_id)
        return person.birth_sort_key if person is not None else ""

    child_ids.sort(key=key)


def build_relationship_index(
    members: Sequence[Person] | Dict[str, Person],
    relationships: Iterable[Relationship],
) -> RelationshipIndex:
    """
    Build spouse/children/parent lookups from scratch.

    Inputs are never mutated; every call produces fresh tables.
    """
    if isinstance(members, dict):
        member_map = members
    else:
        member_map = {m.id: m for m in members}

    index = RelationshipIndex()

    for rel in relationships:
        if rel.is_spouse:
            index.spouse_of[rel.person1_id] = rel.person2_id
            index.spouse_of[rel.person2_id] = rel.person1_id
        elif rel.is_parent_child:
            index.children_of.setdefault(rel.person1_id, []).append(rel.person2_id)
            index.parent_of[rel.person2_id] = rel.person1_id
            index.parents_of.setdefault(rel.person2_id, []).append(rel.person1_id)

    for child_ids in index.children_of.values():
        sort_by_birth_date(child_ids, member_map)

    return index
