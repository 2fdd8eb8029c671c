from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


# -----------------------------
# Enumerations
# -----------------------------

class Gender(str, Enum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class RelationshipType(str, Enum):
    SPOUSE = "spouse"
    # person1 is the parent, person2 the child
    PARENT_CHILD = "parent_child"


# -----------------------------
# Input records (read-only to the engine)
# -----------------------------

@dataclass(frozen=True, slots=True)
class Person:
    """
    A family member as delivered by the tree backend.

    ``birth_date`` / ``death_date`` are ISO ``YYYY-MM-DD`` strings so they sort
    lexicographically in chronological order.
    """
    id: str
    first_name: str
    last_name: str
    middle_name: Optional[str] = None
    gender: Gender = Gender.OTHER
    birth_date: Optional[str] = None
    death_date: Optional[str] = None
    profile_image: Optional[str] = None
    is_root: bool = False

    @property
    def display_name(self) -> str:
        parts = [self.first_name, self.middle_name, self.last_name]
        return " ".join(p for p in parts if p)

    @property
    def birth_sort_key(self) -> str:
        return self.birth_date or ""


@dataclass(frozen=True, slots=True)
class Relationship:
    id: str
    person1_id: str
    person2_id: str
    relationship_type: RelationshipType

    @property
    def is_spouse(self) -> bool:
        return self.relationship_type is RelationshipType.SPOUSE

    @property
    def is_parent_child(self) -> bool:
        return self.relationship_type is RelationshipType.PARENT_CHILD


# -----------------------------
# Built structure
# -----------------------------

@dataclass(slots=True)
class TreeNode:
    """
    One person in the rooted hierarchy.

    The spouse is attached as a plain Person and is never recursed into.
    Geometry lives in ``layout.engine.TreeLayout``, not on the node.
    """
    id: str
    person: Person
    spouse: Optional[Person] = None
    children: List["TreeNode"] = field(default_factory=list)
    level: int = 0

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def children_ids(self) -> List[str]:
        return [c.id for c in self.children]

    def __repr__(self) -> str:  # pragma: no cover - cosmetic
        spouse = f" + {self.spouse.id}" if self.spouse else ""
        return f"<TreeNode {self.id}{spouse} level={self.level} children={len(self.children)}>"
