from .models import Gender, Person, Relationship, RelationshipType, TreeNode

__all__ = [
    "Gender",
    "Person",
    "Relationship",
    "RelationshipType",
    "TreeNode",
]
