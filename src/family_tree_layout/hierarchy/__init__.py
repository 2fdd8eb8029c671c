"""
Hierarchy construction: relationship indexing, rooted tree building and
breadth-first flattening.
"""

from .builder import NO_MEMBERS, NO_ROOT, BuildResult, build_hierarchy, find_root_members
from .flatten import flatten_tree, iter_tree, tree_depth, tree_member_ids
from .indexer import RelationshipIndex, build_relationship_index, sort_by_birth_date

__all__ = [
    "NO_MEMBERS",
    "NO_ROOT",
    "BuildResult",
    "RelationshipIndex",
    "build_hierarchy",
    "build_relationship_index",
    "find_root_members",
    "flatten_tree",
    "iter_tree",
    "sort_by_birth_date",
    "tree_depth",
    "tree_member_ids",
]
