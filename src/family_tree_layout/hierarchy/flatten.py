from __future__ import annotations

from collections import deque
from typing import Iterator, List, Optional, Set

from family_tree_layout.entities.models import TreeNode


def iter_tree(root: Optional[TreeNode]) -> Iterator[TreeNode]:
    """Yield nodes breadth-first: root, its children left to right, grandchildren..."""
    if root is None:
        return

    queue = deque([root])
    while queue:
        node = queue.popleft()
        yield node
        queue.extend(node.children)


def flatten_tree(root: Optional[TreeNode]) -> List[TreeNode]:
    """Return every node of the tree in breadth-first order ([] for no root)."""
    return list(iter_tree(root))


def tree_member_ids(root: Optional[TreeNode]) -> Set[str]:
    """Ids of every person shown by the tree: nodes plus their attached spouses."""
    ids: Set[str] = set()
    for node in iter_tree(root):
        ids.add(node.id)
        if node.spouse is not None:
            ids.add(node.spouse.id)
    return ids


def tree_depth(root: Optional[TreeNode]) -> int:
    """Number of generations in the built tree (0 for no root)."""
    return max((node.level + 1 for node in iter_tree(root)), default=0)
