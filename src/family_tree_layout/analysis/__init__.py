from .connectivity import NO_ROOT_DIAGNOSTIC, TreeDiagnostic, diagnose_tree, find_connected_members
from .generations import calculate_generations, lineage_roots

__all__ = [
    "NO_ROOT_DIAGNOSTIC",
    "TreeDiagnostic",
    "calculate_generations",
    "diagnose_tree",
    "find_connected_members",
    "lineage_roots",
]
