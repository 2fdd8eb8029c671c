# src/family_tree_layout/loader/__init__.py

"""
Public interface for record ingestion.

    from family_tree_layout.loader import (
        load_members,
        load_relationships,
        load_snapshot,
        TreeSnapshot,
    )
"""

from __future__ import annotations

from .ingest import (
    load_members,
    load_relationships,
    normalize_iso_date,
    parse_member,
    parse_relationship,
)
from .snapshot import TreeSnapshot, load_snapshot, snapshot_from_mapping

__all__ = [
    "TreeSnapshot",
    "load_members",
    "load_relationships",
    "load_snapshot",
    "normalize_iso_date",
    "parse_member",
    "parse_relationship",
    "snapshot_from_mapping",
]
