"""
Snapshot loader

Reads a member/relationship snapshot (JSON or YAML) exported from the tree
backend and runs it through record ingestion.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping

import yaml

from family_tree_layout.core.exceptions import IngestionError
from family_tree_layout.entities.models import Person, Relationship
from family_tree_layout.logging import get_logger

from .ingest import load_members, load_relationships

log = get_logger(__name__)

YAML_SUFFIXES = {".yml", ".yaml"}


@dataclass
class TreeSnapshot:
    """One consistent view of a tree's members and relationships."""

    members: List[Person] = field(default_factory=list)
    relationships: List[Relationship] = field(default_factory=list)
    meta: Dict[str, Any] = field(default_factory=dict)


def snapshot_from_mapping(data: Mapping[str, Any]) -> TreeSnapshot:
    if not isinstance(data, Mapping):
        raise IngestionError("snapshot: expected a mapping with 'members' and 'relationships'")

    members = data.get("members") or []
    relationships = data.get("relationships") or []
    if not isinstance(members, list) or not isinstance(relationships, list):
        raise IngestionError("snapshot: 'members' and 'relationships' must be lists")

    meta = {k: v for k, v in data.items() if k not in ("members", "relationships")}
    return TreeSnapshot(
        members=load_members(members),
        relationships=load_relationships(relationships),
        meta=meta,
    )


def load_snapshot(path: str | Path) -> TreeSnapshot:
    """
    Load a snapshot file.

    ``.yml`` / ``.yaml`` files are parsed with PyYAML, everything else as JSON.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Snapshot not found: {path}")
    if not path.is_file():
        raise ValueError(f"Snapshot path is not a file: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            data = yaml.safe_load(text) or {}
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as exc:
        raise IngestionError(f"{path.name}: cannot parse snapshot: {exc}") from exc

    snapshot = snapshot_from_mapping(data)
    log.info(
        "Loaded snapshot %s (members=%d, relationships=%d)",
        path,
        len(snapshot.members),
        len(snapshot.relationships),
    )
    return snapshot
