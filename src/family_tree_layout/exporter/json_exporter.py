"""
JSON export of a laid-out tree.

The payload is what a drawing layer consumes: status and messages first,
then canvas size and bounds, then the render nodes in breadth-first order
(children referenced by id, never nested) and the connector geometry.
Key order and node order are fixed, so equal snapshots give equal text.
"""

from __future__ import annotations

import json
from dataclasses import asdict, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict

from family_tree_layout.logging import get_logger

log = get_logger("json_exporter")


def _to_json_compatible(obj: Any) -> Any:
    """Turn dataclasses, enums, tuples and sets into plain JSON values."""
    if isinstance(obj, Enum):
        return obj.value
    if obj is None or isinstance(obj, (bool, int, float, str)):
        return obj
    if is_dataclass(obj) and not isinstance(obj, type):
        return _to_json_compatible(asdict(obj))
    if isinstance(obj, dict):
        return {str(key): _to_json_compatible(value) for key, value in obj.items()}
    if isinstance(obj, (set, frozenset)):
        # sorted so the output does not depend on hash seeds
        return [_to_json_compatible(item) for item in sorted(obj, key=str)]
    if isinstance(obj, (list, tuple)):
        return [_to_json_compatible(item) for item in obj]
    return str(obj)


def build_render_dict(render: Any) -> Dict[str, Any]:
    """Flatten a ``TreeRender`` into the export payload."""
    build = render.build
    width, height = render.canvas
    layout = render.layout

    return {
        "status": render.status,
        "error": build.error,
        "warnings": list(build.warnings),
        "violations": list(render.violations),
        "root_id": build.root.id if build.root is not None else None,
        "generations": render.generations,
        "layout_config": _to_json_compatible(layout.config) if layout is not None else None,
        "canvas": {"width": width, "height": height},
        "bounds": _to_json_compatible(render.bounds),
        "nodes": [_to_json_compatible(node) for node in render.nodes],
        "connectors": _to_json_compatible(render.connectors),
    }


def serialize_render_to_json_string(render: Any, indent: int | None = 2) -> str:
    """``indent=None`` gives the compact single-line form."""
    payload = build_render_dict(render)
    if indent is None:
        return json.dumps(payload, separators=(",", ":"), ensure_ascii=False)
    return json.dumps(payload, indent=indent, ensure_ascii=False)


def export_render_json(render: Any, output_path: str | Path, indent: int | None = 2) -> Path:
    """Write the payload to ``output_path`` (parents created) and return the path."""
    target = Path(output_path)
    target.parent.mkdir(parents=True, exist_ok=True)

    text = serialize_render_to_json_string(render, indent=indent)
    target.write_text(text, encoding="utf-8")

    log.info(
        "Wrote %s (status=%s, nodes=%d, violations=%d, %d bytes)",
        target,
        render.status,
        len(render.nodes),
        len(render.violations),
        len(text.encode("utf-8")),
    )
    return target
