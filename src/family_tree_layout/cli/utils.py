
from __future__ import annotations

import time
from pathlib import Path
from typing import Optional

from rich.console import Console

from family_tree_layout.core.pipeline import TreeRender, run_pipeline
from family_tree_layout.exporter import export_render_json, serialize_render_to_json_string
from family_tree_layout.layout.config import LayoutConfig
from family_tree_layout.loader import TreeSnapshot, load_snapshot

console = Console(stderr=True)


def load_tree(
    path: Path,
    *,
    viewport_width: Optional[float] = None,
    layout_config: Optional[LayoutConfig] = None,
    verbose: bool = False,
) -> tuple[TreeSnapshot, TreeRender]:
    """
    Snapshot -> ingestion -> build -> validate -> layout.
    """
    if not path.exists():
        raise FileNotFoundError(path)

    t0 = time.perf_counter()

    snapshot = load_snapshot(path)
    render = run_pipeline(
        snapshot.members,
        snapshot.relationships,
        layout_config=layout_config,
        viewport_width=viewport_width,
    )

    elapsed = time.perf_counter() - t0

    if verbose:
        console.log(f"Laid out {len(render.nodes)} nodes in {elapsed:.3f}s")

    return snapshot, render


def write_json(
    render: TreeRender,
    *,
    out: Path | None,
    pretty: bool,
):
    """
    Write the render payload to stdout or a file.
    """
    indent = 2 if pretty else None

    if out:
        export_render_json(render, out, indent=indent)
    else:
        print(serialize_render_to_json_string(render, indent=indent))
