from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from family_tree_layout.cli.utils import load_tree, write_json
from family_tree_layout.core.exceptions import IngestionError
from family_tree_layout.core.pipeline import STATUS_ERROR

console = Console(stderr=True)


def layout_command(
    snapshot: Path = typer.Argument(..., exists=True, readable=True, help="JSON or YAML snapshot"),
    out: Optional[Path] = typer.Option(
        None,
        "--out",
        "-o",
        help="Write output to file instead of stdout",
    ),
    viewport_width: Optional[float] = typer.Option(
        None,
        "--viewport-width",
        "-w",
        help="Width used to centre the tree (defaults to config)",
    ),
    pretty: bool = typer.Option(
        False,
        "--pretty",
        help="Pretty-print JSON",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
):
    """
    Lay out a family tree snapshot and emit positioned nodes as JSON.
    """
    try:
        _, render = load_tree(snapshot, viewport_width=viewport_width, verbose=verbose)
    except IngestionError as exc:
        console.print(f"[red]Invalid snapshot:[/red] {exc}")
        raise typer.Exit(code=2)

    if verbose:
        console.log("Exporting JSON")

    write_json(render, out=out, pretty=pretty)

    if verbose:
        console.log("Export complete")

    if render.status == STATUS_ERROR:
        raise typer.Exit(code=1)
