
from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from family_tree_layout.analysis import calculate_generations, diagnose_tree
from family_tree_layout.cli.utils import load_tree
from family_tree_layout.core.exceptions import IngestionError
from family_tree_layout.hierarchy import tree_depth

console = Console()


def stats_command(
    snapshot: Path = typer.Argument(..., exists=True, readable=True, help="JSON or YAML snapshot"),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
):
    """
    Show summary statistics for a family tree snapshot.
    """
    try:
        snap, render = load_tree(snapshot, verbose=verbose)
    except IngestionError as exc:
        console.print(f"[red]Invalid snapshot:[/red] {exc}")
        raise typer.Exit(code=2)

    spouse_links = sum(1 for r in snap.relationships if r.is_spouse)
    diagnostic = diagnose_tree(snap.members, snap.relationships)

    table = Table(title="Family Tree Statistics")
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Members", str(len(snap.members)))
    table.add_row("Relationships", str(len(snap.relationships)))
    table.add_row("Spouse links", str(spouse_links))
    table.add_row("Parent/child links", str(len(snap.relationships) - spouse_links))
    table.add_row("Generations", str(calculate_generations(snap.members, snap.relationships)))
    table.add_row("Tree nodes", str(len(render.nodes)))
    table.add_row("Tree depth", str(tree_depth(render.build.root)))
    table.add_row("Linked to root", str(len(diagnostic.connected & {m.id for m in snap.members})))
    table.add_row("Not linked to root", str(len(diagnostic.disconnected)))
    table.add_row("Status", render.status)

    console.print(table)
