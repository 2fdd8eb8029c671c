from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from family_tree_layout.analysis import diagnose_tree
from family_tree_layout.cli.utils import load_tree
from family_tree_layout.core.exceptions import IngestionError

console = Console()


def validate_command(
    snapshot: Path = typer.Argument(..., exists=True, readable=True, help="JSON or YAML snapshot"),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Exit non-zero when structure violations are found",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable rich logging",
    ),
):
    """
    Check a snapshot against the Phase 1 tree rules.
    """
    try:
        snap, render = load_tree(snapshot, verbose=verbose)
    except IngestionError as exc:
        console.print(f"[red]Invalid snapshot:[/red] {exc}")
        raise typer.Exit(code=2)

    if render.build.error:
        console.print(f"[red]Cannot build tree:[/red] {render.build.error}")
        raise typer.Exit(code=1)

    for warning in render.build.warnings:
        console.print(f"[yellow]Warning:[/yellow] {warning}")

    if not render.violations:
        console.print(f"[green]Tree structure is valid[/green] ({len(render.nodes)} nodes)")
        return

    table = Table(title="Phase 1 Constraint Violations")
    table.add_column("#", justify="right")
    table.add_column("Violation", style="yellow")
    for idx, message in enumerate(render.violations, start=1):
        table.add_row(str(idx), message)
    console.print(table)

    diagnostic = diagnose_tree(snap.members, snap.relationships)
    if diagnostic.disconnected:
        names = ", ".join(m.display_name for m in diagnostic.disconnected)
        console.print(f"Members with no relationship path to the root: {names}")

    if strict:
        raise typer.Exit(code=1)
