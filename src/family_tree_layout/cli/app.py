
from __future__ import annotations

import typer

from family_tree_layout.cli.commands.layout import layout_command
from family_tree_layout.cli.commands.stats import stats_command
from family_tree_layout.cli.commands.validate import validate_command

app = typer.Typer(
    name="family-tree",
    help="Family tree hierarchy builder, validator and layout engine",
    add_completion=False,
)

app.command("layout")(layout_command)
app.command("validate")(validate_command)
app.command("stats")(stats_command)


def main():
    app()


if __name__ == "__main__":
    main()
