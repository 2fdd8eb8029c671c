
"""
CLI command modules for family_tree_layout.

Each command module defines a single Typer-compatible command function.
"""

from family_tree_layout.cli.commands.layout import layout_command
from family_tree_layout.cli.commands.stats import stats_command
from family_tree_layout.cli.commands.validate import validate_command

__all__ = [
    "layout_command",
    "stats_command",
    "validate_command",
]
