
"""
CLI package for family_tree_layout.

Provides the Typer application entrypoint and shared CLI utilities.
"""

from family_tree_layout.cli.app import app, main

__all__ = [
    "app",
    "main",
]
