"""
Exporter package.

Re-exports the JSON export entry points used by the CLI.
"""

from __future__ import annotations

from .json_exporter import build_render_dict, export_render_json, serialize_render_to_json_string

__all__ = [
    "build_render_dict",
    "export_render_json",
    "serialize_render_to_json_string",
]
