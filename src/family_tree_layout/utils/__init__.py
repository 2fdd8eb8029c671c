# src/family_tree_layout/utils/__init__.py

from .pathing import (
    is_source_checkout,
    project_root,
    resolve_project_path,
    mock_file_path,
)

__all__ = [
    "is_source_checkout",
    "project_root",
    "resolve_project_path",
    "mock_file_path",
]
