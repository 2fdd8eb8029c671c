from __future__ import annotations

from pathlib import Path
from typing import Union

from family_tree_layout.config import get_config

# src/family_tree_layout/utils/pathing.py -> three levels up is the checkout
_PROJECT_ROOT = Path(__file__).resolve().parents[3]

DEFAULT_SAMPLES_DIR = "mock_files"


def project_root() -> Path:
    """Directory holding ``src/``, ``config/`` and the sample snapshots."""
    return _PROJECT_ROOT


def resolve_project_path(path: Union[str, Path]) -> Path:
    """Absolute paths pass through; relative ones are anchored at the project root."""
    path = Path(path)
    if path.is_absolute():
        return path
    return project_root() / path


def mock_file_path(filename: Union[str, Path]) -> Path:
    """
    Path of a bundled sample snapshot.

    The directory comes from ``paths.samples_dir`` in the config file.
    """
    samples_dir = get_config().paths.get("samples_dir") or DEFAULT_SAMPLES_DIR
    return resolve_project_path(samples_dir) / filename


def is_source_checkout() -> bool:
    """True when running from a repository checkout rather than an installed copy."""
    return (project_root() / "pyproject.toml").is_file()
