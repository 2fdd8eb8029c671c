"""
Logging package for ``family_tree_layout``.

Use ``get_logger(__name__)`` in modules to inherit the shared handlers.
"""

from .logger import BASE_LOGGER_NAME, get_logger

__all__ = [
    "BASE_LOGGER_NAME",
    "get_logger",
]
