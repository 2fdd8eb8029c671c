from .controller import PointerButton, ViewportController, ViewportLimits, ViewportState

__all__ = [
    "PointerButton",
    "ViewportController",
    "ViewportLimits",
    "ViewportState",
]
