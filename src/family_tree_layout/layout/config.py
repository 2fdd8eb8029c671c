from __future__ import annotations

from dataclasses import dataclass, fields
from numbers import Real
from typing import Any, Mapping

from family_tree_layout.config import get_config
from family_tree_layout.core.exceptions import LayoutConfigError

DEFAULT_VIEWPORT_WIDTH = 1200


@dataclass(frozen=True, slots=True)
class LayoutConfig:
    """
    Pixel sizes used by the layout engine.

    ``pair_gap`` separates a person's card from their spouse's card;
    ``top_margin`` is the root row's y.
    """
    node_width: float = 140
    node_height: float = 80
    horizontal_gap: float = 180
    vertical_gap: float = 180
    pair_gap: float = 20
    top_margin: float = 100

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, Real):
                raise LayoutConfigError(f"{f.name} must be a number, got {value!r}")
        if self.node_width <= 0 or self.node_height <= 0:
            raise LayoutConfigError("node_width and node_height must be positive")
        for name in ("horizontal_gap", "vertical_gap", "pair_gap", "top_margin"):
            if getattr(self, name) < 0:
                raise LayoutConfigError(f"{name} must not be negative")

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "LayoutConfig":
        """Build from a config section, ignoring keys that are not layout sizes."""
        data = data or {}
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def from_config(cls) -> "LayoutConfig":
        return cls.from_mapping(get_config().layout)


def default_viewport_width() -> float:
    value = get_config().layout.get("viewport_width", DEFAULT_VIEWPORT_WIDTH)
    if isinstance(value, bool) or not isinstance(value, Real):
        raise LayoutConfigError(f"viewport_width must be a number, got {value!r}")
    return value
