"""
Zoom/pan state for one render surface.

The controller owns a single ``ViewportState`` and replaces it on every input
event. All changes go through ``_commit`` which notifies subscribers, so a
rendering layer only needs one listener to stay in sync.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from enum import IntEnum
from numbers import Real
from typing import Any, Callable, List, Mapping, Optional, Protocol, Tuple

from family_tree_layout.config import get_config
from family_tree_layout.core.exceptions import LayoutConfigError
from family_tree_layout.logging import get_logger

log = get_logger(__name__)


class PointerButton(IntEnum):
    PRIMARY = 0
    MIDDLE = 1
    SECONDARY = 2


class Box(Protocol):
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True, slots=True)
class ViewportState:
    scale: float = 1.0
    translate_x: float = 0.0
    translate_y: float = 0.0

    def to_screen(self, x: float, y: float) -> Tuple[float, float]:
        """Map a canvas point to surface pixels (transform origin at 0,0)."""
        return self.translate_x + x * self.scale, self.translate_y + y * self.scale

    def css_transform(self) -> str:
        return f"translate({self.translate_x}px, {self.translate_y}px) scale({self.scale})"


@dataclass(frozen=True, slots=True)
class ViewportLimits:
    min_scale: float = 0.5
    max_scale: float = 1.5
    zoom_step: float = 0.1
    fit_padding: float = 50
    # Primary button is reserved for selecting cards
    pan_buttons: Tuple[int, ...] = (PointerButton.MIDDLE, PointerButton.SECONDARY)

    def __post_init__(self) -> None:
        for name in ("min_scale", "max_scale", "zoom_step", "fit_padding"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Real):
                raise LayoutConfigError(f"{name} must be a number, got {value!r}")
        if not 0 < self.min_scale <= self.max_scale:
            raise LayoutConfigError("scale limits must satisfy 0 < min_scale <= max_scale")
        if self.zoom_step <= 0:
            raise LayoutConfigError("zoom_step must be positive")
        if self.fit_padding < 0:
            raise LayoutConfigError("fit_padding must not be negative")

    def clamp(self, scale: float) -> float:
        return max(self.min_scale, min(self.max_scale, scale))

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "ViewportLimits":
        data = dict(data or {})
        if "pan_buttons" in data:
            data["pan_buttons"] = tuple(int(b) for b in data["pan_buttons"] or ())
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})

    @classmethod
    def from_config(cls) -> "ViewportLimits":
        return cls.from_mapping(get_config().viewport)


@dataclass(slots=True)
class _Drag:
    button: int
    start_x: float
    start_y: float
    origin_x: float
    origin_y: float


Listener = Callable[[ViewportState], None]


class ViewportController:
    def __init__(
        self,
        limits: Optional[ViewportLimits] = None,
        state: Optional[ViewportState] = None,
    ):
        self.limits = limits or ViewportLimits.from_config()
        self._state = state or ViewportState()
        self._drag: Optional[_Drag] = None
        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------ #
    # State access
    # ------------------------------------------------------------------ #

    @property
    def state(self) -> ViewportState:
        return self._state

    @property
    def is_panning(self) -> bool:
        return self._drag is not None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener(state)``; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _commit(self, state: ViewportState) -> ViewportState:
        if state == self._state:
            return self._state
        self._state = state
        for listener in list(self._listeners):
            listener(state)
        return state

    # ------------------------------------------------------------------ #
    # Input events
    # ------------------------------------------------------------------ #

    def zoom(self, delta: float, cursor_x: float, cursor_y: float) -> ViewportState:
        """
        Apply one wheel step at a cursor position relative to the surface.

        Wheel semantics: a positive delta (scrolling down) zooms out, a
        negative one zooms in. Zero is ignored instead of counting as a
        zoom-in step, as a plain ``delta > 0`` test in a wheel handler would.
        """
        if delta == 0:
            return self._state

        direction = -1 if delta > 0 else 1
        current = self._state
        new_scale = self.limits.clamp(current.scale + direction * self.limits.zoom_step)
        scale_diff = new_scale - current.scale

        return self._commit(
            ViewportState(
                scale=new_scale,
                translate_x=current.translate_x - cursor_x * scale_diff / new_scale,
                translate_y=current.translate_y - cursor_y * scale_diff / new_scale,
            )
        )

    def begin_pan(self, button: int, x: float, y: float) -> bool:
        """Start a drag; ignored for non-pan buttons or while a drag is active."""
        if int(button) not in self.limits.pan_buttons:
            return False
        if self._drag is not None:
            log.debug("Ignoring pan start with button %s: drag already active", button)
            return False

        self._drag = _Drag(
            button=int(button),
            start_x=x,
            start_y=y,
            origin_x=self._state.translate_x,
            origin_y=self._state.translate_y,
        )
        return True

    def pan_to(self, x: float, y: float) -> ViewportState:
        drag = self._drag
        if drag is None:
            return self._state

        return self._commit(
            ViewportState(
                scale=self._state.scale,
                translate_x=drag.origin_x + (x - drag.start_x),
                translate_y=drag.origin_y + (y - drag.start_y),
            )
        )

    def end_pan(self) -> None:
        self._drag = None

    # ------------------------------------------------------------------ #
    # Programmatic changes
    # ------------------------------------------------------------------ #

    def reset(self) -> ViewportState:
        self._drag = None
        return self._commit(ViewportState())

    def fit_to_bounds(
        self,
        box: Optional[Box],
        surface_width: float,
        surface_height: float,
    ) -> ViewportState:
        """
        Scale and centre ``box`` inside the surface minus padding on each side.

        The scale is capped at ``max_scale`` but may go below ``min_scale`` so
        that large trees fit entirely.
        """
        if box is None:
            return self._state

        padding = self.limits.fit_padding
        available_width = surface_width - padding * 2
        available_height = surface_height - padding * 2
        if available_width <= 0 or available_height <= 0:
            log.warning(
                "Surface %sx%s too small to fit with padding %s",
                surface_width,
                surface_height,
                padding,
            )
            return self._state

        scale_x = available_width / box.width if box.width > 0 else self.limits.max_scale
        scale_y = available_height / box.height if box.height > 0 else self.limits.max_scale
        new_scale = min(scale_x, scale_y, self.limits.max_scale)

        return self._commit(
            ViewportState(
                scale=new_scale,
                translate_x=padding - box.x * new_scale + (available_width - box.width * new_scale) / 2,
                translate_y=padding - box.y * new_scale + (available_height - box.height * new_scale) / 2,
            )
        )
