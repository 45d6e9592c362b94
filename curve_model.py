"""Control point state for the easing curve plus the preset catalogue."""
from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from typing import Callable, List, Tuple

from errors import InvalidArgument

logger = logging.getLogger(__name__)

Point = Tuple[float, float]


def _clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


@dataclass(frozen=True)
class ControlPoints:
    """The two free points of a cubic bezier; ``(0, 0)`` and ``(1, 1)`` are implied."""

    p1: Point = (0.25, 0.1)
    p2: Point = (0.25, 1.0)

    def as_tuple(self) -> Tuple[float, float, float, float]:
        return (self.p1[0], self.p1[1], self.p2[0], self.p2[1])

    def css(self) -> str:
        return "cubic-bezier({})".format(", ".join(f"{v:.2f}" for v in self.as_tuple()))


@dataclass(frozen=True)
class Preset:
    name: str
    points: ControlPoints


PRESETS: Tuple[Preset, ...] = (
    Preset("Linear", ControlPoints((0.0, 0.0), (1.0, 1.0))),
    Preset("Ease-In", ControlPoints((0.42, 0.0), (1.0, 1.0))),
    Preset("Ease-Out", ControlPoints((0.0, 0.0), (0.58, 1.0))),
    Preset("Ease-In-Out", ControlPoints((0.42, 0.0), (0.58, 1.0))),
    # y values outside [0, 1] give the overshoot
    Preset("Elastic", ControlPoints((0.68, -0.55), (0.265, 1.55))),
)


def preset_by_name(name: str) -> Preset:
    for preset in PRESETS:
        if preset.name.lower() == name.lower():
            return preset
    raise InvalidArgument(f"unknown preset {name!r}")


Listener = Callable[[ControlPoints], None]


class CurveModel:
    """Holds the current control points and tells listeners when they change.

    Interactive edits go through :meth:`set_control_point`, which clamps to
    the unit square.  Presets are applied as given so they may overshoot.
    """

    def __init__(self, points: ControlPoints | None = None) -> None:
        self._points = points or ControlPoints()
        self._listeners: List[Listener] = []

    def get(self) -> ControlPoints:
        return self._points

    def set_control_point(self, index: int, x: float, y: float) -> None:
        if index not in (0, 1):
            raise InvalidArgument(f"control point index must be 0 or 1, got {index!r}")
        if not (math.isfinite(x) and math.isfinite(y)):
            raise InvalidArgument(f"control point must be finite, got ({x!r}, {y!r})")
        point = (_clamp01(x), _clamp01(y))
        if index == 0:
            self._points = ControlPoints(point, self._points.p2)
        else:
            self._points = ControlPoints(self._points.p1, point)
        self._notify()

    def apply_preset(self, preset: Preset) -> None:
        logger.debug("Applying preset %s: %s", preset.name, preset.points.css())
        self._points = preset.points
        self._notify()

    # Observers ----------------------------------------------------------------
    def subscribe(self, listener: Listener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self._points)
