"""Pointer handling for the bezier curve editor.

The surface knows nothing about a GUI toolkit.  It receives pointer positions
in pixels relative to the editor viewport, keeps track of which control point
is being dragged and writes the result into a :class:`CurveModel`.  Drawing is
left to the caller, which can use :meth:`CurveEditorSurface.path_points` and
:meth:`CurveEditorSurface.handle_lines` to get viewport-space geometry.
"""
from __future__ import annotations

import logging
import math
from typing import List, Tuple

from curve_model import CurveModel, Preset
from easing import sample_curve
from errors import InvalidArgument

logger = logging.getLogger(__name__)

Pixel = Tuple[float, float]


class CurveEditorSurface:
    def __init__(
        self,
        model: CurveModel,
        width: float,
        height: float,
        hit_radius: float = 0.02,
    ) -> None:
        if width <= 0 or height <= 0:
            raise InvalidArgument(f"viewport must have a positive size, got {width}x{height}")
        self.model = model
        self.width = width
        self.height = height
        self.hit_radius = hit_radius
        self.dragging: int | None = None

    # Coordinate mapping ---------------------------------------------------------
    def to_normalized(self, px: float, py: float) -> Tuple[float, float]:
        x = px / self.width
        y = 1 - py / self.height
        return max(0.0, min(1.0, x)), max(0.0, min(1.0, y))

    def to_viewport(self, x: float, y: float) -> Pixel:
        return x * self.width, (1 - y) * self.height

    # Pointer protocol -----------------------------------------------------------
    def hit_test(self, px: float, py: float) -> int | None:
        """Index of the control point under ``(px, py)``, nearest first."""
        x = px / self.width
        y = 1 - py / self.height
        points = self.model.get()
        best: int | None = None
        best_dist = self.hit_radius
        for index, (cx, cy) in enumerate((points.p1, points.p2)):
            dist = math.hypot(x - cx, y - cy)
            if dist <= best_dist and (best is None or dist < best_dist):
                best, best_dist = index, dist
        return best

    def pointer_down(self, px: float, py: float) -> bool:
        index = self.hit_test(px, py)
        if index is None:
            return False
        self.dragging = index
        logger.debug("Drag started on control point %d", index)
        return True

    def pointer_move(self, px: float, py: float) -> None:
        if self.dragging is None:
            return
        # the model clamps and rejects non-finite input
        self.model.set_control_point(self.dragging, px / self.width, 1 - py / self.height)

    def pointer_up(self) -> None:
        if self.dragging is not None:
            logger.debug("Drag ended on control point %d", self.dragging)
        self.dragging = None

    def pointer_leave(self) -> None:
        self.pointer_up()

    def select_preset(self, preset: Preset) -> bool:
        if self.dragging is not None:
            logger.warning("Ignoring preset %s while a control point is dragged", preset.name)
            return False
        self.model.apply_preset(preset)
        return True

    # Geometry for drawing -------------------------------------------------------
    def path_points(self, samples: int = 60) -> List[Pixel]:
        p1x, p1y, p2x, p2y = self.model.get().as_tuple()
        return [self.to_viewport(t, y) for t, y in sample_curve(p1x, p1y, p2x, p2y, samples)]

    def handle_lines(self) -> List[Tuple[Pixel, Pixel]]:
        points = self.model.get()
        return [
            (self.to_viewport(0.0, 0.0), self.to_viewport(*points.p1)),
            (self.to_viewport(1.0, 1.0), self.to_viewport(*points.p2)),
        ]
