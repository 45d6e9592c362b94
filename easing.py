"""Cubic bezier easing as used by CSS ``cubic-bezier()``.

The curve runs from ``(0, 0)`` to ``(1, 1)`` with two free control points.
Evaluating it for a time ``t`` means finding the curve parameter ``u`` whose
x coordinate equals ``t`` and returning the y coordinate at that ``u``.  The
inversion is done with a few Newton-Raphson steps and falls back to bisection
when the tangent is too flat for Newton to make progress.

Nothing here keeps state, so the functions can be called every frame from
the animation driver and from the editor while it draws the curve.
"""
from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Callable, List, Tuple

from errors import InvalidArgument, NumericNonconvergence

EPSILON = 1e-6
NEWTON_ITERATIONS = 8
BISECTION_ITERATIONS = 64


# ---------------------------------------------------------------------------
# Polynomial form
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class BezierCoefficients:
    """Power-basis coefficients of one axis: ``((a*u + b)*u + c)*u``."""

    a: float
    b: float
    c: float

    @classmethod
    def from_controls(cls, p1: float, p2: float) -> "BezierCoefficients":
        c = 3 * p1
        b = 3 * (p2 - p1) - c
        a = 1 - c - b
        return cls(a, b, c)

    def sample(self, u: float) -> float:
        return ((self.a * u + self.b) * u + self.c) * u

    def derivative(self, u: float) -> float:
        return (3 * self.a * u + 2 * self.b) * u + self.c


# ---------------------------------------------------------------------------
# Solving X(u) = t
# ---------------------------------------------------------------------------


def newton_solve(curve_x: BezierCoefficients, t: float) -> float:
    """Return ``u`` with ``X(u) == t`` using Newton-Raphson.

    Raises :class:`NumericNonconvergence` when the derivative gets too small
    or the iteration budget runs out.
    """
    u = t
    for _ in range(NEWTON_ITERATIONS):
        error = curve_x.sample(u) - t
        if abs(error) < EPSILON:
            return u
        slope = curve_x.derivative(u)
        if abs(slope) < EPSILON:
            raise NumericNonconvergence(f"flat tangent at u={u:.6f}")
        u -= error / slope
    if abs(curve_x.sample(u) - t) < EPSILON:
        return u
    raise NumericNonconvergence(f"no root after {NEWTON_ITERATIONS} steps")


def bisection_solve(curve_x: BezierCoefficients, t: float) -> float:
    """Return ``u`` in ``[0, 1]`` with ``X(u)`` close to ``t`` by halving."""
    lo, hi = 0.0, 1.0
    u = t
    if u <= lo:
        return lo
    if u >= hi:
        return hi
    for _ in range(BISECTION_ITERATIONS):
        x = curve_x.sample(u)
        if abs(x - t) < EPSILON:
            break
        if t > x:
            lo = u
        else:
            hi = u
        u = lo + (hi - lo) * 0.5
    return u


def solve_curve_x(curve_x: BezierCoefficients, t: float) -> float:
    try:
        return newton_solve(curve_x, t)
    except NumericNonconvergence:
        return bisection_solve(curve_x, t)


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------


def evaluate(p1x: float, p1y: float, p2x: float, p2y: float, t: float) -> float:
    """Eased value of the curve through ``(p1x, p1y)`` and ``(p2x, p2y)`` at ``t``.

    ``t`` is clamped to ``[0, 1]`` and the endpoints are returned exactly.
    The result may leave ``[0, 1]`` when the control points overshoot.
    """
    values = (p1x, p1y, p2x, p2y, t)
    if not all(math.isfinite(v) for v in values):
        raise InvalidArgument(f"non-finite bezier input: {values!r}")
    if t <= 0.0:
        return 0.0
    if t >= 1.0:
        return 1.0
    curve_x = BezierCoefficients.from_controls(p1x, p2x)
    curve_y = BezierCoefficients.from_controls(p1y, p2y)
    return curve_y.sample(solve_curve_x(curve_x, t))


def cubic_bezier(p1x: float, p1y: float, p2x: float, p2y: float) -> Callable[[float], float]:
    """Return a cubic bezier easing function defined by control points."""

    def func(t: float) -> float:
        return evaluate(p1x, p1y, p2x, p2y, t)

    return func


def sample_curve(
    p1x: float, p1y: float, p2x: float, p2y: float, samples: int = 60
) -> List[Tuple[float, float]]:
    """Evenly spaced ``(t, eased)`` pairs, endpoints included."""
    if samples < 2:
        raise InvalidArgument(f"need at least two samples, got {samples}")
    func = cubic_bezier(p1x, p1y, p2x, p2y)
    return [(i / (samples - 1), func(i / (samples - 1))) for i in range(samples)]
