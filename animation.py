"""Per-frame driver that turns the easing curve into object motion.

Each frame the render loop hands the driver the total elapsed time and the
time since the previous frame.  The driver folds the elapsed time into the
loop period, runs it through the current curve and writes the resulting
offsets onto a :class:`Transform`.  Apart from the config it reads, the
driver keeps no state, so edits to the curve, the mode or the loop period
show up on the very next frame.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
import logging
import math
from typing import Dict, List, Tuple, Type

from curve_model import CurveModel
from easing import evaluate
from errors import DegenerateConfiguration, InvalidArgument

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Animation modes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AnimationMode(ABC):
    """Base class; ``offsets`` returns ``(vertical, roll)`` for an eased value."""

    name = "base"

    @abstractmethod
    def offsets(self, eased: float) -> Tuple[float, float]:
        ...


@dataclass(frozen=True)
class NoMotion(AnimationMode):
    name = "none"

    def offsets(self, eased: float) -> Tuple[float, float]:
        return 0.0, 0.0


@dataclass(frozen=True)
class Float(AnimationMode):
    name = "float"
    amplitude: float = 1.0

    def offsets(self, eased: float) -> Tuple[float, float]:
        return (eased - 0.5) * self.amplitude, 0.0


@dataclass(frozen=True)
class Bounce(AnimationMode):
    name = "bounce"
    amplitude: float = 1.6

    def offsets(self, eased: float) -> Tuple[float, float]:
        return abs(eased - 0.5) * self.amplitude, 0.0


@dataclass(frozen=True)
class Swing(AnimationMode):
    name = "swing"
    amplitude: float = 0.4

    def offsets(self, eased: float) -> Tuple[float, float]:
        return 0.0, (eased - 0.5) * self.amplitude


@dataclass(frozen=True)
class Custom(AnimationMode):
    name = "custom"
    vertical: float = 0.8
    roll: float = 0.3

    def offsets(self, eased: float) -> Tuple[float, float]:
        return (eased - 0.5) * self.vertical, (eased - 0.5) * self.roll


MODES: Dict[str, Type[AnimationMode]] = {
    mode.name: mode for mode in (NoMotion, Float, Bounce, Swing, Custom)
}


def mode_from_name(name: str) -> AnimationMode:
    try:
        return MODES[name.lower()]()
    except KeyError:
        raise InvalidArgument(
            f"unknown animation mode {name!r}, expected one of {', '.join(MODES)}"
        ) from None


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------


class AnimationConfig:
    """Settings read by :class:`AnimationDriver` every frame.

    ``curve`` is shared with the editor, not copied.  Assignments are
    validated so a bad value never reaches the driver.
    """

    def __init__(
        self,
        curve: CurveModel,
        mode: AnimationMode | None = None,
        rotation_enabled: bool = False,
        rotation_speed: float = 1.0,
        loop_period: float = 2.0,
    ) -> None:
        self.curve = curve
        self.mode = mode or NoMotion()
        self.rotation_enabled = rotation_enabled
        self.rotation_speed = rotation_speed
        self.loop_period = loop_period

    @property
    def mode(self) -> AnimationMode:
        return self._mode

    @mode.setter
    def mode(self, value: AnimationMode) -> None:
        if not isinstance(value, AnimationMode):
            raise InvalidArgument(f"not an animation mode: {value!r}")
        logger.debug("Animation mode set to %s", value.name)
        self._mode = value

    @property
    def rotation_speed(self) -> float:
        return self._rotation_speed

    @rotation_speed.setter
    def rotation_speed(self, value: float) -> None:
        if not math.isfinite(value) or value < 0:
            raise InvalidArgument(f"rotation speed must be >= 0, got {value!r}")
        self._rotation_speed = float(value)

    @property
    def loop_period(self) -> float:
        return self._loop_period

    @loop_period.setter
    def loop_period(self, value: float) -> None:
        if not math.isfinite(value) or value <= 0:
            raise DegenerateConfiguration(f"loop period must be > 0 seconds, got {value!r}")
        self._loop_period = float(value)


# ---------------------------------------------------------------------------
# Driver
# ---------------------------------------------------------------------------


@dataclass
class Transform:
    """Position and euler rotation (x, y, z) of the animated object."""

    position: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])
    rotation: List[float] = field(default_factory=lambda: [0.0, 0.0, 0.0])


@dataclass(frozen=True)
class FrameSample:
    normalized_time: float
    eased: float
    vertical: float
    roll: float


def normalized_time(elapsed: float, loop_period: float) -> float:
    """Position of ``elapsed`` inside the loop, in ``[0, 1)``."""
    if loop_period <= 0:
        raise DegenerateConfiguration(f"loop period must be > 0 seconds, got {loop_period!r}")
    return (elapsed % loop_period) / loop_period


class AnimationDriver:
    def __init__(self, config: AnimationConfig) -> None:
        self.config = config

    def tick(self, elapsed: float, delta: float, target: Transform) -> FrameSample:
        config = self.config
        if config.rotation_enabled:
            target.rotation[1] += delta * config.rotation_speed

        phase = normalized_time(elapsed, config.loop_period)
        eased = evaluate(*config.curve.get().as_tuple(), phase)
        vertical, roll = config.mode.offsets(eased)
        target.position[1] = vertical
        target.rotation[2] = roll
        return FrameSample(phase, eased, vertical, roll)
