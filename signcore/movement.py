"""
movement.py – Coarse hand-motion descriptor from recent wrist positions.

Only the wrist (landmark 0) is tracked.  With the last three usable wrist
samples ``p0, p1, p2``:

* ``d = p2 - p0``; ``|d| < 0.02`` means the hand is *static*.
* The dominant axis of ``d`` names the direction (x → right/left,
  y → down/up, z → forward/backward) and ``|d|`` the speed.
* If the triangle ``p0 p1 p2`` is wide enough (area > 0.01 in the image
  plane) the path bent on the way, and the motion is *circular*.

Anything short of three usable samples is reported as static/slow.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable

import numpy as np

from signcore.config import MovementConfig
from signcore.landmarks import triangle_area_2d, wrist_position

logger = logging.getLogger(__name__)


class MovementType(str, Enum):
    STATIC = "static"
    LINEAR = "linear"
    CIRCULAR = "circular"
    # Expected-only kinds: vocabulary entries use them, the wrist
    # trajectory detector never emits them.
    SHAKE = "shake"
    TAP = "tap"
    FLICK = "flick"
    TWIST = "twist"
    OPEN_CLOSE = "open_close"
    BRUSH = "brush"
    WIGGLE = "wiggle"
    ROCK = "rock"
    SPLIT = "split"
    MERGE = "merge"


DETECTABLE_TYPES = frozenset({MovementType.STATIC, MovementType.LINEAR, MovementType.CIRCULAR})


class Direction(str, Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    FORWARD = "forward"
    BACKWARD = "backward"
    TOWARD = "toward"
    INWARD = "inward"
    OUTWARD = "outward"


class Speed(str, Enum):
    SLOW = "slow"
    MEDIUM = "medium"
    FAST = "fast"


@dataclass(frozen=True)
class MovementPattern:
    type: MovementType
    speed: Speed
    direction: Direction | None = None
    repetitions: int | None = None

    def matches(self, observed: "MovementPattern") -> bool:
        """True when *observed* satisfies this expected movement.

        Types must agree; direction only matters if this pattern names one.
        """
        if self.type != observed.type:
            return False
        return self.direction is None or self.direction == observed.direction

    def describe(self) -> str:
        if self.direction is None:
            return self.type.value
        return f"{self.type.value} {self.direction.value}"


STATIC_SLOW = MovementPattern(MovementType.STATIC, Speed.SLOW)


def _direction(d: np.ndarray) -> Direction:
    ax, ay, az = np.abs(d)
    if ax > ay and ax > az:
        return Direction.RIGHT if d[0] > 0 else Direction.LEFT
    if ay > az:
        return Direction.DOWN if d[1] > 0 else Direction.UP
    return Direction.FORWARD if d[2] > 0 else Direction.BACKWARD


class MovementDetector:
    """Classify wrist motion over the newest valid snapshots of a history."""

    def __init__(self, config: MovementConfig | None = None) -> None:
        self.config = config or MovementConfig()

    def _speed(self, magnitude: float) -> Speed:
        if magnitude > self.config.fast_distance:
            return Speed.FAST
        if magnitude > self.config.medium_distance:
            return Speed.MEDIUM
        return Speed.SLOW

    def detect(self, history: Iterable[Any]) -> MovementPattern:
        """Return the movement over the last ``samples`` usable snapshots.

        Parameters
        ----------
        history : iterable
            Landmark snapshots, oldest first.  Entries that are ``None``,
            empty, or lack a numeric wrist are skipped.
        """
        wrists = [w for w in (wrist_position(lm) for lm in history) if w is not None]
        if len(wrists) < self.config.samples:
            logger.debug("Only %d usable wrist samples; reporting static", len(wrists))
            return STATIC_SLOW

        recent = wrists[-self.config.samples:]
        first, last = recent[0], recent[-1]
        mid = recent[len(recent) // 2]

        delta = last - first
        magnitude = float(np.linalg.norm(delta))
        if magnitude < self.config.static_cutoff:
            return STATIC_SLOW

        speed = self._speed(magnitude)
        if triangle_area_2d(first, mid, last) > self.config.circular_area:
            return MovementPattern(MovementType.CIRCULAR, speed)
        return MovementPattern(MovementType.LINEAR, speed, _direction(delta))
