"""
Gesture Modes
==============

Alternative control policies over the same extracted features.

    ContinuousMode - finger angle -> signed speed, integrated every 50ms
    DiscreteMode   - index finger pointing EAST/WEST steps the volume
                     by a fixed amount every 300ms

Both hand their result to the shared VolumeIntegrator so landmark
handling, clamping and throttling stay in one place.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from .speed import SpeedMapperConfig, map_speed
from .throttle import VolumeIntegrator
from .types import Direction, GestureMode, HandFeatures

logger = logging.getLogger(__name__)


@dataclass
class ModeStep:
    """What a mode did with one frame's features."""
    speed: float = 0.0
    accepted: bool = False
    direction: Optional[Direction] = None


class BaseMode:
    """Interface shared by the gesture modes."""

    mode: GestureMode = None

    def __init__(self, interval_ms: float):
        if interval_ms < 0:
            raise ValueError(f"interval_ms must be non-negative, got {interval_ms}")
        self.interval_ms = interval_ms

    def update(self, features: HandFeatures, integrator: VolumeIntegrator,
               now: float) -> ModeStep:
        raise NotImplementedError

    def reset(self):
        """Called when the hand is lost or the mode is deactivated."""

    @property
    def direction(self) -> Optional[Direction]:
        return None


class ContinuousMode(BaseMode):
    """Rotation-speed control from the index/thumb angle."""

    mode = GestureMode.CONTINUOUS

    def __init__(self, speed_config: Optional[SpeedMapperConfig] = None,
                 interval_ms: float = 50.0):
        super().__init__(interval_ms)
        self.speed_config = speed_config or SpeedMapperConfig()

    def update(self, features, integrator, now):
        speed = map_speed(features.angle_degrees, features.is_right_hand, self.speed_config)
        accepted = integrator.integrate(speed, now)
        return ModeStep(speed=speed, accepted=accepted)


class DiscreteMode(BaseMode):
    """Three-bucket direction control from the index tip's offset to the palm.

    Pointing EAST (to the right in the frame) lowers the volume and
    pointing WEST raises it, one ``step`` per open throttle window for
    as long as the hand stays in the bucket.
    """

    mode = GestureMode.DISCRETE

    def __init__(self, threshold_px: float = 40.0, step: float = 2.0,
                 interval_ms: float = 300.0):
        super().__init__(interval_ms)
        if threshold_px < 0:
            raise ValueError(f"threshold_px must be non-negative, got {threshold_px}")
        if step <= 0:
            raise ValueError(f"step must be positive, got {step}")
        self.threshold_px = threshold_px
        self.step = step
        self._direction = Direction.CENTER

    def classify(self, index_dx: float) -> Direction:
        """Bucket the index tip's horizontal offset. Boundaries stay CENTER."""
        if index_dx > self.threshold_px:
            return Direction.EAST
        if index_dx < -self.threshold_px:
            return Direction.WEST
        return Direction.CENTER

    def update(self, features, integrator, now):
        direction = self.classify(features.index_dx)
        if direction is not self._direction:
            logger.debug("Direction %s -> %s", self._direction.value, direction.value)
            self._direction = direction

        if direction is Direction.EAST:
            delta = -self.step
        elif direction is Direction.WEST:
            delta = self.step
        else:
            return ModeStep(direction=direction)

        accepted = integrator.integrate(delta, now)
        return ModeStep(speed=delta, accepted=accepted, direction=direction)

    def reset(self):
        self._direction = Direction.CENTER

    @property
    def direction(self) -> Direction:
        return self._direction
