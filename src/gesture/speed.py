"""
Speed Mapper
=============

Maps the finger angle onto a signed volume rotation speed.
"""

import math
from dataclasses import dataclass

MAX_ANGLE = 90.0   # degrees at which the speed saturates
MAX_SPEED = 3.0    # volume units per accepted update


@dataclass
class SpeedMapperConfig:
    """Angle-to-speed mapping parameters."""
    max_angle: float = MAX_ANGLE
    max_speed: float = MAX_SPEED

    def __post_init__(self):
        if self.max_angle <= 0:
            raise ValueError(f"max_angle must be positive, got {self.max_angle}")
        if self.max_speed < 0:
            raise ValueError(f"max_speed must be non-negative, got {self.max_speed}")

    @classmethod
    def from_dict(cls, config: dict) -> "SpeedMapperConfig":
        """Create config from dictionary."""
        return cls(
            max_angle=float(config.get("max_angle", MAX_ANGLE)),
            max_speed=float(config.get("max_speed", MAX_SPEED)),
        )


def sign(value: float) -> float:
    """Return -1.0, 0.0 or 1.0."""
    if value > 0:
        return 1.0
    if value < 0:
        return -1.0
    return 0.0


def speed_magnitude(angle_degrees: float, config: SpeedMapperConfig) -> float:
    """Linear map of |angle| onto [0, max_speed], saturating at max_angle."""
    clamped = min(abs(angle_degrees), config.max_angle)
    return clamped / config.max_angle * config.max_speed


def map_speed(angle_degrees: float, is_right_hand: bool,
              config: SpeedMapperConfig = None) -> float:
    """
    Convert an angle and handedness guess into a signed rotation speed.

    The right hand reverses the direction implied by the angle sign, so
    the same physical rotation moves the volume the same way whichever
    hand faces the camera.
    """
    config = config or SpeedMapperConfig()
    if not math.isfinite(angle_degrees):
        return 0.0

    magnitude = speed_magnitude(angle_degrees, config)
    directed = magnitude * sign(angle_degrees)
    return -directed if is_right_hand else directed
