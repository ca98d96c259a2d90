"""
Rate limiter and volume integrator.

The only order-sensitive stage of the engine. A signed speed is
integrated into the volume when:
    - its magnitude clears the deadband, and
    - strictly more than ``interval_ms`` has passed since the last
      accepted update.

A negative elapsed time (the caller's clock went backwards) never
passes the throttle.
"""

import logging
from typing import Optional

from .types import ControlState

logger = logging.getLogger(__name__)

VOLUME_MIN = 0.0
VOLUME_MAX = 100.0
DEFAULT_DEADBAND = 0.05


def clamp_volume(level: float) -> float:
    """Clamp a volume level into [0, 100]."""
    return max(VOLUME_MIN, min(VOLUME_MAX, level))


class VolumeIntegrator:
    """Throttled, clamped volume accumulator owning a ControlState."""

    def __init__(self, interval_ms: float = 50.0, deadband: float = DEFAULT_DEADBAND,
                 state: Optional[ControlState] = None):
        if interval_ms < 0:
            raise ValueError(f"interval_ms must be non-negative, got {interval_ms}")
        if deadband < 0:
            raise ValueError(f"deadband must be non-negative, got {deadband}")

        self.interval_ms = interval_ms
        self.deadband = deadband
        self._state = state or ControlState()
        self._state.volume = clamp_volume(self._state.volume)

    @property
    def state(self) -> ControlState:
        return self._state

    @property
    def volume(self) -> float:
        return self._state.volume

    def elapsed_ms(self, now: float) -> Optional[float]:
        """Milliseconds since the last accepted update, None if there was none."""
        if self._state.last_update is None:
            return None
        return (now - self._state.last_update) * 1000.0

    def throttle_open(self, now: float) -> bool:
        """True if an update at ``now`` is allowed by the rate limit."""
        elapsed = self.elapsed_ms(now)
        if elapsed is None:
            return True
        return elapsed > self.interval_ms

    def in_deadband(self, speed: float) -> bool:
        return abs(speed) <= self.deadband

    def integrate(self, speed: float, now: float) -> bool:
        """
        Apply ``speed`` to the volume if the deadband and throttle allow it.

        Returns:
            True if the update was accepted (timestamp recorded), even
            when clamping leaves the volume unchanged.
        """
        if self.in_deadband(speed):
            return False

        if not self.throttle_open(now):
            logger.debug("Throttled: %.1fms since last update", self.elapsed_ms(now))
            return False

        before = self._state.volume
        self.adjust_volume(speed)
        self._state.last_update = now
        logger.debug("Volume %.2f -> %.2f (speed %+.2f)", before, self._state.volume, speed)
        return True

    def adjust_volume(self, delta: float) -> float:
        """Add ``delta`` to the volume, clamped. Ignores the throttle."""
        self._state.volume = clamp_volume(self._state.volume + delta)
        return self._state.volume

    def set_volume(self, level: float) -> float:
        """Replace the volume, clamped. Ignores the throttle."""
        self._state.volume = clamp_volume(level)
        return self._state.volume

    def reset_timer(self):
        """Forget the last update time so the next update passes the throttle."""
        self._state.last_update = None
