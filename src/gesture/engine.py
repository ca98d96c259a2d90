"""
Gesture volume engine.

Per-frame pipeline that turns a hand detection into a bounded,
rate-limited volume level:

    detection -> extract_features -> active mode -> VolumeIntegrator

The caller owns the loop and the clock: it calls ``process_tick`` once
per available frame with the detection result and the current time in
seconds. An empty or degenerate detection leaves the volume untouched
and reports NO_HAND_DETECTED.

Calls are serialized by an internal lock, so a UI thread may use
``set_volume`` while the frame loop is running. Callbacks run outside
that lock, in change order; a notification overtaken by a newer change
is dropped, so listeners always end on the engine's current volume.
"""

import time
import logging
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional, Union

from detection.landmarks import as_hand
from .features import extract_features
from .modes import BaseMode, ContinuousMode, DiscreteMode
from .speed import MAX_ANGLE, MAX_SPEED, SpeedMapperConfig
from .throttle import DEFAULT_DEADBAND, VOLUME_MAX, VOLUME_MIN, VolumeIntegrator
from .types import ControlState, GestureMode, GestureStatus, TickResult

logger = logging.getLogger(__name__)

VolumeCallback = Callable[[float], None]


@dataclass
class EngineConfig:
    """Gesture engine configuration."""
    mode: GestureMode = GestureMode.CONTINUOUS
    initial_volume: float = 70.0
    deadband: float = DEFAULT_DEADBAND

    # Continuous mode
    max_angle: float = MAX_ANGLE
    max_speed: float = MAX_SPEED
    continuous_throttle_ms: float = 50.0

    # Discrete mode
    discrete_threshold_px: float = 40.0
    discrete_step: float = 2.0
    discrete_throttle_ms: float = 300.0

    def __post_init__(self):
        if isinstance(self.mode, str):
            self.mode = GestureMode.from_string(self.mode)
        if not VOLUME_MIN <= self.initial_volume <= VOLUME_MAX:
            raise ValueError(
                f"initial_volume must be within [{VOLUME_MIN:g}, {VOLUME_MAX:g}], "
                f"got {self.initial_volume}"
            )
        if self.discrete_step <= self.deadband:
            raise ValueError(
                f"discrete_step must exceed the deadband ({self.deadband:g}), "
                f"got {self.discrete_step}"
            )

    @classmethod
    def from_dict(cls, config: dict) -> "EngineConfig":
        """Create config from the ``engine`` section of the YAML config."""
        continuous = config.get("continuous") or {}
        discrete = config.get("discrete") or {}
        for name, section in (("continuous", continuous), ("discrete", discrete)):
            if not isinstance(section, dict):
                raise ValueError(
                    f"engine.{name} must be a mapping, got {type(section).__name__}"
                )
        return cls(
            mode=config.get("mode", "continuous"),
            initial_volume=float(config.get("initial_volume", 70.0)),
            deadband=float(config.get("deadband", DEFAULT_DEADBAND)),
            max_angle=float(continuous.get("max_angle", MAX_ANGLE)),
            max_speed=float(continuous.get("max_speed", MAX_SPEED)),
            continuous_throttle_ms=float(continuous.get("throttle_ms", 50.0)),
            discrete_threshold_px=float(discrete.get("threshold_px", 40.0)),
            discrete_step=float(discrete.get("step", 2.0)),
            discrete_throttle_ms=float(discrete.get("throttle_ms", 300.0)),
        )


class GestureVolumeEngine:
    """
    Stateful gesture-to-volume controller.

    Example:
        >>> engine = GestureVolumeEngine(EngineConfig())
        >>> engine.add_callback(volume_controller.set_volume)
        >>>
        >>> while running:
        ...     hands = detector.detect(frame.rgb)
        ...     result = engine.process_tick(hands, time.monotonic())
        ...     if not result.hand_detected:
        ...         show(result.status.prompt)
    """

    def __init__(self, config: Optional[EngineConfig] = None,
                 state: Optional[ControlState] = None):
        self.config = config or EngineConfig()

        self._modes = {
            GestureMode.CONTINUOUS: ContinuousMode(
                speed_config=SpeedMapperConfig(self.config.max_angle, self.config.max_speed),
                interval_ms=self.config.continuous_throttle_ms,
            ),
            GestureMode.DISCRETE: DiscreteMode(
                threshold_px=self.config.discrete_threshold_px,
                step=self.config.discrete_step,
                interval_ms=self.config.discrete_throttle_ms,
            ),
        }
        self._mode: BaseMode = self._modes[self.config.mode]

        self._integrator = VolumeIntegrator(
            interval_ms=self._mode.interval_ms,
            deadband=self.config.deadband,
            state=state or ControlState(volume=self.config.initial_volume),
        )

        self._callbacks: List[VolumeCallback] = []
        self._lock = threading.Lock()
        # Serializes delivery; taken only after _lock is released.
        self._notify_lock = threading.RLock()
        self._change_seq = 0
        self._status = GestureStatus.NO_HAND_DETECTED
        self._tick_count = 0

    # ------------------------------------------------------------------
    # Per-frame pipeline
    # ------------------------------------------------------------------

    def process_tick(self, detection, now: Optional[float] = None) -> TickResult:
        """
        Process one frame's detection result.

        Args:
            detection: Sequence of detections (HandLandmarks or raw point
                sequences); only the first is used. Empty or None means
                no hand.
            now: Current time in seconds on the caller's monotonic clock.
                Defaults to ``time.monotonic()``.

        Returns:
            TickResult with the status and the (possibly updated) volume
        """
        if now is None:
            now = time.monotonic()

        with self._lock:
            self._tick_count += 1
            features = extract_features(as_hand(self._first_detection(detection)))

            if features is None:
                self._mode.reset()
                result = TickResult(
                    status=GestureStatus.NO_HAND_DETECTED,
                    volume=self._integrator.volume,
                    mode=self._mode.mode,
                    direction=self._mode.direction,
                )
            else:
                before = self._integrator.volume
                step = self._mode.update(features, self._integrator, now)
                result = TickResult(
                    status=GestureStatus.HAND_DETECTED,
                    volume=self._integrator.volume,
                    mode=self._mode.mode,
                    volume_changed=self._integrator.volume != before,
                    speed=step.speed,
                    features=features,
                    direction=step.direction,
                )
                if result.volume_changed:
                    self._change_seq += 1
                    seq = self._change_seq

            if result.status is not self._status:
                logger.debug("Status %s -> %s", self._status.value, result.status.value)
                self._status = result.status

        if result.volume_changed:
            self._notify(result.volume, seq)

        return result

    @staticmethod
    def _first_detection(detection):
        if detection is None:
            return None
        try:
            return next(iter(detection), None)
        except TypeError:
            logger.debug("Detection result is not iterable: %s", type(detection).__name__)
            return None

    # ------------------------------------------------------------------
    # Mode selection
    # ------------------------------------------------------------------

    def set_mode(self, mode: Union[GestureMode, str]) -> None:
        """Switch the active gesture mode. The volume is kept."""
        if isinstance(mode, str):
            mode = GestureMode.from_string(mode)

        with self._lock:
            if mode is self._mode.mode:
                return
            self._mode.reset()
            self._mode = self._modes[mode]
            self._mode.reset()
            self._integrator.interval_ms = self._mode.interval_ms
            self._integrator.reset_timer()

        logger.info("Gesture mode set to: %s", mode.value)

    def toggle_mode(self) -> GestureMode:
        """Switch between continuous and discrete mode."""
        if self.mode is GestureMode.CONTINUOUS:
            self.set_mode(GestureMode.DISCRETE)
        else:
            self.set_mode(GestureMode.CONTINUOUS)
        return self.mode

    # ------------------------------------------------------------------
    # Manual control
    # ------------------------------------------------------------------

    def set_volume(self, level: float) -> float:
        """Set the volume directly (e.g. from a slider), clamped to [0, 100]."""
        with self._lock:
            before = self._integrator.volume
            volume = self._integrator.set_volume(level)
            changed = volume != before
            if changed:
                self._change_seq += 1
                seq = self._change_seq

        if changed:
            self._notify(volume, seq)
        return volume

    # ------------------------------------------------------------------
    # Callbacks
    # ------------------------------------------------------------------

    def add_callback(self, callback: VolumeCallback) -> None:
        """Register ``callback(volume)`` to run after every volume change."""
        with self._lock:
            self._callbacks.append(callback)

    def remove_callback(self, callback: VolumeCallback) -> None:
        """Remove a previously added callback."""
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    def _notify(self, volume: float, seq: int) -> None:
        """Deliver a volume change unless a newer change has been recorded."""
        with self._notify_lock:
            if seq != self._change_seq:
                logger.debug("Dropping stale volume notification: %.1f", volume)
                return
            with self._lock:
                callbacks = list(self._callbacks)
            for callback in callbacks:
                if seq != self._change_seq:
                    break
                try:
                    callback(volume)
                except Exception as e:
                    logger.error("Error in volume callback %s: %s",
                                 getattr(callback, "__name__", callback), e)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> ControlState:
        return self._integrator.state

    @property
    def volume(self) -> float:
        return self._integrator.volume

    @property
    def mode(self) -> GestureMode:
        return self._mode.mode

    @property
    def status(self) -> GestureStatus:
        return self._status

    @property
    def direction(self):
        return self._mode.direction

    @property
    def tick_count(self) -> int:
        return self._tick_count
