"""Gesture-to-volume engine."""
from .engine import EngineConfig, GestureVolumeEngine
from .features import extract_features, normalize_angle
from .modes import ContinuousMode, DiscreteMode
from .speed import SpeedMapperConfig, map_speed
from .throttle import VolumeIntegrator
from .types import ControlState, Direction, GestureMode, GestureStatus, HandFeatures, TickResult

__all__ = [
    "EngineConfig",
    "GestureVolumeEngine",
    "extract_features",
    "normalize_angle",
    "ContinuousMode",
    "DiscreteMode",
    "SpeedMapperConfig",
    "map_speed",
    "VolumeIntegrator",
    "ControlState",
    "Direction",
    "GestureMode",
    "GestureStatus",
    "HandFeatures",
    "TickResult",
]
