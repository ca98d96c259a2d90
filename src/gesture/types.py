"""
Shared domain types for the gesture volume engine.

Centralizes enums and data containers used by the extractor, the
gesture modes and the engine so they can import each other without
cycles.
"""

from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple, Optional


# =============================================================================
# Enums
# =============================================================================

class GestureStatus(Enum):
    """Per-tick status reported to the UI. Carries no control semantics."""
    HAND_DETECTED = "hand_detected"
    NO_HAND_DETECTED = "no_hand_detected"

    @property
    def prompt(self) -> str:
        """Short text the caller can render for this status."""
        return _STATUS_PROMPTS[self]


_STATUS_PROMPTS = {
    GestureStatus.HAND_DETECTED: "Hand detected",
    GestureStatus.NO_HAND_DETECTED: "Show your hand",
}


class GestureMode(Enum):
    """Selectable control policy over the shared feature extractor."""
    CONTINUOUS = "continuous"
    DISCRETE = "discrete"

    @classmethod
    def from_string(cls, name: str) -> "GestureMode":
        """Convert a mode name (case-insensitive) to GestureMode."""
        try:
            return cls(name.lower())
        except ValueError:
            raise ValueError(
                f"Unknown gesture mode {name!r}, expected one of "
                f"{[m.value for m in cls]}"
            ) from None


class Direction(Enum):
    """Index-finger direction bucket used by the discrete mode."""
    EAST = "EAST"
    WEST = "WEST"
    CENTER = "CENTER"


# =============================================================================
# Data Containers
# =============================================================================

class Point2D(NamedTuple):
    """A position in frame pixel space."""
    x: float
    y: float

    def __sub__(self, other: "Point2D") -> "Point2D":
        return Point2D(self.x - other.x, self.y - other.y)


class HandFeatures(NamedTuple):
    """Geometric features extracted from one hand."""
    angle_degrees: float  # (-180, 180]
    is_right_hand: bool   # heuristic, see features.is_right_hand
    index_dx: float       # index tip x minus palm x, pixels


@dataclass
class ControlState:
    """Volume and the time of the last accepted update.

    ``last_update`` is None until the first update is accepted.
    """
    volume: float = 70.0
    last_update: Optional[float] = None


@dataclass
class TickResult:
    """Outcome of one processed frame."""
    status: GestureStatus
    volume: float
    mode: GestureMode
    volume_changed: bool = False
    speed: float = 0.0
    features: Optional[HandFeatures] = None
    direction: Optional[Direction] = None

    @property
    def hand_detected(self) -> bool:
        return self.status is GestureStatus.HAND_DETECTED

    def __repr__(self):
        return (f"TickResult({self.status.value}, volume={self.volume:.1f}, "
                f"changed={self.volume_changed})")
