"""
Hand Landmark Types
====================

Landmark containers shared by the detector and the gesture engine.
Coordinates are in frame pixel space.
"""

import math
import logging
from dataclasses import dataclass
from enum import IntEnum
from typing import List, NamedTuple, Optional, Sequence, Tuple

import numpy as np

logger = logging.getLogger(__name__)

# Number of points reported per hand by the landmark model
NUM_LANDMARKS = 21


class LandmarkIndex(IntEnum):
    """Hand landmark indices following MediaPipe convention."""
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_MCP = 5
    INDEX_PIP = 6
    INDEX_DIP = 7
    INDEX_TIP = 8
    MIDDLE_MCP = 9
    MIDDLE_PIP = 10
    MIDDLE_DIP = 11
    MIDDLE_TIP = 12
    RING_MCP = 13
    RING_PIP = 14
    RING_DIP = 15
    RING_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20

    # The middle-finger MCP doubles as the palm reference point
    PALM = 9


class Landmark(NamedTuple):
    """A single landmark point in pixel coordinates."""
    x: float
    y: float
    z: float = 0.0

    def to_pixel(self) -> Tuple[int, int]:
        """Round to integer pixel coordinates for drawing."""
        return (int(round(self.x)), int(round(self.y)))


@dataclass
class HandLandmarks:
    """One detected hand: ordered landmarks plus model metadata."""
    landmarks: List[Landmark]
    handedness: str = "unknown"  # label reported by the model, display only
    confidence: float = 0.0

    def __len__(self) -> int:
        return len(self.landmarks)

    def get(self, index: LandmarkIndex) -> Landmark:
        """Get landmark by index."""
        return self.landmarks[index]

    def get_pixel(self, index: LandmarkIndex) -> Tuple[int, int]:
        """Get landmark as integer pixel coordinates."""
        return self.get(index).to_pixel()

    @property
    def is_complete(self) -> bool:
        """True if the set carries the full model contract."""
        return len(self.landmarks) >= NUM_LANDMARKS

    @property
    def bounding_box(self) -> Tuple[int, int, int, int]:
        """Get bounding box (x, y, width, height) in pixels."""
        xs = [lm.x for lm in self.landmarks]
        ys = [lm.y for lm in self.landmarks]
        min_x, min_y = int(min(xs)), int(min(ys))
        return (min_x, min_y, int(max(xs)) - min_x, int(max(ys)) - min_y)

    def to_numpy(self) -> np.ndarray:
        """Convert landmarks to numpy array of shape (N, 3)."""
        return np.array([[lm.x, lm.y, lm.z] for lm in self.landmarks], dtype=float)

    @classmethod
    def from_points(
        cls,
        points: Sequence[Sequence[float]],
        handedness: str = "unknown",
        confidence: float = 0.0,
    ) -> Optional["HandLandmarks"]:
        """
        Build a hand from raw ``[x, y]`` or ``[x, y, z]`` points.

        Returns None if any point has fewer than two coordinates or a
        non-finite value; such detections are treated as degenerate.
        """
        landmarks = []
        for i, point in enumerate(points):
            try:
                coords = [float(c) for c in point]
            except (TypeError, ValueError):
                logger.debug("Landmark %d is not numeric: %r", i, point)
                return None
            if len(coords) < 2 or not all(math.isfinite(c) for c in coords[:3]):
                logger.debug("Landmark %d is degenerate: %r", i, point)
                return None
            z = coords[2] if len(coords) > 2 else 0.0
            landmarks.append(Landmark(coords[0], coords[1], z))

        return cls(landmarks=landmarks, handedness=handedness, confidence=confidence)


def as_hand(detection) -> Optional[HandLandmarks]:
    """Coerce one detection (HandLandmarks or raw point sequence) to HandLandmarks."""
    if detection is None:
        return None
    if isinstance(detection, HandLandmarks):
        return detection
    if isinstance(detection, np.ndarray):
        if detection.ndim != 2:
            return None
        return HandLandmarks.from_points(detection.tolist())
    try:
        return HandLandmarks.from_points(detection)
    except TypeError:
        logger.debug("Unsupported detection type: %s", type(detection).__name__)
        return None
