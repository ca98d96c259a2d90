"""
Synthetic hand landmarks for tests.
"""

import math
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from detection.landmarks import HandLandmarks, Landmark, NUM_LANDMARKS

PALM = (320.0, 240.0)
FINGER_LENGTH = 100.0


def make_hand(palm=PALM, thumb=None, index=None, pinky=None, handedness="Right"):
    """
    Create a 21-point hand with the engine's key points placed explicitly.

    Unspecified key points default to: thumb tip straight right of the
    palm, index tip straight above, pinky tip left of the index tip
    (a "left hand" by the index/pinky heuristic).
    """
    px, py = palm
    thumb = thumb or (px + FINGER_LENGTH, py)
    index = index or (px, py - FINGER_LENGTH)
    pinky = pinky or (index[0] - 50.0, py - 60.0)

    points = [Landmark(px, py + 80.0) for _ in range(NUM_LANDMARKS)]
    points[4] = Landmark(*thumb)
    points[8] = Landmark(*index)
    points[9] = Landmark(px, py)
    points[20] = Landmark(*pinky)

    return HandLandmarks(landmarks=points, handedness=handedness, confidence=0.9)


def make_hand_with_angle(angle_degrees, right_hand=False, palm=PALM):
    """
    Create a hand whose index/thumb angle equals ``angle_degrees``.

    The thumb vector points along +x, so the index vector angle is the
    feature angle itself. Pinky placement selects the handedness guess.
    """
    px, py = palm
    rad = math.radians(angle_degrees)
    index = (px + FINGER_LENGTH * math.cos(rad), py + FINGER_LENGTH * math.sin(rad))
    pinky_x = index[0] + 50.0 if right_hand else index[0] - 50.0
    return make_hand(palm=palm, index=index, pinky=(pinky_x, py))


def make_pointing_hand(dx, palm=PALM):
    """Create a hand whose index tip sits ``dx`` pixels right of the palm."""
    px, py = palm
    return make_hand(palm=palm, index=(px + dx, py - 30.0))
