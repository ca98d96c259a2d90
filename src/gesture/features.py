"""
Feature Extractor
==================

Turns one hand's landmarks into the features the gesture modes consume:
the signed angle between the palm->index-tip and palm->thumb-tip
vectors, a handedness guess, and the index tip's horizontal offset from
the palm.
"""

import math
import logging
from typing import Optional

from detection.landmarks import HandLandmarks, LandmarkIndex, NUM_LANDMARKS
from .types import HandFeatures, Point2D

logger = logging.getLogger(__name__)


def normalize_angle(degrees: float) -> float:
    """Wrap a raw angle difference into (-180, 180].

    The raw difference of two atan2 values lies in [-360, 360], so a
    single correction is enough.
    """
    if degrees > 180:
        degrees -= 360
    if degrees <= -180:
        degrees += 360
    return degrees


def vector_angle(v_from: Point2D, v_to: Point2D) -> float:
    """Signed angle in degrees from ``v_to`` to ``v_from``, normalized.

    A zero-length vector has atan2 == 0, so a fingertip sitting on the
    palm reads as no rotation.
    """
    raw = math.atan2(v_from.y, v_from.x) - math.atan2(v_to.y, v_to.x)
    return normalize_angle(math.degrees(raw))


def is_right_hand(index_tip: Point2D, pinky_tip: Point2D) -> bool:
    """Guess handedness from the index tip lying left of the pinky tip.

    This is an orientation heuristic, not a left/right classifier: the
    answer flips when the hand is turned around or shown back-first.
    """
    return (index_tip.x - pinky_tip.x) < 0


def _point(hand: HandLandmarks, index: LandmarkIndex) -> Point2D:
    lm = hand.get(index)
    return Point2D(lm.x, lm.y)


def extract_features(hand: Optional[HandLandmarks]) -> Optional[HandFeatures]:
    """
    Extract HandFeatures from a landmark set.

    Returns:
        HandFeatures, or None if the set is degenerate (too short or
        missing coordinates). Never raises for malformed input.
    """
    if hand is None or len(hand) < NUM_LANDMARKS:
        logger.debug("Degenerate landmark set: %s points",
                     None if hand is None else len(hand))
        return None

    try:
        palm = _point(hand, LandmarkIndex.PALM)
        thumb_tip = _point(hand, LandmarkIndex.THUMB_TIP)
        index_tip = _point(hand, LandmarkIndex.INDEX_TIP)
        pinky_tip = _point(hand, LandmarkIndex.PINKY_TIP)
    except (IndexError, AttributeError, TypeError) as e:
        logger.debug("Landmark set missing required points: %s", e)
        return None

    angle = vector_angle(index_tip - palm, thumb_tip - palm)

    return HandFeatures(
        angle_degrees=angle,
        is_right_hand=is_right_hand(index_tip, pinky_tip),
        index_dx=index_tip.x - palm.x,
    )
