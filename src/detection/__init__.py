"""Hand landmark types and the MediaPipe hand detector."""
from .landmarks import HandLandmarks, Landmark, LandmarkIndex, NUM_LANDMARKS, as_hand

__all__ = ["HandLandmarks", "Landmark", "LandmarkIndex", "NUM_LANDMARKS", "as_hand"]
