"""
Visualization Module
=====================

Debug overlay for the demo runner: hand skeleton, status prompt,
direction and a volume bar.
"""

import cv2
import numpy as np
from typing import Optional, Tuple
from dataclasses import dataclass

from detection.landmarks import HandLandmarks, LandmarkIndex
from gesture.types import TickResult


@dataclass
class VisualizerConfig:
    """Visualization settings."""
    show_landmarks: bool = True
    show_connections: bool = True
    show_status: bool = True
    show_volume_bar: bool = True
    show_fps: bool = True

    # Colors (BGR format)
    landmark_color: Tuple[int, int, int] = (0, 255, 0)
    connection_color: Tuple[int, int, int] = (255, 255, 255)
    text_color: Tuple[int, int, int] = (0, 255, 255)
    bar_color: Tuple[int, int, int] = (0, 255, 0)
    warning_color: Tuple[int, int, int] = (0, 0, 255)

    font_scale: float = 0.7
    font_thickness: int = 2

    @classmethod
    def from_dict(cls, config: dict) -> "VisualizerConfig":
        """Create config from dictionary."""
        colors = config.get("colors", {})
        return cls(
            show_landmarks=config.get("show_landmarks", True),
            show_connections=config.get("show_connections", True),
            show_status=config.get("show_status", True),
            show_volume_bar=config.get("show_volume_bar", True),
            show_fps=config.get("show_fps", True),
            landmark_color=tuple(colors.get("landmarks", [0, 255, 0])),
            connection_color=tuple(colors.get("connections", [255, 255, 255])),
            text_color=tuple(colors.get("text", [0, 255, 255])),
            bar_color=tuple(colors.get("volume_bar", [0, 255, 0])),
            font_scale=config.get("font_scale", 0.7),
            font_thickness=config.get("font_thickness", 2),
        )


class Visualizer:
    """
    Overlay renderer for gesture engine output.

    Example:
        >>> viz = Visualizer(VisualizerConfig())
        >>> result = engine.process_tick(hands, now)
        >>> viz.draw_hands(frame, hands)
        >>> viz.draw_result(frame, result)
    """

    HAND_CONNECTIONS = [
        (0, 1), (1, 2), (2, 3), (3, 4),          # Thumb
        (0, 5), (5, 6), (6, 7), (7, 8),          # Index
        (9, 10), (10, 11), (11, 12),             # Middle
        (13, 14), (14, 15), (15, 16),            # Ring
        (0, 17), (17, 18), (18, 19), (19, 20),   # Pinky
        (5, 9), (9, 13), (13, 17),               # Palm
    ]

    # Landmarks the engine reads
    KEY_POINTS = (
        LandmarkIndex.THUMB_TIP,
        LandmarkIndex.INDEX_TIP,
        LandmarkIndex.PALM,
        LandmarkIndex.PINKY_TIP,
    )

    def __init__(self, config: Optional[VisualizerConfig] = None):
        self.config = config or VisualizerConfig()
        self._font = cv2.FONT_HERSHEY_SIMPLEX

    def draw_hands(self, image: np.ndarray, hands) -> np.ndarray:
        """Draw every detected hand that carries a full landmark set."""
        for hand in hands:
            if hand.is_complete:
                self.draw_hand(image, hand)
        return image

    def draw_hand(self, image: np.ndarray, hand: HandLandmarks) -> np.ndarray:
        """Draw one hand's skeleton, highlighting the engine's key points."""
        if self.config.show_connections:
            for start_idx, end_idx in self.HAND_CONNECTIONS:
                cv2.line(image, hand.get_pixel(LandmarkIndex(start_idx)),
                         hand.get_pixel(LandmarkIndex(end_idx)),
                         self.config.connection_color, 2)

        if self.config.show_landmarks:
            for i, lm in enumerate(hand.landmarks):
                if i in self.KEY_POINTS:
                    cv2.circle(image, lm.to_pixel(), 8, (0, 0, 255), -1)
                else:
                    cv2.circle(image, lm.to_pixel(), 4, self.config.landmark_color, -1)

            # Palm -> index / thumb vectors used for the angle
            palm = hand.get_pixel(LandmarkIndex.PALM)
            cv2.line(image, palm, hand.get_pixel(LandmarkIndex.INDEX_TIP), (255, 0, 255), 2)
            cv2.line(image, palm, hand.get_pixel(LandmarkIndex.THUMB_TIP), (255, 0, 255), 2)

        return image

    def draw_result(self, image: np.ndarray, result: TickResult) -> np.ndarray:
        """Draw status prompt, mode/direction line and the volume bar."""
        height = image.shape[0]

        if self.config.show_status:
            color = self.config.text_color if result.hand_detected else self.config.warning_color
            cv2.putText(image, result.status.prompt, (20, height - 60),
                        self._font, self.config.font_scale, color, self.config.font_thickness)

            detail = f"Mode: {result.mode.value}"
            if result.direction is not None:
                detail += f"  Direction: {result.direction.value}"
            elif result.features is not None:
                detail += f"  Angle: {result.features.angle_degrees:+.0f}"
            cv2.putText(image, detail, (20, height - 30),
                        self._font, 0.5, self.config.text_color, 1)

        if self.config.show_volume_bar:
            self.draw_volume_bar(image, result.volume)

        return image

    def draw_volume_bar(self, image: np.ndarray, volume: float) -> np.ndarray:
        """Vertical volume bar on the right edge of the frame."""
        height, width = image.shape[:2]
        x1, x2 = width - 60, width - 25
        top, bottom = 80, max(90, height - 100)

        cv2.rectangle(image, (x1, top), (x2, bottom), self.config.bar_color, 2)
        level = int(np.interp(volume, [0, 100], [bottom, top]))
        cv2.rectangle(image, (x1, level), (x2, bottom), self.config.bar_color, cv2.FILLED)
        cv2.putText(image, f"{int(round(volume))}%", (x1 - 10, bottom + 30),
                    self._font, 0.6, self.config.bar_color, 2)
        return image

    def draw_fps(self, image: np.ndarray, fps: float) -> np.ndarray:
        """FPS counter in the top-left corner."""
        if self.config.show_fps:
            color = self.config.landmark_color if fps >= 25 else self.config.warning_color
            cv2.putText(image, f"FPS: {fps:.1f}", (20, 30),
                        self._font, self.config.font_scale, color, self.config.font_thickness)
        return image
