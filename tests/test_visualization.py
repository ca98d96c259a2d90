"""
Tests for Visualization Overlay
================================
"""

import pytest
import numpy as np
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from detection.landmarks import HandLandmarks
from gesture.engine import EngineConfig, GestureVolumeEngine
from utils.visualization import Visualizer, VisualizerConfig

from helpers import make_hand, make_pointing_hand


@pytest.fixture
def frame():
    return np.zeros((480, 640, 3), dtype=np.uint8)


class TestVisualizerConfig:

    def test_from_dict(self):
        config = VisualizerConfig.from_dict({
            "show_volume_bar": False,
            "colors": {"text": [1, 2, 3]},
        })

        assert config.show_volume_bar is False
        assert config.text_color == (1, 2, 3)


class TestVisualizer:
    """Drawing on blank frames."""

    def test_draw_hand(self, frame):
        Visualizer().draw_hands(frame, [make_hand()])
        assert frame.any()

    def test_incomplete_hand_is_skipped(self, frame):
        hand = make_hand()
        Visualizer().draw_hands(frame, [HandLandmarks(landmarks=hand.landmarks[:5])])
        assert not frame.any()

    def test_draw_no_hand_result(self, frame):
        result = GestureVolumeEngine().process_tick([], now=1.0)
        Visualizer().draw_result(frame, result)
        assert frame.any()

    def test_draw_discrete_result(self, frame):
        engine = GestureVolumeEngine(EngineConfig(mode="discrete"))
        result = engine.process_tick([make_pointing_hand(60.0)], now=1.0)

        Visualizer().draw_result(frame, result)

        assert frame.any()

    def test_everything_disabled_draws_nothing(self, frame):
        config = VisualizerConfig(show_status=False, show_volume_bar=False, show_fps=False)
        viz = Visualizer(config)
        result = GestureVolumeEngine().process_tick([], now=1.0)

        viz.draw_result(frame, result)
        viz.draw_fps(frame, 30.0)

        assert not frame.any()

    def test_volume_bar_fill_tracks_volume(self):
        viz = Visualizer()
        low = np.zeros((480, 640, 3), dtype=np.uint8)
        high = np.zeros((480, 640, 3), dtype=np.uint8)

        viz.draw_volume_bar(low, 10.0)
        viz.draw_volume_bar(high, 90.0)

        assert np.count_nonzero(high) > np.count_nonzero(low)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
