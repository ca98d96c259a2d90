"""
Tests for the Speed Mapper
===========================
"""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from gesture.speed import MAX_SPEED, SpeedMapperConfig, map_speed, sign, speed_magnitude


class TestSpeedMagnitude:
    """Linear map with input-side saturation."""

    def test_half_range(self):
        assert speed_magnitude(45.0, SpeedMapperConfig()) == 1.5

    def test_zero_angle(self):
        assert speed_magnitude(0.0, SpeedMapperConfig()) == 0.0

    @pytest.mark.parametrize("angle", [90.0, 91.0, 135.0, 180.0, -90.0, -179.9])
    def test_saturates_at_max_speed(self, angle):
        assert speed_magnitude(angle, SpeedMapperConfig()) == MAX_SPEED

    def test_custom_range(self):
        config = SpeedMapperConfig(max_angle=60.0, max_speed=6.0)
        assert speed_magnitude(30.0, config) == pytest.approx(3.0)


class TestMapSpeed:
    """Signed speed with handedness correction."""

    def test_left_hand_keeps_angle_sign(self):
        assert map_speed(30.0, is_right_hand=False) == pytest.approx(1.0)
        assert map_speed(-30.0, is_right_hand=False) == pytest.approx(-1.0)

    def test_right_hand_reverses_angle_sign(self):
        assert map_speed(30.0, is_right_hand=True) == pytest.approx(-1.0)
        assert map_speed(-30.0, is_right_hand=True) == pytest.approx(1.0)

    def test_same_magnitude_for_both_hands(self):
        left = map_speed(72.0, is_right_hand=False)
        right = map_speed(72.0, is_right_hand=True)
        assert left == pytest.approx(-right)

    def test_saturated_speed_is_exact(self):
        assert abs(map_speed(120.0, is_right_hand=False)) == 3.0
        assert abs(map_speed(-150.0, is_right_hand=True)) == 3.0

    def test_zero_angle_is_zero_speed(self):
        assert map_speed(0.0, is_right_hand=False) == 0.0
        assert map_speed(0.0, is_right_hand=True) == 0.0

    def test_non_finite_angle_is_zero_speed(self):
        assert map_speed(float("nan"), is_right_hand=False) == 0.0


class TestSpeedMapperConfig:
    """Config validation."""

    def test_from_dict(self):
        config = SpeedMapperConfig.from_dict({"max_angle": 45, "max_speed": 2})
        assert config.max_angle == 45.0
        assert config.max_speed == 2.0

    def test_from_dict_defaults(self):
        config = SpeedMapperConfig.from_dict({})
        assert config.max_angle == 90.0
        assert config.max_speed == 3.0

    def test_non_positive_max_angle_rejected(self):
        with pytest.raises(ValueError):
            SpeedMapperConfig(max_angle=0.0)


def test_sign():
    assert sign(2.5) == 1.0
    assert sign(-0.1) == -1.0
    assert sign(0.0) == 0.0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
