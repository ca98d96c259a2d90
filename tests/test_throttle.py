"""
Tests for the Rate Limiter / Integrator
========================================
"""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from gesture.throttle import VolumeIntegrator, clamp_volume
from gesture.types import ControlState


@pytest.fixture
def integrator():
    """Integrator at volume 50 with the continuous-mode defaults."""
    return VolumeIntegrator(interval_ms=50.0, deadband=0.05,
                            state=ControlState(volume=50.0))


class TestDeadband:
    """Speeds at or under the deadband are ignored."""

    def test_boundary_is_ignored(self, integrator):
        assert integrator.integrate(0.05, now=1.0) is False
        assert integrator.volume == 50.0
        assert integrator.state.last_update is None

    def test_negative_boundary_is_ignored(self, integrator):
        assert integrator.integrate(-0.05, now=1.0) is False
        assert integrator.volume == 50.0

    def test_just_above_is_applied(self, integrator):
        assert integrator.integrate(0.06, now=1.0) is True
        assert integrator.volume == pytest.approx(50.06)
        assert integrator.state.last_update == 1.0


class TestThrottle:
    """Minimum gap between accepted updates."""

    def test_first_update_always_passes(self, integrator):
        assert integrator.integrate(1.0, now=0.0) is True

    def test_ticks_10ms_apart(self, integrator):
        assert integrator.integrate(1.0, now=1.000) is True
        assert integrator.integrate(1.0, now=1.010) is False
        assert integrator.volume == pytest.approx(51.0)

    def test_ticks_60ms_apart(self, integrator):
        assert integrator.integrate(1.0, now=1.000) is True
        assert integrator.integrate(1.0, now=1.060) is True
        assert integrator.volume == pytest.approx(52.0)

    def test_throttled_tick_keeps_timestamp(self, integrator):
        integrator.integrate(1.0, now=1.000)
        integrator.integrate(1.0, now=1.030)
        # 55ms after the accepted update, not after the throttled one
        assert integrator.integrate(1.0, now=1.055) is True

    def test_clock_going_backwards_suppresses(self, integrator):
        integrator.integrate(1.0, now=5.0)
        assert integrator.integrate(1.0, now=4.0) is False
        assert integrator.volume == pytest.approx(51.0)
        assert integrator.state.last_update == 5.0

    def test_deadband_does_not_touch_timestamp(self, integrator):
        integrator.integrate(1.0, now=1.0)
        integrator.integrate(0.01, now=2.0)
        assert integrator.state.last_update == 1.0

    def test_reset_timer(self, integrator):
        integrator.integrate(1.0, now=1.0)
        integrator.reset_timer()
        assert integrator.integrate(1.0, now=1.001) is True


class TestClamping:
    """Volume stays within [0, 100]."""

    def test_saturates_at_100(self):
        integrator = VolumeIntegrator(state=ControlState(volume=99.0))
        for i in range(5):
            integrator.integrate(3.0, now=i * 0.1)
            assert integrator.volume <= 100.0
        assert integrator.volume == 100.0

    def test_saturates_at_0(self):
        integrator = VolumeIntegrator(state=ControlState(volume=1.0))
        for i in range(5):
            integrator.integrate(-3.0, now=i * 0.1)
            assert integrator.volume >= 0.0
        assert integrator.volume == 0.0

    def test_initial_state_is_clamped(self):
        integrator = VolumeIntegrator(state=ControlState(volume=140.0))
        assert integrator.volume == 100.0

    def test_set_and_adjust(self, integrator):
        assert integrator.set_volume(-5.0) == 0.0
        assert integrator.adjust_volume(12.5) == 12.5
        assert integrator.adjust_volume(500.0) == 100.0

    def test_clamp_volume(self):
        assert clamp_volume(-1.0) == 0.0
        assert clamp_volume(42.0) == 42.0
        assert clamp_volume(101.0) == 100.0


class TestValidation:

    def test_negative_interval_rejected(self):
        with pytest.raises(ValueError):
            VolumeIntegrator(interval_ms=-1.0)

    def test_negative_deadband_rejected(self):
        with pytest.raises(ValueError):
            VolumeIntegrator(deadband=-0.1)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
