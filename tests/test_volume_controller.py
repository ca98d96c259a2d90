"""
Tests for Volume Controller
============================
"""

import subprocess
import pytest
import sys
from pathlib import Path
from unittest.mock import Mock, patch, MagicMock

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from control.volume_controller import VolumeController, VolumeControllerConfig


class TestVolumeControllerConfig:
    """Test suite for VolumeControllerConfig."""

    def test_default_values(self):
        config = VolumeControllerConfig()

        assert config.enabled is True
        assert config.sink == "@DEFAULT_SINK@"
        assert config.command == "pactl"

    def test_from_dict_partial(self):
        config = VolumeControllerConfig.from_dict({"sink": "alsa_output.usb"})

        assert config.sink == "alsa_output.usb"
        assert config.enabled is True


class TestSimulatedSink:
    """Behaviour when pactl is not installed."""

    @pytest.fixture
    def controller(self):
        with patch("control.volume_controller.shutil.which", return_value=None):
            yield VolumeController()

    def test_not_available(self, controller):
        assert controller.is_available is False

    def test_set_volume_succeeds(self, controller):
        with patch("control.volume_controller.subprocess.run") as run:
            assert controller.set_volume(42.4) is True
            run.assert_not_called()
        assert controller.applied_level == 42

    def test_level_is_clamped(self, controller):
        controller.set_volume(130.0)
        assert controller.applied_level == 100

        controller.set_volume(-4.0)
        assert controller.applied_level == 0


class TestPactlSink:
    """Behaviour with pactl present."""

    @pytest.fixture
    def mock_run(self):
        with patch("control.volume_controller.shutil.which", return_value="/usr/bin/pactl"), \
                patch("control.volume_controller.subprocess.run") as run:
            run.return_value = MagicMock(returncode=0, stderr="")
            yield run

    def test_command_line(self, mock_run):
        controller = VolumeController()

        assert controller.set_volume(70.0) is True

        args = mock_run.call_args[0][0]
        assert args == ["pactl", "set-sink-volume", "@DEFAULT_SINK@", "70%"]

    def test_repeated_level_is_noop(self, mock_run):
        controller = VolumeController()

        controller.set_volume(55.2)
        controller.set_volume(54.8)  # rounds to the same level

        assert mock_run.call_count == 1

    def test_command_failure(self, mock_run):
        mock_run.return_value = MagicMock(returncode=1, stderr="No such entity")
        controller = VolumeController()

        assert controller.set_volume(30.0) is False
        assert controller.applied_level is None

    def test_failure_is_retried_next_call(self, mock_run):
        mock_run.return_value = MagicMock(returncode=1, stderr="busy")
        controller = VolumeController()
        controller.set_volume(30.0)

        mock_run.return_value = MagicMock(returncode=0, stderr="")
        assert controller.set_volume(30.0) is True
        assert mock_run.call_count == 2

    def test_timeout(self, mock_run):
        mock_run.side_effect = subprocess.TimeoutExpired(cmd="pactl", timeout=2.0)
        controller = VolumeController()

        assert controller.set_volume(30.0) is False

    def test_disabled(self, mock_run):
        controller = VolumeController(VolumeControllerConfig(enabled=False))

        assert controller.set_volume(30.0) is False
        mock_run.assert_not_called()
        assert controller.is_available is False

    def test_callbacks(self, mock_run):
        controller = VolumeController()
        callback = Mock()
        controller.add_callback(callback)

        controller.set_volume(64.0)

        callback.assert_called_once_with(64, True)

    def test_failing_callback_is_isolated(self, mock_run):
        controller = VolumeController()
        controller.add_callback(Mock(side_effect=ValueError("boom")))

        assert controller.set_volume(64.0) is True


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
