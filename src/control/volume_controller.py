"""
Volume Controller Module
=========================

Applies the engine's volume level to the system audio sink using
``pactl`` (PulseAudio / PipeWire). Falls back to a simulated sink
when the tool is not installed.
"""

import subprocess
import logging
import shutil
from dataclasses import dataclass
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class VolumeControllerConfig:
    """Volume controller configuration."""
    enabled: bool = True
    sink: str = "@DEFAULT_SINK@"
    command: str = "pactl"
    timeout: float = 2.0

    @classmethod
    def from_dict(cls, config: dict) -> "VolumeControllerConfig":
        """Create config from dictionary."""
        return cls(
            enabled=config.get("enabled", True),
            sink=config.get("sink", "@DEFAULT_SINK@"),
            command=config.get("command", "pactl"),
            timeout=config.get("timeout", 2.0),
        )


class VolumeController:
    """
    System volume sink.

    Accepts a level in [0, 100]. Setting the same (rounded) level twice
    is a no-op, so the engine can call it on every change.

    Example:
        >>> controller = VolumeController()
        >>> engine.add_callback(controller.set_volume)
    """

    def __init__(self, config: Optional[VolumeControllerConfig] = None):
        self.config = config or VolumeControllerConfig()
        self._applied_level: Optional[int] = None
        self._callbacks: List[Callable[[int, bool], None]] = []

        self._tool_available = self._check_tool()
        if not self._tool_available:
            logger.warning("%s not found. Volume control will be simulated.", self.config.command)

    def _check_tool(self) -> bool:
        """Check if the volume command is installed."""
        return shutil.which(self.config.command) is not None

    def set_volume(self, level: float) -> bool:
        """
        Apply an absolute volume level.

        Args:
            level: Volume in [0, 100]; values outside are clamped

        Returns:
            True if the sink holds the requested level afterwards
        """
        if not self.config.enabled:
            logger.debug("Volume control disabled, ignoring level: %s", level)
            return False

        target = int(round(max(0.0, min(100.0, level))))
        if target == self._applied_level:
            return True

        success = self._send_level(target)
        if success:
            self._applied_level = target

        for callback in self._callbacks:
            try:
                callback(target, success)
            except Exception as e:
                logger.error("Error in volume callback: %s", e)

        logger.debug("Set volume: %d%% (success=%s)", target, success)
        return success

    def _send_level(self, level: int) -> bool:
        """Run ``pactl set-sink-volume <sink> <level>%``."""
        if not self._tool_available:
            logger.debug("[SIMULATED] Volume: %d%%", level)
            return True

        try:
            result = subprocess.run(
                [self.config.command, "set-sink-volume", self.config.sink, f"{level}%"],
                capture_output=True,
                text=True,
                timeout=self.config.timeout,
            )
        except subprocess.TimeoutExpired:
            logger.error("%s command timed out", self.config.command)
            return False
        except OSError as e:
            logger.error("Error setting volume: %s", e)
            return False

        if result.returncode != 0:
            logger.error("%s error: %s", self.config.command, result.stderr.strip())
            return False

        return True

    def add_callback(self, callback: Callable[[int, bool], None]) -> None:
        """Add callback(level, success) notified after each applied change."""
        self._callbacks.append(callback)

    def remove_callback(self, callback: Callable[[int, bool], None]) -> None:
        """Remove a previously added callback."""
        if callback in self._callbacks:
            self._callbacks.remove(callback)

    @property
    def applied_level(self) -> Optional[int]:
        """Last level successfully applied, None before the first."""
        return self._applied_level

    @property
    def is_available(self) -> bool:
        """Check if real volume control is available."""
        return self._tool_available and self.config.enabled
