"""
Logging setup and volume event logging.
"""

import os
import time
import logging
import logging.handlers
from collections import deque


def setup_logging(level="INFO", log_file=None, max_size_mb=10, backup_count=3):
    """Configure console (and optional rotating file) logging."""
    console_format = "%(asctime)s  %(levelname)-5s  %(message)s"
    file_format = "%(asctime)s [%(levelname)-7s] %(name)-25s | %(message)s"
    date_format = "%H:%M:%S"

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers.clear()

    console = logging.StreamHandler()
    console.setLevel(root_logger.level)
    console.setFormatter(logging.Formatter(console_format, datefmt=date_format))
    root_logger.addHandler(console)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=max_size_mb * 1024 * 1024,
            backupCount=backup_count,
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(file_format, datefmt=date_format))
        root_logger.addHandler(file_handler)

    return root_logger


class VolumeEventLogger:
    """Records volume changes and hand status transitions."""

    def __init__(self, max_history=500):
        self.logger = logging.getLogger("volume_events")
        self._history = deque(maxlen=max_history)
        self._last_status = None

    def log_volume(self, volume, source="gesture"):
        """Log an applied volume level."""
        self._history.append({
            "timestamp": time.time(),
            "event": "volume",
            "volume": volume,
            "source": source,
        })
        self.logger.debug("Volume: %5.1f | Source: %s", volume, source)

    def log_status(self, status):
        """Log a status only when it differs from the previous one."""
        if status == self._last_status:
            return
        self._last_status = status
        self._history.append({
            "timestamp": time.time(),
            "event": "status",
            "status": status.value,
        })
        self.logger.info("Status: %s", status.prompt)

    def get_history(self, last_n=None):
        """Get recent events."""
        events = list(self._history)
        if last_n:
            return events[-last_n:]
        return events

    @property
    def total_volume_changes(self):
        return sum(1 for e in self._history if e["event"] == "volume")
