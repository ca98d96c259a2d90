"""
Gesture Volume Control - Demo Application
==========================================

Drives the gesture engine from a video source: each frame goes through
the MediaPipe hand detector and one ``process_tick`` call, and every
volume change is pushed to the system audio sink.
"""

import cv2
import logging
import argparse
import signal
import time
from dataclasses import dataclass
from typing import Optional

from control.volume_controller import VolumeController, VolumeControllerConfig
from detection.hand_detector import HandDetector, HandDetectorConfig
from gesture.engine import EngineConfig, GestureVolumeEngine
from utils.config import load_config
from utils.logger import VolumeEventLogger, setup_logging
from utils.visualization import Visualizer, VisualizerConfig

logger = logging.getLogger(__name__)

WINDOW_NAME = "Gesture Volume Control"


@dataclass
class AppConfig:
    """Application configuration container."""
    engine: EngineConfig
    mediapipe: HandDetectorConfig
    volume_control: VolumeControllerConfig
    visualization: VisualizerConfig
    source: object = 0
    mirror: bool = True


def create_app_config(config_dict: dict) -> AppConfig:
    """Create AppConfig from configuration dictionary."""
    camera = config_dict.get("camera", {})
    return AppConfig(
        engine=EngineConfig.from_dict(config_dict.get("engine", {})),
        mediapipe=HandDetectorConfig.from_dict(config_dict.get("mediapipe", {})),
        volume_control=VolumeControllerConfig.from_dict(config_dict.get("volume_control", {})),
        visualization=VisualizerConfig.from_dict(config_dict.get("visualization", {})),
        source=camera.get("source", 0),
        mirror=camera.get("mirror", True),
    )


class GestureVolumeApp:
    """
    Frame loop wiring detector, engine, audio sink and overlay.

    Keyboard:
        q/ESC - quit
        m     - toggle continuous/discrete mode
    """

    def __init__(self, config: AppConfig):
        self.config = config
        self.detector = HandDetector(config.mediapipe)
        self.engine = GestureVolumeEngine(config.engine)
        self.volume_controller = VolumeController(config.volume_control)
        self.visualizer = Visualizer(config.visualization)
        self.events = VolumeEventLogger()

        self.engine.add_callback(self.volume_controller.set_volume)
        self.engine.add_callback(self.events.log_volume)

        self._capture: Optional[cv2.VideoCapture] = None
        self._running = False
        self._fps = 0.0

    def start(self) -> bool:
        """Open the video source and the detector."""
        logger.info("Starting gesture volume control...")

        self._capture = cv2.VideoCapture(self.config.source)
        if not self._capture.isOpened():
            logger.error("Could not open video source: %r", self.config.source)
            return False

        if not self.detector.start():
            self._capture.release()
            return False

        # Push the starting level so the sink matches the engine
        self.volume_controller.set_volume(self.engine.volume)
        self._running = True
        return True

    def stop(self) -> None:
        """Release the video source, the detector and the window."""
        self._running = False
        if self._capture is not None:
            self._capture.release()
            self._capture = None
        self.detector.stop()
        cv2.destroyAllWindows()
        logger.info("Stopped after %d frames (%d volume changes)",
                    self.engine.tick_count, self.events.total_volume_changes)

    def run(self) -> None:
        """Run the main loop until quit or signal."""
        if not self.start():
            return

        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)

        try:
            self._main_loop()
        finally:
            self.stop()

    def _main_loop(self) -> None:
        last_frame_time = time.monotonic()

        while self._running:
            ok, frame = self._capture.read()
            if not ok:
                logger.info("Video source exhausted")
                break

            if self.config.mirror:
                frame = cv2.flip(frame, 1)

            now = time.monotonic()
            rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
            hands = self.detector.detect(rgb, int(now * 1000))
            result = self.engine.process_tick(hands, now)
            self.events.log_status(result.status)

            elapsed = now - last_frame_time
            last_frame_time = now
            if elapsed > 0:
                self._fps = 0.9 * self._fps + 0.1 * (1.0 / elapsed)

            self.visualizer.draw_hands(frame, hands[:1])
            self.visualizer.draw_result(frame, result)
            self.visualizer.draw_fps(frame, self._fps)
            cv2.imshow(WINDOW_NAME, frame)

            key = cv2.waitKey(1) & 0xFF
            if key == ord('q') or key == 27:
                self._running = False
            elif key == ord('m'):
                self.engine.toggle_mode()

    def _signal_handler(self, signum, frame) -> None:
        """Handle shutdown signals."""
        logger.info("Received signal %d, shutting down...", signum)
        self._running = False


def parse_source(value: str):
    """Device index if numeric, otherwise a file path or URL."""
    return int(value) if value.isdigit() else value


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Control playback volume with hand gestures",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Modes:
  continuous - rotate index finger relative to thumb (default)
  discrete   - point index finger left (up) or right (down)

Keyboard Controls:
  q/ESC     - Quit
  m         - Toggle continuous/discrete mode

Examples:
  gesture-volume --mode discrete
  gesture-volume --source clip.mp4 --debug
        """
    )
    parser.add_argument("--mode", "-m", choices=["continuous", "discrete"],
                        help="Gesture mode (overrides config)")
    parser.add_argument("--config", "-c", default=None,
                        help="Path to configuration file")
    parser.add_argument("--source", "-s", type=parse_source, default=None,
                        help="Camera index or video file (overrides config)")
    parser.add_argument("--log-file", default=None, help="Also log to this file")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    config_dict = load_config(args.config)
    log_config = config_dict.get("logging", {})
    setup_logging(
        level="DEBUG" if args.debug else log_config.get("level", "INFO"),
        log_file=args.log_file or log_config.get("file"),
    )

    if args.mode:
        config_dict["engine"]["mode"] = args.mode
    if args.source is not None:
        config_dict["camera"]["source"] = args.source

    app = GestureVolumeApp(create_app_config(config_dict))
    app.run()


if __name__ == "__main__":
    main()
