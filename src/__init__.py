"""
Gesture Volume Control
=======================

Hand-gesture playback volume control.

Modules:
    - detection: hand landmark types and MediaPipe hand detection
    - gesture: feature extraction, speed mapping, throttled volume engine
    - control: system audio sink
    - utils: configuration, logging, debug overlay
"""

__version__ = "1.0.0"
