"""System audio sink control."""
from .volume_controller import VolumeController, VolumeControllerConfig

__all__ = ["VolumeController", "VolumeControllerConfig"]
