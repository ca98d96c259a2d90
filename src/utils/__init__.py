"""Configuration, logging and overlay utilities."""
from .config import load_config
from .logger import setup_logging, VolumeEventLogger

__all__ = ["load_config", "setup_logging", "VolumeEventLogger"]
