"""
Configuration loading.
Reads the YAML config, merges it over built-in defaults and validates
field types.
"""

import copy
import logging
from pathlib import Path
from typing import Optional, Union

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent.parent / "config" / "config.yaml"

DEFAULTS = {
    "engine": {
        "mode": "continuous",
        "initial_volume": 70,
        "deadband": 0.05,
        "continuous": {
            "max_angle": 90,
            "max_speed": 3,
            "throttle_ms": 50,
        },
        "discrete": {
            "threshold_px": 40,
            "step": 2,
            "throttle_ms": 300,
        },
    },
    "camera": {
        "source": 0,
        "mirror": True,
    },
    "mediapipe": {
        "max_num_hands": 1,
        "min_detection_confidence": 0.5,
        "min_tracking_confidence": 0.5,
    },
    "volume_control": {
        "enabled": True,
        "sink": "@DEFAULT_SINK@",
    },
    "visualization": {},
    "logging": {
        "level": "INFO",
        "file": None,
    },
}

# Schema: sections and their expected types
_CONFIG_SCHEMA = {
    "engine": {
        "mode": str,
        "initial_volume": float,
        "deadband": float,
        "continuous": dict,
        "discrete": dict,
    },
    "engine.continuous": {
        "max_angle": float,
        "max_speed": float,
        "throttle_ms": float,
    },
    "engine.discrete": {
        "threshold_px": float,
        "step": float,
        "throttle_ms": float,
    },
    "mediapipe": {
        "max_num_hands": int,
        "min_detection_confidence": float,
        "min_tracking_confidence": float,
    },
    "volume_control": {
        "enabled": bool,
        "sink": str,
    },
}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base dict."""
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def get_path(data: dict, key_path: str, default=None):
    """Get nested config value using dot notation: 'engine.continuous.max_angle'."""
    value = data
    for key in key_path.split("."):
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return default
    return value


def validate(data: dict) -> list:
    """Check field types against the schema. Returns warning strings."""
    warnings = []
    for section_name, fields in _CONFIG_SCHEMA.items():
        section = get_path(data, section_name)
        if section is None:
            warnings.append(f"Missing config section: '{section_name}'")
            continue
        if not isinstance(section, dict):
            warnings.append(f"Section '{section_name}' should be a dict, got {type(section).__name__}")
            continue
        for field_name, expected_type in fields.items():
            if field_name not in section:
                continue
            value = section[field_name]
            # Allow int where float is expected (bool is not a number here)
            if expected_type is float and isinstance(value, (int, float)) and not isinstance(value, bool):
                continue
            if not isinstance(value, expected_type):
                warnings.append(
                    f"{section_name}.{field_name}: expected {expected_type.__name__}, "
                    f"got {type(value).__name__} ({value!r})"
                )

    for w in warnings:
        logger.warning("Config validation: %s", w)
    return warnings


def load_config(config_path: Optional[Union[str, Path]] = None) -> dict:
    """
    Load the YAML config merged over DEFAULTS.

    A missing file falls back to the defaults; a malformed file raises
    yaml.YAMLError.
    """
    config_path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    try:
        with open(config_path, "r") as f:
            user_config = yaml.safe_load(f) or {}
        logger.info("Loaded config from %s", config_path)
    except FileNotFoundError:
        logger.warning("Config file not found: %s, using defaults", config_path)
        user_config = {}

    if not isinstance(user_config, dict):
        raise ValueError(f"Config root must be a mapping, got {type(user_config).__name__}")

    data = _deep_merge(copy.deepcopy(DEFAULTS), user_config)
    validate(data)
    return data
