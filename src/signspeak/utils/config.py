"""
Configuration loading.
Reads the YAML config, merges it over built-in defaults and warns about
mistyped fields without refusing to start.
"""

import os
import copy
import logging
from typing import List, Optional

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.join("config", "config.yaml")

DEFAULT_CONFIG = {
    "camera": {
        "device_id": 0,
        "width": 640,
        "height": 480,
        "flip_horizontal": True,
    },
    "mediapipe": {
        "max_num_hands": 2,
        "min_detection_confidence": 0.5,
        "min_tracking_confidence": 0.5,
    },
    "recognition": {
        "classifier": {
            "curl_tolerance": 0.02,
            "ok_sign_distance": 0.05,
        },
        "buffer": {
            "history_size": 10,
            "window_size": 5,
            "min_votes": 4,
        },
        "share_history": False,
    },
    "translation": {
        "separator": " ",
        "history_limit": 10,
        "sign_map": {},
    },
    "speech": {
        "rate": 180,
        "volume": 1.0,
    },
    "visualization": {},
    "logging": {
        "level": "INFO",
        "file": None,
    },
}

# Expected types of fields that break the pipeline when mistyped
_CONFIG_SCHEMA = {
    "camera": {
        "device_id": int,
        "width": int,
        "height": int,
    },
    "mediapipe": {
        "max_num_hands": int,
        "min_detection_confidence": float,
        "min_tracking_confidence": float,
    },
    "recognition": {
        "classifier": {
            "curl_tolerance": float,
            "ok_sign_distance": float,
            "debug": bool,
        },
        "buffer": {
            "history_size": int,
            "window_size": int,
            "min_votes": int,
        },
        "share_history": bool,
    },
    "translation": {
        "separator": str,
        "history_limit": int,
        "sign_map": dict,
    },
    "speech": {
        "rate": int,
        "volume": float,
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


def _validate_section(name: str, section, fields: dict, warnings: List[str]) -> None:
    if not isinstance(section, dict):
        warnings.append(f"Section '{name}' should be a dict, got {type(section).__name__}")
        return
    for field_name, expected_type in fields.items():
        if field_name not in section or section[field_name] is None:
            continue
        value = section[field_name]
        path = f"{name}.{field_name}"
        if isinstance(expected_type, dict):
            _validate_section(path, value, expected_type, warnings)
            continue
        # Allow int where float is expected
        if expected_type is float and isinstance(value, (int, float)) and not isinstance(value, bool):
            continue
        if expected_type is int and isinstance(value, bool):
            warnings.append(f"{path}: expected int, got bool ({value!r})")
            continue
        if not isinstance(value, expected_type):
            warnings.append(
                f"{path}: expected {expected_type.__name__}, "
                f"got {type(value).__name__} ({value!r})"
            )


def validate_config(data: dict) -> List[str]:
    """Check config fields against the schema and return warnings."""
    warnings = []
    for section_name, fields in _CONFIG_SCHEMA.items():
        section = data.get(section_name)
        if section is None:
            continue
        _validate_section(section_name, section, fields, warnings)
    return warnings


def load_config(config_path: Optional[str] = None) -> dict:
    """
    Load configuration from YAML, falling back to defaults.

    Args:
        config_path: YAML file; ``config/config.yaml`` when omitted

    Returns:
        Defaults deep-merged with the file's contents
    """
    config_path = config_path or DEFAULT_CONFIG_PATH
    data = {}

    try:
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
        logger.info("Loaded config from %s", config_path)
    except FileNotFoundError:
        logger.warning("Config file not found: %s, using defaults", config_path)

    if not isinstance(data, dict):
        logger.warning("Config file %s is not a mapping, using defaults", config_path)
        data = {}

    merged = _deep_merge(copy.deepcopy(DEFAULT_CONFIG), data)

    for w in validate_config(merged):
        logger.warning("Config validation: %s", w)

    return merged
