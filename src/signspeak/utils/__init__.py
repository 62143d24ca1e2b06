"""Configuration, logging and visualization helpers."""
from .config import load_config, validate_config
from .logger import setup_logging, GestureLogger, log_timing

__all__ = ["load_config", "validate_config", "setup_logging", "GestureLogger", "log_timing"]
