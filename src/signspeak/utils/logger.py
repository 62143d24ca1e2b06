"""
Logging setup and translation event logging.
"""

import os
import logging
import logging.handlers
import time
from functools import wraps


def setup_logging(level="INFO", log_file=None, max_size_mb=10, backup_count=3):
    """Configure console logging and an optional rotating log file."""
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


class GestureLogger:
    """Logs committed tokens and session events on the ``gesture_events`` logger."""

    def __init__(self):
        self.logger = logging.getLogger("gesture_events")
        self._events = []

    def log_commit(self, token):
        """Log a committed translation token with the hand that held it."""
        self._events.append({
            "timestamp": token.timestamp,
            "event": "commit",
            "gesture": token.gesture.value,
            "text": token.text,
            "hand": token.hand,
        })
        self.logger.info(
            "Commit: %-6s | Gesture: %-10s | Hand: %s",
            token.text,
            token.gesture.value,
            token.hand or "-",
        )

    def log_clear(self, text_length):
        """Log an explicit clear of the translated text."""
        self._events.append({"timestamp": time.time(), "event": "clear"})
        self.logger.info("Cleared translation (%d chars)", text_length)

    def get_history(self, last_n=None):
        """Get recent events."""
        if last_n:
            return self._events[-last_n:]
        return self._events.copy()

    @property
    def total_commits(self):
        return sum(1 for e in self._events if e["event"] == "commit")


def log_timing(func):
    """Decorator to log function execution time."""
    logger = logging.getLogger(func.__module__)

    @wraps(func)
    def wrapper(*args, **kwargs):
        start = time.perf_counter()
        result = func(*args, **kwargs)
        elapsed = (time.perf_counter() - start) * 1000
        logger.debug("%s took %.2fms", func.__name__, elapsed)
        return result

    return wrapper
