"""
Camera Capture Module
======================

Synchronous OpenCV frame capture for the translation loop.
"""

import cv2
import time
import logging
from dataclasses import dataclass
from typing import Optional
import numpy as np

logger = logging.getLogger(__name__)


@dataclass
class CameraConfig:
    """Camera configuration settings."""
    device_id: int = 0
    width: int = 640
    height: int = 480
    flip_horizontal: bool = True  # Mirror view, so signing feels natural

    @classmethod
    def from_dict(cls, config: dict) -> "CameraConfig":
        """Create config from dictionary (YAML parsed)."""
        return cls(
            device_id=config.get("device_id", 0),
            width=config.get("width", 640),
            height=config.get("height", 480),
            flip_horizontal=config.get("flip_horizontal", True),
        )


@dataclass
class Frame:
    """Container for captured frame with metadata."""
    image: np.ndarray
    timestamp: float  # Monotonic seconds, never steps backwards
    frame_number: int

    @property
    def rgb(self) -> np.ndarray:
        """Convert BGR to RGB."""
        return cv2.cvtColor(self.image, cv2.COLOR_BGR2RGB)

    @property
    def timestamp_ms(self) -> int:
        return int(self.timestamp * 1000)


class Camera:
    """
    Webcam capture returning timestamped frames.

    Example:
        >>> with Camera(CameraConfig()) as camera:
        ...     frame = camera.read()
    """

    def __init__(self, config: Optional[CameraConfig] = None):
        self.config = config or CameraConfig()
        self._cap: Optional[cv2.VideoCapture] = None
        self._frame_number = 0

    def start(self) -> bool:
        """
        Open the capture device.

        Returns:
            True if camera started successfully
        """
        logger.info("Starting camera (device=%d, %dx%d)",
                    self.config.device_id, self.config.width, self.config.height)

        self._cap = cv2.VideoCapture(self.config.device_id)
        if not self._cap.isOpened():
            logger.error("Failed to open camera device %d", self.config.device_id)
            self._cap = None
            return False

        self._cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.width)
        self._cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.height)
        self._frame_number = 0
        return True

    def stop(self) -> None:
        """Release the capture device."""
        if self._cap:
            self._cap.release()
            self._cap = None
        logger.info("Camera stopped")

    def read(self) -> Optional[Frame]:
        """Capture one frame, or None if the device is closed or the read failed."""
        if not self._cap:
            return None

        ret, image = self._cap.read()
        if not ret or image is None:
            logger.warning("Failed to capture frame")
            return None

        if self.config.flip_horizontal:
            image = cv2.flip(image, 1)

        self._frame_number += 1
        return Frame(image=image, timestamp=time.monotonic(), frame_number=self._frame_number)

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        return False
