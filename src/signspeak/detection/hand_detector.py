"""
Hand Detection Module - MediaPipe Tasks API
=============================================

Wraps the MediaPipe HandLandmarker and converts its results into
HandLandmarks for the gesture analyzer.
"""

import logging
import urllib.request
from dataclasses import dataclass
from typing import List, Optional
from pathlib import Path

import numpy as np
import mediapipe as mp
from mediapipe.tasks import python
from mediapipe.tasks.python import vision

from .landmarks import HandLandmarks, Landmark

logger = logging.getLogger(__name__)

HAND_LANDMARKER_MODEL_URL = "https://storage.googleapis.com/mediapipe-models/hand_landmarker/hand_landmarker/float16/1/hand_landmarker.task"
DEFAULT_MODEL_PATH = Path.home() / ".cache" / "signspeak" / "hand_landmarker.task"


@dataclass
class HandDetectorConfig:
    """Configuration for hand detector."""
    model_path: str = ""
    max_num_hands: int = 2
    min_detection_confidence: float = 0.5
    min_tracking_confidence: float = 0.5
    min_presence_confidence: float = 0.5

    @classmethod
    def from_dict(cls, d: dict) -> "HandDetectorConfig":
        """Create config from dictionary."""
        return cls(
            model_path=d.get("model_path", ""),
            max_num_hands=d.get("max_num_hands", 2),
            min_detection_confidence=d.get("min_detection_confidence", 0.5),
            min_tracking_confidence=d.get("min_tracking_confidence", 0.5),
            min_presence_confidence=d.get("min_presence_confidence", 0.5),
        )


def download_model(url: str, save_path: Path) -> bool:
    """Download the hand landmarker model if not present."""
    if save_path.exists():
        return True

    try:
        save_path.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Downloading hand landmarker model to %s...", save_path)
        urllib.request.urlretrieve(url, save_path)
        logger.info("Model download complete")
        return True
    except OSError as e:
        logger.error("Failed to download model: %s", e)
        return False


def to_hand_landmarks(result) -> List[HandLandmarks]:
    """Convert a HandLandmarkerResult into HandLandmarks, one per hand."""
    hands = []
    for i, hand_landmarks in enumerate(result.hand_landmarks):
        handedness = ""
        confidence = 0.0
        if result.handedness and len(result.handedness) > i:
            handedness = result.handedness[i][0].category_name
            confidence = result.handedness[i][0].score

        hands.append(HandLandmarks(
            landmarks=[Landmark(x=lm.x, y=lm.y, z=lm.z) for lm in hand_landmarks],
            handedness=handedness,
            confidence=confidence,
        ))
    return hands


class HandDetector:
    """
    Hand landmark detector running MediaPipe in VIDEO mode.

    Example:
        >>> with HandDetector(HandDetectorConfig()) as detector:
        ...     hands = detector.detect(rgb_image)
    """

    def __init__(self, config: Optional[HandDetectorConfig] = None):
        self.config = config or HandDetectorConfig()
        self._landmarker: Optional[vision.HandLandmarker] = None
        self._frame_timestamp = 0

    def start(self) -> bool:
        """Initialize the hand landmarker, downloading the model on first use."""
        model_path = Path(self.config.model_path) if self.config.model_path else DEFAULT_MODEL_PATH

        if not download_model(HAND_LANDMARKER_MODEL_URL, model_path):
            logger.error("Could not obtain hand landmarker model")
            return False

        try:
            options = vision.HandLandmarkerOptions(
                base_options=python.BaseOptions(model_asset_path=str(model_path)),
                running_mode=vision.RunningMode.VIDEO,
                num_hands=self.config.max_num_hands,
                min_hand_detection_confidence=self.config.min_detection_confidence,
                min_hand_presence_confidence=self.config.min_presence_confidence,
                min_tracking_confidence=self.config.min_tracking_confidence,
            )
            self._landmarker = vision.HandLandmarker.create_from_options(options)
        except (RuntimeError, ValueError) as e:
            logger.error("Failed to initialize HandLandmarker: %s", e)
            return False

        logger.info("HandLandmarker initialized (max hands: %d)", self.config.max_num_hands)
        return True

    def stop(self) -> None:
        """Release resources."""
        if self._landmarker:
            self._landmarker.close()
            self._landmarker = None
        logger.info("HandLandmarker stopped")

    def detect(self, image: np.ndarray, timestamp_ms: Optional[int] = None) -> List[HandLandmarks]:
        """
        Detect hands in an RGB image.

        Args:
            image: RGB image as numpy array (H, W, 3)
            timestamp_ms: Frame timestamp; stale values are bumped past the
                previous one, since VIDEO mode rejects non-increasing stamps

        Returns:
            List of HandLandmarks, empty when no hand is visible
        """
        if self._landmarker is None:
            logger.warning("HandLandmarker not initialized. Call start() first.")
            return []

        if timestamp_ms is None:
            timestamp_ms = self._frame_timestamp + 33  # ~30 FPS
        elif timestamp_ms <= self._frame_timestamp:
            logger.debug("Timestamp %d not increasing, using %d",
                         timestamp_ms, self._frame_timestamp + 1)
            timestamp_ms = self._frame_timestamp + 1
        self._frame_timestamp = timestamp_ms

        mp_image = mp.Image(image_format=mp.ImageFormat.SRGB, data=image)
        result = self._landmarker.detect_for_video(mp_image, timestamp_ms)
        return to_hand_landmarks(result)

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        return False
