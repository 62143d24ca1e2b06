"""Gesture recognition module."""
from .gesture_classifier import (
    GestureClassifier,
    GestureClassifierConfig,
    GestureLabel,
    ClassificationResult,
    FingerState,
    HandPose,
)
from .gesture_buffer import GestureBuffer, GestureBufferConfig

__all__ = [
    "GestureClassifier",
    "GestureClassifierConfig",
    "GestureLabel",
    "ClassificationResult",
    "FingerState",
    "HandPose",
    "GestureBuffer",
    "GestureBufferConfig",
]
