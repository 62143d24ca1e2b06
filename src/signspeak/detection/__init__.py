"""Hand landmark model and MediaPipe detection."""
from .landmarks import HandLandmarks, Landmark, LandmarkIndex, NUM_LANDMARKS

# HandDetector lives in .hand_detector and pulls in mediapipe on import
__all__ = ["HandLandmarks", "Landmark", "LandmarkIndex", "NUM_LANDMARKS"]
