"""
Visualization Module
=====================

Overlays for the translation window: hand skeletons, the detected
gesture, finger debug flags and the translated text.
"""

import cv2
import numpy as np
from typing import Optional, Tuple, List
from dataclasses import dataclass

from ..detection.landmarks import HandLandmarks, LandmarkIndex
from ..recognition.gesture_classifier import ClassificationResult, HandPose


@dataclass
class VisualizerConfig:
    """Visualization settings."""
    show_landmarks: bool = True
    show_connections: bool = True
    show_gesture_label: bool = True
    show_history: bool = True
    show_bbox: bool = True

    # Colors (BGR format)
    landmark_color: Tuple[int, int, int] = (0, 255, 0)      # Green
    wrist_color: Tuple[int, int, int] = (0, 0, 255)         # Red
    connection_color: Tuple[int, int, int] = (0, 255, 0)    # Green
    text_color: Tuple[int, int, int] = (255, 255, 255)      # White
    gesture_color: Tuple[int, int, int] = (0, 255, 0)       # Green
    warning_color: Tuple[int, int, int] = (0, 165, 255)     # Orange

    font_scale: float = 0.7
    font_thickness: int = 2

    @classmethod
    def from_dict(cls, config: dict) -> "VisualizerConfig":
        """Create config from dictionary."""
        colors = config.get("colors") or {}
        return cls(
            show_landmarks=config.get("show_landmarks", True),
            show_connections=config.get("show_connections", True),
            show_gesture_label=config.get("show_gesture_label", True),
            show_history=config.get("show_history", True),
            show_bbox=config.get("show_bbox", True),
            landmark_color=tuple(colors.get("landmarks", [0, 255, 0])),
            wrist_color=tuple(colors.get("wrist", [0, 0, 255])),
            connection_color=tuple(colors.get("connections", [0, 255, 0])),
            text_color=tuple(colors.get("text", [255, 255, 255])),
            gesture_color=tuple(colors.get("gesture", [0, 255, 0])),
            warning_color=tuple(colors.get("warning", [0, 165, 255])),
            font_scale=config.get("font_scale", 0.7),
            font_thickness=config.get("font_thickness", 2),
        )


class Visualizer:
    """
    Draws translation overlays onto BGR frames in place.

    Example:
        >>> viz = Visualizer()
        >>> frame_result = session.process_frame(hands)
        >>> for hand_result in frame_result.hands:
        ...     viz.draw_hand(image, hand_result.hand)
        >>> viz.draw_translation(image, session.text, session.history)
    """

    # Each finger chains from the wrist through its joints
    HAND_CONNECTIONS = [
        (0, 1), (1, 2), (2, 3), (3, 4),         # Thumb
        (0, 5), (5, 6), (6, 7), (7, 8),         # Index
        (0, 9), (9, 10), (10, 11), (11, 12),    # Middle
        (0, 13), (13, 14), (14, 15), (15, 16),  # Ring
        (0, 17), (17, 18), (18, 19), (19, 20),  # Pinky
    ]

    def __init__(self, config: Optional[VisualizerConfig] = None):
        self.config = config or VisualizerConfig()
        self._font = cv2.FONT_HERSHEY_SIMPLEX

    def draw_hand(self, image: np.ndarray, hand: HandLandmarks) -> np.ndarray:
        """Draw one hand skeleton; the wrist is marked in its own color."""
        height, width = image.shape[:2]

        if self.config.show_bbox:
            x, y, w, h = hand.bounding_box(width, height)
            cv2.rectangle(image, (x, y), (x + w, y + h), self.config.connection_color, 1)

        if self.config.show_connections:
            for start_idx, end_idx in self.HAND_CONNECTIONS:
                start = hand.get_pixel(LandmarkIndex(start_idx), width, height)
                end = hand.get_pixel(LandmarkIndex(end_idx), width, height)
                cv2.line(image, start, end, self.config.connection_color, 2)

        if self.config.show_landmarks:
            for i, lm in enumerate(hand.landmarks):
                color = self.config.wrist_color if i == LandmarkIndex.WRIST else self.config.landmark_color
                cv2.circle(image, lm.to_pixel(width, height), 4, color, -1)

        return image

    def draw_gesture(
        self,
        image: np.ndarray,
        result: ClassificationResult,
        hand_label: str = "",
        position: Optional[Tuple[int, int]] = None,
    ) -> np.ndarray:
        """Draw the detected gesture name and confidence."""
        if not self.config.show_gesture_label or not result.is_match:
            return image

        height, width = image.shape[:2]
        x, y = position or (20, 40)

        text = f"{result.label.value} ({result.confidence:.0%})"
        if hand_label:
            text = f"{hand_label}: {text}"

        color = self.config.gesture_color if result.confidence >= 0.85 else self.config.warning_color
        cv2.putText(image, text, (x, y), self._font, self.config.font_scale,
                    color, self.config.font_thickness)
        return image

    def draw_debug(
        self,
        image: np.ndarray,
        pose: HandPose,
        position: Optional[Tuple[int, int]] = None,
    ) -> np.ndarray:
        """Draw per-finger extended/curled flags."""
        height, width = image.shape[:2]
        x, y = position or (width - 230, 30)
        line_height = 20

        lines = [f"thumb: {'ext' if pose.thumb_extended else '-'}"]
        for name, state in pose.fingers.items():
            flags = []
            if state.extended:
                flags.append("ext")
            if state.curled:
                flags.append("curl")
            lines.append(f"{name}: {'/'.join(flags) or '-'}")
        lines.append(f"ext={pose.extended_count} curl={pose.curled_count}")

        for i, line in enumerate(lines):
            cv2.putText(image, line, (x, y + i * line_height),
                        self._font, 0.5, self.config.text_color, 1)
        return image

    def draw_translation(
        self,
        image: np.ndarray,
        text: str,
        history: Optional[List] = None,
    ) -> np.ndarray:
        """Draw the translated text along the bottom, recent commits above it."""
        height, width = image.shape[:2]

        # Dark band behind the text for legibility
        band_top = height - 50
        overlay = image.copy()
        cv2.rectangle(overlay, (0, band_top), (width, height), (0, 0, 0), -1)
        cv2.addWeighted(overlay, 0.6, image, 0.4, 0, dst=image)

        shown = text.strip() or "(show a gesture)"
        # Keep the tail visible when the text outgrows the frame
        while len(shown) > 1 and cv2.getTextSize(shown, self._font, self.config.font_scale,
                                                 self.config.font_thickness)[0][0] > width - 40:
            shown = shown[1:]
        cv2.putText(image, shown, (20, height - 18), self._font, self.config.font_scale,
                    self.config.text_color, self.config.font_thickness)

        if self.config.show_history and history:
            y = band_top - 10
            for token in reversed(history[-5:]):
                line = f"{token.time_label}  {token.gesture.value} -> {token.text}"
                cv2.putText(image, line, (20, y), self._font, 0.45, self.config.text_color, 1)
                y -= 18

        return image

    def draw_instructions(self, image: np.ndarray, instructions: List[str]) -> np.ndarray:
        """Draw key bindings bottom-right, above the text band."""
        height, width = image.shape[:2]
        x = width - 200
        for i, line in enumerate(instructions):
            cv2.putText(image, line, (x, height - 70 - (len(instructions) - 1 - i) * 20),
                        self._font, 0.5, self.config.text_color, 1)
        return image
