"""
Hand Landmark Model
====================

Immutable landmark points and the 21-point hand container shared by the
detector, the gesture analyzer and the overlay renderer.
"""

from dataclasses import dataclass
from typing import List, Tuple, NamedTuple
from enum import IntEnum

NUM_LANDMARKS = 21


class LandmarkIndex(IntEnum):
    """Hand landmark indices following MediaPipe convention."""
    WRIST = 0
    THUMB_CMC = 1
    THUMB_MCP = 2
    THUMB_IP = 3
    THUMB_TIP = 4
    INDEX_MCP = 5
    INDEX_PIP = 6
    INDEX_DIP = 7
    INDEX_TIP = 8
    MIDDLE_MCP = 9
    MIDDLE_PIP = 10
    MIDDLE_DIP = 11
    MIDDLE_TIP = 12
    RING_MCP = 13
    RING_PIP = 14
    RING_DIP = 15
    RING_TIP = 16
    PINKY_MCP = 17
    PINKY_PIP = 18
    PINKY_DIP = 19
    PINKY_TIP = 20


# (tip, pip, mcp) per non-thumb finger, in anatomical order
FINGER_JOINTS = {
    "index": (LandmarkIndex.INDEX_TIP, LandmarkIndex.INDEX_PIP, LandmarkIndex.INDEX_MCP),
    "middle": (LandmarkIndex.MIDDLE_TIP, LandmarkIndex.MIDDLE_PIP, LandmarkIndex.MIDDLE_MCP),
    "ring": (LandmarkIndex.RING_TIP, LandmarkIndex.RING_PIP, LandmarkIndex.RING_MCP),
    "pinky": (LandmarkIndex.PINKY_TIP, LandmarkIndex.PINKY_PIP, LandmarkIndex.PINKY_MCP),
}


class Landmark(NamedTuple):
    """A single landmark point with normalized coordinates."""
    x: float  # 0.0 to 1.0, normalized by image width
    y: float  # 0.0 to 1.0, normalized by image height
    z: float  # Depth relative to wrist

    def to_pixel(self, width: int, height: int) -> Tuple[int, int]:
        """Convert normalized coordinates to pixel coordinates."""
        return (int(self.x * width), int(self.y * height))


@dataclass
class HandLandmarks:
    """
    One detected hand: exactly 21 landmarks in anatomical order.

    A landmark count other than 21 means the upstream tracker broke its
    contract, so construction fails loudly instead of classifying garbage.
    """
    landmarks: List[Landmark]
    handedness: str = ""  # "Left" or "Right" as reported by the tracker
    confidence: float = 0.0

    def __post_init__(self):
        if len(self.landmarks) != NUM_LANDMARKS:
            raise ValueError(
                f"Hand requires {NUM_LANDMARKS} landmarks, got {len(self.landmarks)}"
            )

    @classmethod
    def from_points(cls, points, handedness: str = "", confidence: float = 0.0) -> "HandLandmarks":
        """Build from any sequence of (x, y, z) triples."""
        return cls(
            landmarks=[Landmark(float(x), float(y), float(z)) for x, y, z in points],
            handedness=handedness,
            confidence=confidence,
        )

    def get(self, index: LandmarkIndex) -> Landmark:
        """Get landmark by index."""
        return self.landmarks[index]

    def get_pixel(self, index: LandmarkIndex, width: int, height: int) -> Tuple[int, int]:
        """Get landmark as pixel coordinates."""
        return self.get(index).to_pixel(width, height)

    def bounding_box(self, width: int, height: int, padding: int = 20) -> Tuple[int, int, int, int]:
        """Get bounding box (x, y, width, height) in pixels, clipped to the image."""
        xs = [lm.x for lm in self.landmarks]
        ys = [lm.y for lm in self.landmarks]

        min_x = max(0, int(min(xs) * width) - padding)
        min_y = max(0, int(min(ys) * height) - padding)
        max_x = min(width, int(max(xs) * width) + padding)
        max_y = min(height, int(max(ys) * height) + padding)

        return (min_x, min_y, max_x - min_x, max_y - min_y)
