"""
Static Gesture Classifier
==========================

Rule-based gesture recognition from hand landmark geometry.

Each non-thumb finger is tested for extension (tip above PIP above MCP in
image coordinates) and curl (tip at or below PIP, or within a small
tolerance of it). The thumb moves laterally, so it counts as extended when
its joints progress monotonically left, right or upward. The resulting
flags are matched against a fixed, ordered rule table; the first match wins.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

import numpy as np

from ..detection.landmarks import HandLandmarks, LandmarkIndex, FINGER_JOINTS

logger = logging.getLogger(__name__)


class GestureLabel(Enum):
    """
    Recognized static gestures.

    Declaration order breaks vote ties, so any gesture beats NONE on an
    equal count.
    """
    FIST = "fist"
    PEACE = "peace"
    THUMBS_UP = "thumbs_up"
    OPEN_PALM = "open_palm"
    POINTING = "pointing"
    L_SHAPE = "L_shape"
    OK_SIGN = "ok_sign"
    NONE = "none"

    @classmethod
    def from_string(cls, name: str) -> "GestureLabel":
        """Convert a gesture name to GestureLabel, NONE when unknown."""
        try:
            return cls(name)
        except ValueError:
            return cls.NONE


@dataclass(frozen=True)
class FingerState:
    """Extension and curl flags; both may hold for an ambiguous pose."""
    extended: bool
    curled: bool


@dataclass(frozen=True)
class HandPose:
    """Per-finger diagnostics for one hand in one frame."""
    thumb_extended: bool
    fingers: Dict[str, FingerState]
    thumb_index_distance: float

    @property
    def extended_count(self) -> int:
        return sum(1 for f in self.fingers.values() if f.extended)

    @property
    def curled_count(self) -> int:
        return sum(1 for f in self.fingers.values() if f.curled)

    def extended(self, finger: str) -> bool:
        return self.fingers[finger].extended

    def curled(self, finger: str) -> bool:
        return self.fingers[finger].curled


@dataclass(frozen=True)
class ClassificationResult:
    """Gesture label with a fixed per-rule confidence."""
    label: GestureLabel
    confidence: float

    @property
    def is_match(self) -> bool:
        return self.label is not GestureLabel.NONE

    @staticmethod
    def none() -> "ClassificationResult":
        return ClassificationResult(GestureLabel.NONE, 0.0)


@dataclass
class GestureClassifierConfig:
    """Gesture classifier configuration."""
    # |tip.y - pip.y| below this counts as curled
    curl_tolerance: float = 0.02
    # Planar thumb-tip to index-tip distance that closes an OK sign
    ok_sign_distance: float = 0.05
    # Log finger flags for every classified frame
    debug: bool = False

    @classmethod
    def from_dict(cls, config: dict) -> "GestureClassifierConfig":
        """Create config from dictionary."""
        return cls(
            curl_tolerance=config.get("curl_tolerance", 0.02),
            ok_sign_distance=config.get("ok_sign_distance", 0.05),
            debug=config.get("debug", False),
        )


class GestureClassifier:
    """
    Stateless rule-based classifier for the static gesture vocabulary.

    Example:
        >>> classifier = GestureClassifier()
        >>> result = classifier.classify(hand)
        >>> if result.is_match:
        ...     print(f"{result.label.value} ({result.confidence:.2f})")
        >>> pose = classifier.analyze(hand)  # finger flags for debug overlays
    """

    def __init__(self, config: Optional[GestureClassifierConfig] = None):
        self.config = config or GestureClassifierConfig()

    def classify(self, hand: HandLandmarks) -> ClassificationResult:
        """
        Classify hand gesture from landmarks.

        Args:
            hand: Hand landmarks to analyze

        Returns:
            The first matching rule's label and confidence, or NONE
        """
        return self.classify_pose(self.analyze(hand))

    def analyze(self, hand: HandLandmarks) -> HandPose:
        """Compute the finger flags the rules operate on."""
        fingers = {
            name: FingerState(
                extended=self._is_extended(hand, tip, pip, mcp),
                curled=self._is_curled(hand, tip, pip),
            )
            for name, (tip, pip, mcp) in FINGER_JOINTS.items()
        }

        thumb_tip = hand.get(LandmarkIndex.THUMB_TIP)
        index_tip = hand.get(LandmarkIndex.INDEX_TIP)

        pose = HandPose(
            thumb_extended=self._is_thumb_extended(hand),
            fingers=fingers,
            thumb_index_distance=float(np.hypot(thumb_tip.x - index_tip.x, thumb_tip.y - index_tip.y)),
        )

        if self.config.debug:
            logger.debug(
                "Finger states: thumb=%s %s (extended=%d, curled=%d)",
                pose.thumb_extended,
                {n: (f.extended, f.curled) for n, f in fingers.items()},
                pose.extended_count,
                pose.curled_count,
            )

        return pose

    def classify_pose(self, pose: HandPose) -> ClassificationResult:
        """Apply the rule table to an analyzed pose."""
        extended = pose.extended_count
        curled = pose.curled_count
        others_curled = pose.curled("middle") and pose.curled("ring") and pose.curled("pinky")

        # Thumbs up is checked before fist: a fist with the thumb out matches both
        if pose.thumb_extended and curled >= 3 and extended <= 1:
            return ClassificationResult(GestureLabel.THUMBS_UP, 0.90)

        if curled >= 4 and extended == 0:
            return ClassificationResult(GestureLabel.FIST, 0.90)

        if (pose.extended("index") and pose.extended("middle") and
                pose.curled("ring") and pose.curled("pinky") and extended == 2):
            return ClassificationResult(GestureLabel.PEACE, 0.85)

        if pose.extended("index") and others_curled and extended == 1:
            return ClassificationResult(GestureLabel.POINTING, 0.80)

        if extended >= 4:
            return ClassificationResult(GestureLabel.OPEN_PALM, 0.85)

        if pose.thumb_extended and pose.extended("index") and others_curled:
            return ClassificationResult(GestureLabel.L_SHAPE, 0.80)

        if (pose.thumb_index_distance < self.config.ok_sign_distance and
                pose.extended("middle") and pose.extended("ring") and pose.extended("pinky")):
            return ClassificationResult(GestureLabel.OK_SIGN, 0.80)

        return ClassificationResult.none()

    @staticmethod
    def _is_extended(hand: HandLandmarks, tip_idx, pip_idx, mcp_idx) -> bool:
        """Tip above PIP above MCP (smaller y is higher on screen)."""
        return hand.get(tip_idx).y < hand.get(pip_idx).y < hand.get(mcp_idx).y

    def _is_curled(self, hand: HandLandmarks, tip_idx, pip_idx) -> bool:
        """Tip at or below PIP, or level with it within tolerance."""
        tip_y = hand.get(tip_idx).y
        pip_y = hand.get(pip_idx).y
        return tip_y >= pip_y or abs(tip_y - pip_y) < self.config.curl_tolerance

    @staticmethod
    def _is_thumb_extended(hand: HandLandmarks) -> bool:
        """Monotone rightward, leftward or upward progression MCP -> IP -> tip."""
        tip = hand.get(LandmarkIndex.THUMB_TIP)
        ip = hand.get(LandmarkIndex.THUMB_IP)
        mcp = hand.get(LandmarkIndex.THUMB_MCP)

        rightward = tip.x > ip.x > mcp.x
        leftward = tip.x < ip.x < mcp.x
        upward = tip.y < ip.y < mcp.y

        return rightward or leftward or upward
