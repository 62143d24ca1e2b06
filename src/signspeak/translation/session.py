"""
Translation Session
====================

Per-frame pipeline from detected hands to committed tokens.

Every tracked hand gets its own GestureBuffer; all hands share one
Translator, so commits land in the output in hand-iteration order.
A buffer commits only when its held gesture changes.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Optional, Dict, List, Iterable

from ..detection.landmarks import HandLandmarks
from ..recognition.gesture_classifier import (
    GestureClassifier,
    GestureLabel,
    ClassificationResult,
    HandPose,
)
from ..recognition.gesture_buffer import GestureBuffer, GestureBufferConfig
from ..utils.logger import log_timing
from .translator import Translator, CommittedToken

logger = logging.getLogger(__name__)

DEFAULT_HAND = "default"
SHARED_HAND = "shared"


@dataclass
class SessionConfig:
    """Session configuration."""
    # One buffer for all hands, interleaving their labels
    share_history: bool = False

    @classmethod
    def from_dict(cls, config: dict) -> "SessionConfig":
        """Create config from dictionary."""
        return cls(share_history=config.get("share_history", False))


@dataclass
class HandResult:
    """Classification output for one hand in one frame."""
    key: str
    hand: HandLandmarks
    result: ClassificationResult
    pose: HandPose


@dataclass
class FrameResult:
    """Everything a frame produced, for rendering and speech."""
    hands: List[HandResult] = field(default_factory=list)
    tokens: List[CommittedToken] = field(default_factory=list)

    @property
    def has_hands(self) -> bool:
        return bool(self.hands)


class TranslationSession:
    """
    Owns the classifier, the per-hand gesture buffers and the translator.

    Example:
        >>> session = TranslationSession()
        >>> frame = session.process_frame(detector.detect(rgb_image))
        >>> for token in frame.tokens:
        ...     print(token.text)
        >>> session.clear()
    """

    def __init__(
        self,
        classifier: Optional[GestureClassifier] = None,
        translator: Optional[Translator] = None,
        buffer_config: Optional[GestureBufferConfig] = None,
        config: Optional[SessionConfig] = None,
    ):
        self.classifier = classifier or GestureClassifier()
        self.translator = translator or Translator()
        self.buffer_config = buffer_config or GestureBufferConfig()
        self.config = config or SessionConfig()

        self._buffers: Dict[str, GestureBuffer] = {}
        self._held: Dict[str, Optional[GestureLabel]] = {}  # Last held label per buffer
        self._detected: Dict[str, ClassificationResult] = {}
        self._lock = threading.Lock()

    def observe(self, label: GestureLabel, hand: str = DEFAULT_HAND) -> Optional[CommittedToken]:
        """
        Feed one frame's label for ``hand``.

        Returns:
            The committed token when the label has just become stably held
            and is not a repeat of the output's last token, otherwise None
        """
        with self._lock:
            return self._observe(label, hand)

    @log_timing
    def process_frame(self, hands: Iterable[HandLandmarks]) -> FrameResult:
        """
        Classify and stabilize every hand detected in a frame.

        Tracked hands missing from this frame receive an implicit NONE.
        """
        with self._lock:
            frame = FrameResult()
            seen_keys = set()

            for i, hand in enumerate(hands):
                key = self._hand_key(hand, i, seen_keys)
                seen_keys.add(key)

                pose = self.classifier.analyze(hand)
                result = self.classifier.classify_pose(pose)
                frame.hands.append(HandResult(key=key, hand=hand, result=result, pose=pose))

                token = self._observe(result.label, key)
                if token:
                    frame.tokens.append(token)

            used_buffers = {self._buffer_key(k) for k in seen_keys}
            for key in list(self._buffers):
                if key not in used_buffers:
                    token = self._observe(GestureLabel.NONE, key)
                    if token:
                        frame.tokens.append(token)

            self._detected = {h.key: h.result for h in frame.hands}
            return frame

    def clear(self) -> None:
        """Empty the translated text, the commit log and every gesture buffer."""
        with self._lock:
            self.translator.clear()
            for buffer in self._buffers.values():
                buffer.reset()
            self._held.clear()
        logger.info("Translation cleared")

    def _observe(self, label: GestureLabel, hand: str) -> Optional[CommittedToken]:
        key = self._buffer_key(hand)
        held = self._buffer_for(hand).update(label)

        previous = self._held.get(key)
        self._held[key] = held
        if held is None or held == previous:
            return None
        return self.translator.commit(held, hand=hand)

    def _buffer_key(self, hand: str) -> str:
        return SHARED_HAND if self.config.share_history else hand

    def _buffer_for(self, hand: str) -> GestureBuffer:
        key = self._buffer_key(hand)
        buffer = self._buffers.get(key)
        if buffer is None:
            buffer = GestureBuffer(self.buffer_config)
            self._buffers[key] = buffer
            logger.debug("Tracking new hand %r", key)
        return buffer

    @staticmethod
    def _hand_key(hand: HandLandmarks, index: int, taken) -> str:
        key = hand.handedness or f"hand{index}"
        if key in taken:
            key = f"{key}#{index}"
        return key

    @property
    def text(self) -> str:
        """Read-only snapshot of the translated text."""
        return self.translator.text

    @property
    def history(self) -> List[CommittedToken]:
        return self.translator.history

    @property
    def detected(self) -> Dict[str, ClassificationResult]:
        """Latest classification per hand; empty after a frame without hands."""
        return dict(self._detected)

    @property
    def buffers(self) -> Dict[str, List[str]]:
        """Buffer contents per tracked hand, for debugging."""
        return {key: buffer.contents for key, buffer in self._buffers.items()}
