"""
Gesture Buffer
===============

Multi-frame majority voting that turns noisy per-frame labels into a
stably held gesture.
"""

import logging
from dataclasses import dataclass
from typing import Optional, List, Tuple, Deque
from collections import deque

import numpy as np

from .gesture_classifier import GestureLabel

logger = logging.getLogger(__name__)

# Fixed vote-table layout; argmax returns the earliest-declared label on ties
_LABELS: Tuple[GestureLabel, ...] = tuple(GestureLabel)
_LABEL_INDEX = {label: i for i, label in enumerate(_LABELS)}


@dataclass
class GestureBufferConfig:
    """Gesture buffer configuration."""
    history_size: int = 10  # Labels retained per hand
    window_size: int = 5    # Trailing labels that vote
    min_votes: int = 4      # Votes needed to count as held

    def __post_init__(self):
        # A window must hold at least one label and fit in the history
        window = max(1, min(self.window_size, self.history_size))
        if window != self.window_size:
            logger.warning("window_size %d out of range, using %d", self.window_size, window)
            self.window_size = window
        if self.history_size < window:
            self.history_size = window
        if self.min_votes < 1:
            logger.warning("min_votes %d out of range, using 1", self.min_votes)
            self.min_votes = 1

    @classmethod
    def from_dict(cls, config: dict) -> "GestureBufferConfig":
        """Create config from dictionary."""
        return cls(
            history_size=config.get("history_size", 10),
            window_size=config.get("window_size", 5),
            min_votes=config.get("min_votes", 4),
        )


class GestureBuffer:
    """
    Bounded label history with trailing-window majority voting.

    NONE is a regular symbol here: missed frames vote too, so a gesture
    must dominate the window rather than merely be the only match.

    Example:
        >>> buffer = GestureBuffer()
        >>> for label in [GestureLabel.FIST] * 4:
        ...     held = buffer.update(label)
        >>> held
        <GestureLabel.FIST: 'fist'>
    """

    def __init__(self, config: Optional[GestureBufferConfig] = None):
        self.config = config or GestureBufferConfig()
        self._history: Deque[GestureLabel] = deque(maxlen=self.config.history_size)

    def update(self, label: GestureLabel) -> Optional[GestureLabel]:
        """
        Record a label and check the trailing window.

        Returns:
            The majority label when it holds at least ``min_votes`` of the
            window, otherwise None
        """
        self._history.append(label)

        majority, votes = self.majority()
        if votes >= self.config.min_votes:
            return majority
        return None

    def majority(self) -> Tuple[GestureLabel, int]:
        """Most frequent label in the trailing window and its vote count."""
        window = self.window
        if not window:
            return GestureLabel.NONE, 0

        counts = np.bincount([_LABEL_INDEX[label] for label in window], minlength=len(_LABELS))
        best = int(np.argmax(counts))
        return _LABELS[best], int(counts[best])

    def reset(self) -> None:
        """Clear label history."""
        self._history.clear()

    @property
    def window(self) -> List[GestureLabel]:
        """Up to ``window_size`` most recent labels, oldest first."""
        return list(self._history)[-self.config.window_size:]

    @property
    def contents(self) -> List[str]:
        """Buffer contents as gesture names for debugging."""
        return [label.value for label in self._history]

    def __len__(self) -> int:
        return len(self._history)
