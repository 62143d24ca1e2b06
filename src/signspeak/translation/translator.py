"""
Translator
===========

Turns stably held gestures into output text, suppressing immediate
repeats, and keeps a short log of recent commits.
"""

import time
import logging
from dataclasses import dataclass, field
from typing import Optional, Dict, List, Deque
from collections import deque

from ..recognition.gesture_classifier import GestureLabel

logger = logging.getLogger(__name__)

DEFAULT_SIGN_MAP: Dict[GestureLabel, str] = {
    GestureLabel.FIST: "A",
    GestureLabel.PEACE: "V",
    GestureLabel.THUMBS_UP: "Good",
    GestureLabel.OPEN_PALM: "Stop",
    GestureLabel.POINTING: "I",
    GestureLabel.L_SHAPE: "L",
    GestureLabel.OK_SIGN: "O",
}


@dataclass(frozen=True)
class CommittedToken:
    """A gesture finalized into output text."""
    text: str
    gesture: GestureLabel
    timestamp: float = field(default_factory=time.time)
    hand: str = ""  # Key of the hand that held the gesture

    @property
    def time_label(self) -> str:
        """Local wall-clock time, HH:MM:SS."""
        return time.strftime("%H:%M:%S", time.localtime(self.timestamp))


@dataclass
class TranslatorConfig:
    """Translator configuration."""
    separator: str = " "
    history_limit: int = 10
    sign_map: Dict[GestureLabel, str] = field(default_factory=lambda: dict(DEFAULT_SIGN_MAP))

    @classmethod
    def from_dict(cls, config: dict) -> "TranslatorConfig":
        """Create config from dictionary. ``sign_map`` entries override the defaults."""
        sign_map = dict(DEFAULT_SIGN_MAP)
        for name, text in (config.get("sign_map") or {}).items():
            label = GestureLabel.from_string(str(name))
            if label is GestureLabel.NONE:
                logger.warning("Ignoring sign_map entry for unknown gesture %r", name)
                continue
            sign_map[label] = str(text)

        return cls(
            separator=config.get("separator", " "),
            history_limit=config.get("history_limit", 10),
            sign_map=sign_map,
        )


class Translator:
    """
    Accumulates committed tokens into the translated text.

    A token is skipped when its text already ends the output (ignoring the
    trailing separator), so holding a gesture produces it once.

    Example:
        >>> translator = Translator()
        >>> translator.commit(GestureLabel.FIST).text
        'A'
        >>> translator.commit(GestureLabel.FIST) is None
        True
        >>> translator.text
        'A '
    """

    def __init__(self, config: Optional[TranslatorConfig] = None):
        self.config = config or TranslatorConfig()
        self._text = ""
        self._history: Deque[CommittedToken] = deque(maxlen=self.config.history_limit)

    def commit(self, label: GestureLabel, hand: str = "") -> Optional[CommittedToken]:
        """
        Append the text mapped to ``label`` unless it would repeat.

        Returns:
            The committed token, or None for unmapped labels and repeats
        """
        text = self.config.sign_map.get(label)
        if not text:
            return None

        if self._ends_with(text):
            return None

        token = CommittedToken(text=text, gesture=label, hand=hand)
        self._text += text + self.config.separator
        self._history.append(token)

        logger.debug("Committed %r from %s", text, label.value)
        return token

    def clear(self) -> None:
        """Empty the output text and the commit log."""
        self._text = ""
        self._history.clear()

    def _ends_with(self, text: str) -> bool:
        tail = self._text
        if self.config.separator and tail.endswith(self.config.separator):
            tail = tail[:-len(self.config.separator)]
        return tail[-len(text):] == text

    @property
    def text(self) -> str:
        """Current translated text."""
        return self._text

    @property
    def history(self) -> List[CommittedToken]:
        """Recent commits, oldest first."""
        return list(self._history)
