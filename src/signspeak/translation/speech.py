"""
Text-to-speech output for the translated text.
"""

import logging
import threading
from dataclasses import dataclass
from typing import Optional

import pyttsx3

logger = logging.getLogger(__name__)


@dataclass
class SpeakerConfig:
    """Speech synthesis settings."""
    rate: int = 180       # Words per minute, slightly slower than the engine default
    volume: float = 1.0
    voice: str = ""       # Engine voice id; empty keeps the system default

    @classmethod
    def from_dict(cls, config: dict) -> "SpeakerConfig":
        """Create config from dictionary."""
        return cls(
            rate=config.get("rate", 180),
            volume=config.get("volume", 1.0),
            voice=config.get("voice", ""),
        )


class Speaker:
    """
    Speaks text on a background thread, one utterance at a time.

    Example:
        >>> speaker = Speaker()
        >>> speaker.speak(session.text)
    """

    def __init__(self, config: Optional[SpeakerConfig] = None):
        self.config = config or SpeakerConfig()
        self._lock = threading.Lock()
        self._speaking = False

    def speak(self, text: str, wait: bool = False) -> bool:
        """
        Speak ``text``.

        Returns:
            False when the text is blank or an utterance is already playing
        """
        if not text or not text.strip():
            return False

        with self._lock:
            if self._speaking:
                logger.debug("Already speaking, ignoring request")
                return False
            self._speaking = True

        if wait:
            self._run(text)
        else:
            threading.Thread(target=self._run, args=(text,), daemon=True).start()
        return True

    def _run(self, text: str) -> None:
        try:
            engine = pyttsx3.init()
            engine.setProperty("rate", self.config.rate)
            engine.setProperty("volume", self.config.volume)
            if self.config.voice:
                engine.setProperty("voice", self.config.voice)
            engine.say(text)
            engine.runAndWait()
        except (RuntimeError, OSError) as e:
            logger.error("Speech synthesis failed: %s", e)
        finally:
            with self._lock:
                self._speaking = False

    @property
    def is_speaking(self) -> bool:
        return self._speaking
