"""Gesture-to-text translation: commit policy, per-hand session."""
from .translator import Translator, TranslatorConfig, CommittedToken, DEFAULT_SIGN_MAP
from .session import TranslationSession, SessionConfig, FrameResult, HandResult

# Speaker lives in .speech and pulls in pyttsx3 on import
__all__ = [
    "Translator",
    "TranslatorConfig",
    "CommittedToken",
    "DEFAULT_SIGN_MAP",
    "TranslationSession",
    "SessionConfig",
    "FrameResult",
    "HandResult",
]
