"""
SignSpeak
==========

Real-time translation of static hand signs into text.

Modules:
    - capture: Camera frame acquisition
    - detection: Hand landmark model and MediaPipe detector
    - recognition: Rule-based gesture classification and temporal voting
    - translation: Gesture-to-text commits, per-hand session, speech
    - utils: Configuration, logging, visualization
"""

__version__ = "1.0.0"
