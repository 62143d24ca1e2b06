"""
Tests for Gesture Buffer
=========================
"""

import pytest

from signspeak.recognition.gesture_buffer import GestureBuffer, GestureBufferConfig
from signspeak.recognition.gesture_classifier import GestureLabel

FIST = GestureLabel.FIST
PEACE = GestureLabel.PEACE
NONE = GestureLabel.NONE


class TestGestureBufferConfig:
    """Test suite for GestureBufferConfig."""

    def test_default_values(self):
        config = GestureBufferConfig()

        assert config.history_size == 10
        assert config.window_size == 5
        assert config.min_votes == 4

    def test_from_dict_partial(self):
        config = GestureBufferConfig.from_dict({"min_votes": 3})

        assert config.min_votes == 3
        assert config.window_size == 5

    def test_zero_window_is_clamped(self):
        config = GestureBufferConfig.from_dict({"window_size": 0})
        assert config.window_size == 1

    def test_window_larger_than_history_is_clamped(self):
        config = GestureBufferConfig(history_size=3, window_size=5, min_votes=0)

        assert config.window_size == 3
        assert config.min_votes == 1


class TestGestureBuffer:
    """Test suite for majority voting."""

    @pytest.fixture
    def buffer(self):
        return GestureBuffer()

    def test_held_on_fourth_vote(self, buffer):
        results = [buffer.update(FIST) for _ in range(5)]
        assert results == [None, None, None, FIST, FIST]

    def test_alternating_never_held(self, buffer):
        for label in [FIST, PEACE] * 4:
            assert buffer.update(label) is None

    def test_none_is_a_vote(self, buffer):
        for label in [FIST, FIST, NONE, FIST, NONE]:
            assert buffer.update(label) is None

    def test_none_can_be_held(self, buffer):
        results = [buffer.update(NONE) for _ in range(4)]
        assert results[-1] == NONE

    def test_one_outlier_tolerated(self, buffer):
        for label in [FIST, FIST, PEACE, FIST]:
            buffer.update(label)
        assert buffer.update(FIST) == FIST

    def test_window_uses_most_recent_entries(self, buffer):
        for label in [PEACE] * 6 + [FIST] * 4:
            held = buffer.update(label)

        assert held == FIST
        assert buffer.window == [PEACE] + [FIST] * 4

    def test_history_is_bounded(self, buffer):
        for label in [PEACE] + [FIST] * 10:
            buffer.update(label)

        assert len(buffer) == 10
        assert buffer.contents == ["fist"] * 10

    def test_tie_breaks_by_declaration_order(self, buffer):
        for label in [PEACE, FIST, PEACE, FIST]:
            buffer.update(label)

        assert buffer.majority() == (FIST, 2)

    def test_gesture_wins_tie_with_none(self, buffer):
        for label in [NONE, FIST, NONE, FIST]:
            buffer.update(label)

        assert buffer.majority() == (FIST, 2)

    def test_zero_window_still_votes(self):
        buffer = GestureBuffer(GestureBufferConfig(window_size=0, min_votes=1))

        buffer.update(PEACE)
        assert buffer.update(FIST) == FIST
        assert buffer.window == [FIST]

    def test_majority_of_empty_buffer(self, buffer):
        assert buffer.majority() == (NONE, 0)

    def test_reset(self, buffer):
        for _ in range(4):
            buffer.update(FIST)
        buffer.reset()

        assert len(buffer) == 0
        assert buffer.update(FIST) is None

    def test_custom_thresholds(self):
        buffer = GestureBuffer(GestureBufferConfig(window_size=3, min_votes=2))

        assert buffer.update(FIST) is None
        assert buffer.update(FIST) == FIST


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
