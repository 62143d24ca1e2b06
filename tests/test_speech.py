"""
Tests for Speech Output
========================
"""

import pytest
from unittest.mock import patch, MagicMock

from signspeak.translation.speech import Speaker, SpeakerConfig


class TestSpeaker:
    """Test suite for Speaker with the TTS engine mocked out."""

    @pytest.fixture
    def mock_pyttsx3(self):
        with patch("signspeak.translation.speech.pyttsx3") as mock:
            mock.init.return_value = MagicMock()
            yield mock

    def test_speaks_text(self, mock_pyttsx3):
        speaker = Speaker(SpeakerConfig(rate=150))

        assert speaker.speak("A V ", wait=True) is True

        engine = mock_pyttsx3.init.return_value
        engine.setProperty.assert_any_call("rate", 150)
        engine.say.assert_called_once_with("A V ")
        engine.runAndWait.assert_called_once()
        assert not speaker.is_speaking

    @pytest.mark.parametrize("text", ["", "   "])
    def test_ignores_blank_text(self, mock_pyttsx3, text):
        assert Speaker().speak(text, wait=True) is False
        mock_pyttsx3.init.assert_not_called()

    def test_rejects_overlapping_requests(self, mock_pyttsx3):
        speaker = Speaker()
        speaker._speaking = True

        assert speaker.speak("Good", wait=True) is False

    def test_engine_failure_is_logged(self, mock_pyttsx3):
        mock_pyttsx3.init.side_effect = RuntimeError("no driver")
        speaker = Speaker()

        assert speaker.speak("Stop", wait=True) is True
        assert not speaker.is_speaking

    def test_voice_set_when_configured(self, mock_pyttsx3):
        Speaker(SpeakerConfig(voice="en")).speak("I", wait=True)
        mock_pyttsx3.init.return_value.setProperty.assert_any_call("voice", "en")

    def test_config_from_dict(self):
        config = SpeakerConfig.from_dict({"volume": 0.5})

        assert config.volume == 0.5
        assert config.rate == 180


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
