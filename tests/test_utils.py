"""
Tests for Config, Logging and Visualization
============================================
"""

import logging

import pytest
import numpy as np

from signspeak.recognition.gesture_classifier import GestureClassifier, GestureLabel, ClassificationResult
from signspeak.translation.translator import CommittedToken
from signspeak.utils.config import load_config, validate_config, DEFAULT_CONFIG
from signspeak.utils.logger import setup_logging, GestureLogger, log_timing
from signspeak.utils.visualization import Visualizer, VisualizerConfig

from hand_factory import create_hand


class TestConfig:
    """Test suite for config loading."""

    def test_missing_file_uses_defaults(self, tmp_path):
        config = load_config(str(tmp_path / "missing.yaml"))
        assert config == DEFAULT_CONFIG

    def test_file_overrides_defaults(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("recognition:\n  buffer:\n    min_votes: 3\n")

        config = load_config(str(path))

        assert config["recognition"]["buffer"]["min_votes"] == 3
        assert config["recognition"]["buffer"]["window_size"] == 5
        assert config["camera"]["device_id"] == 0

    def test_defaults_not_mutated(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("camera:\n  device_id: 3\n")

        load_config(str(path))
        assert DEFAULT_CONFIG["camera"]["device_id"] == 0

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(str(path)) == DEFAULT_CONFIG

    def test_non_mapping_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n")
        assert load_config(str(path)) == DEFAULT_CONFIG

    def test_validate_flags_wrong_types(self):
        warnings = validate_config({"camera": {"width": "wide"}, "speech": {"volume": 1}})

        assert len(warnings) == 1
        assert "camera.width" in warnings[0]

    def test_validate_flags_bool_as_int(self):
        warnings = validate_config({"camera": {"device_id": True}})
        assert len(warnings) == 1

    def test_validate_flags_non_dict_section(self):
        assert validate_config({"camera": 5})

    def test_validate_checks_nested_buffer_fields(self):
        warnings = validate_config({"recognition": {"buffer": {"window_size": "5", "min_votes": 4}}})

        assert len(warnings) == 1
        assert "recognition.buffer.window_size" in warnings[0]

    def test_validate_flags_non_dict_subsection(self):
        warnings = validate_config({"recognition": {"classifier": [0.02]}})
        assert "recognition.classifier" in warnings[0]

    def test_validate_defaults_pass(self):
        assert validate_config(DEFAULT_CONFIG) == []

    def test_shipped_config_is_valid(self):
        from pathlib import Path

        path = Path(__file__).parent.parent / "config" / "config.yaml"
        config = load_config(str(path))

        assert validate_config(config) == []
        assert config["translation"]["sign_map"]["thumbs_up"] == "Good"


class TestLogging:
    """Test suite for logging helpers."""

    @pytest.fixture(autouse=True)
    def restore_root_logger(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_setup_logging_with_file(self, tmp_path):
        log_file = tmp_path / "logs" / "signspeak.log"
        root = setup_logging(level="DEBUG", log_file=str(log_file))

        assert root.level == logging.DEBUG
        assert len(root.handlers) == 2
        assert log_file.parent.exists()

    def test_gesture_logger_records_commits(self):
        events = GestureLogger()
        events.log_commit(CommittedToken(text="A", gesture=GestureLabel.FIST, hand="Left"))
        events.log_clear(2)

        history = events.get_history()
        assert [e["event"] for e in history] == ["commit", "clear"]
        assert history[0]["text"] == "A"
        assert history[0]["hand"] == "Left"
        assert events.total_commits == 1
        assert events.get_history(last_n=1)[0]["event"] == "clear"

    def test_log_timing_preserves_result(self, caplog):
        @log_timing
        def double(x):
            return x * 2

        with caplog.at_level(logging.DEBUG):
            assert double(4) == 8
        assert "double took" in caplog.text


class TestVisualizer:
    """Test suite for overlays; checks that drawing touches the frame."""

    @pytest.fixture
    def image(self):
        return np.zeros((480, 640, 3), dtype=np.uint8)

    @pytest.fixture
    def viz(self):
        return Visualizer(VisualizerConfig())

    def test_draw_hand(self, viz, image):
        viz.draw_hand(image, create_hand(index="up"))
        assert image.any()

    def test_draw_hand_outlines_bounding_box(self, image):
        viz = Visualizer(VisualizerConfig(show_landmarks=False, show_connections=False))
        viz.draw_hand(image, create_hand(index="up"))

        assert image.any()

    def test_draw_hand_without_bbox(self, image):
        viz = Visualizer(VisualizerConfig(show_landmarks=False, show_connections=False,
                                          show_bbox=False))
        viz.draw_hand(image, create_hand(index="up"))

        assert not image.any()

    def test_draw_gesture(self, viz, image):
        viz.draw_gesture(image, ClassificationResult(GestureLabel.PEACE, 0.85), hand_label="Left")
        assert image.any()

    def test_draw_gesture_skips_none(self, viz, image):
        viz.draw_gesture(image, ClassificationResult.none())
        assert not image.any()

    def test_draw_debug(self, viz, image):
        pose = GestureClassifier().analyze(create_hand(index="half"))
        viz.draw_debug(image, pose)
        assert image.any()

    def test_draw_translation_long_text(self, viz, image):
        history = [CommittedToken(text="Good", gesture=GestureLabel.THUMBS_UP)]
        viz.draw_translation(image, "Good " * 50, history)
        assert image.any()

    def test_from_dict_colors(self):
        config = VisualizerConfig.from_dict({"colors": {"landmarks": [1, 2, 3]}, "show_history": False})

        assert config.landmark_color == (1, 2, 3)
        assert config.show_history is False

    def test_from_dict_gesture_colors(self):
        config = VisualizerConfig.from_dict({"colors": {"gesture": [1, 1, 1], "warning": [2, 2, 2]}})

        assert config.gesture_color == (1, 1, 1)
        assert config.warning_color == (2, 2, 2)

    def test_low_confidence_uses_warning_color(self, image):
        viz = Visualizer(VisualizerConfig(gesture_color=(0, 0, 0), warning_color=(0, 0, 255)))
        viz.draw_gesture(image, ClassificationResult(GestureLabel.POINTING, 0.80))

        assert image[..., 2].any()
        assert not image[..., :2].any()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
