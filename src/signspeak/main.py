"""
SignSpeak - Main Application
==============================

Entry point for real-time sign translation.
Orchestrates camera, detection, translation, speech and display.
"""

import cv2
import logging
import argparse
import signal
from dataclasses import dataclass
from typing import Optional

from .capture.camera import Camera, CameraConfig
from .detection.hand_detector import HandDetector, HandDetectorConfig
from .recognition.gesture_classifier import GestureClassifier, GestureClassifierConfig
from .recognition.gesture_buffer import GestureBufferConfig
from .translation.translator import Translator, TranslatorConfig
from .translation.session import TranslationSession, SessionConfig, FrameResult
from .translation.speech import Speaker, SpeakerConfig
from .utils.config import load_config
from .utils.logger import setup_logging, GestureLogger
from .utils.visualization import Visualizer, VisualizerConfig

logger = logging.getLogger(__name__)

WINDOW_NAME = "SignSpeak"

INSTRUCTIONS = [
    "q/ESC: quit",
    "c: clear text",
    "s: speak text",
    "d: toggle debug",
]


@dataclass
class AppConfig:
    """Application configuration container."""
    camera: CameraConfig
    mediapipe: HandDetectorConfig
    classifier: GestureClassifierConfig
    buffer: GestureBufferConfig
    session: SessionConfig
    translation: TranslatorConfig
    speech: SpeakerConfig
    visualization: VisualizerConfig


def create_app_config(config_dict: dict) -> AppConfig:
    """Create AppConfig from configuration dictionary."""
    recognition = config_dict.get("recognition", {})
    return AppConfig(
        camera=CameraConfig.from_dict(config_dict.get("camera", {})),
        mediapipe=HandDetectorConfig.from_dict(config_dict.get("mediapipe", {})),
        classifier=GestureClassifierConfig.from_dict(recognition.get("classifier", {})),
        buffer=GestureBufferConfig.from_dict(recognition.get("buffer", {})),
        session=SessionConfig.from_dict(recognition),
        translation=TranslatorConfig.from_dict(config_dict.get("translation", {})),
        speech=SpeakerConfig.from_dict(config_dict.get("speech", {})),
        visualization=VisualizerConfig.from_dict(config_dict.get("visualization", {})),
    )


class SignTranslatorApp:
    """
    Camera loop feeding detected hands through a TranslationSession.

    Keys:
    - q/ESC: quit
    - c: clear translated text
    - s: speak translated text
    - d: toggle finger debug overlay
    """

    def __init__(self, config: AppConfig):
        self.config = config

        self.camera = Camera(config.camera)
        self.detector = HandDetector(config.mediapipe)
        self.session = TranslationSession(
            classifier=GestureClassifier(config.classifier),
            translator=Translator(config.translation),
            buffer_config=config.buffer,
            config=config.session,
        )
        self.speaker = Speaker(config.speech)
        self.visualizer = Visualizer(config.visualization)
        self.events = GestureLogger()

        self._running = False
        self._show_debug = config.classifier.debug

    def start(self) -> bool:
        """Start camera and detector."""
        logger.info("Starting SignSpeak...")

        if not self.camera.start():
            logger.error("Failed to start camera")
            return False

        if not self.detector.start():
            logger.error("Failed to start hand detector")
            self.camera.stop()
            return False

        self._running = True
        return True

    def stop(self) -> None:
        """Stop all components."""
        self._running = False
        self.camera.stop()
        self.detector.stop()
        cv2.destroyAllWindows()
        logger.info("SignSpeak stopped")

    def run(self) -> None:
        """Run the main loop until quit or signal."""
        if not self.start():
            return

        signal.signal(signal.SIGINT, self._signal_handler)
        signal.signal(signal.SIGTERM, self._signal_handler)

        try:
            self._main_loop()
        finally:
            self.stop()
            self._print_transcript()

    def _main_loop(self) -> None:
        while self._running:
            frame = self.camera.read()
            if frame is None:
                continue

            hands = self.detector.detect(frame.rgb, frame.timestamp_ms)
            result = self.session.process_frame(hands)

            for token in result.tokens:
                self.events.log_commit(token)

            display = self._render(frame.image, result)
            cv2.imshow(WINDOW_NAME, display)

            self.handle_key(cv2.waitKey(1) & 0xFF)

    def _render(self, image, result: FrameResult):
        for i, hand_result in enumerate(result.hands):
            self.visualizer.draw_hand(image, hand_result.hand)
            hand_label = hand_result.key if len(result.hands) > 1 else ""
            self.visualizer.draw_gesture(image, hand_result.result, hand_label,
                                         position=(20, 40 + i * 30))
            if self._show_debug:
                width = image.shape[1]
                self.visualizer.draw_debug(image, hand_result.pose,
                                           position=(width - 230, 30 + i * 140))

        self.visualizer.draw_translation(image, self.session.text, self.session.history)
        self.visualizer.draw_instructions(image, INSTRUCTIONS)
        return image

    def handle_key(self, key: int) -> None:
        """Apply a keyboard command."""
        if key == ord('q') or key == 27:
            self._running = False
        elif key == ord('c'):
            length = len(self.session.text)
            self.session.clear()
            self.events.log_clear(length)
        elif key == ord('s'):
            if not self.speaker.speak(self.session.text):
                logger.info("Nothing to speak")
        elif key == ord('d'):
            self._show_debug = not self._show_debug
            logger.info("Debug overlay %s", "on" if self._show_debug else "off")

    def _signal_handler(self, signum, frame) -> None:
        logger.info("Received signal %d, shutting down...", signum)
        self._running = False

    def _print_transcript(self) -> None:
        print("\n" + "=" * 50)
        print("TRANSCRIPT")
        print("=" * 50)
        print(self.session.text.strip() or "(empty)")
        print("=" * 50)


def main(argv: Optional[list] = None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="SignSpeak - real-time sign to text translation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Keyboard Controls:
  q/ESC     - Quit
  c         - Clear translated text
  s         - Speak translated text
  d         - Toggle finger debug overlay

Examples:
  signspeak
  signspeak --camera 1 --debug
  signspeak --config my_config.yaml
        """
    )

    parser.add_argument("--config", "-c", default=None, help="Path to configuration file")
    parser.add_argument("--camera", type=int, default=None, help="Camera device id")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging and overlay")
    parser.add_argument("--log-file", default=None, help="Also log to this file")

    args = parser.parse_args(argv)

    config_dict = load_config(args.config)

    log_cfg = config_dict.get("logging", {})
    setup_logging(
        level="DEBUG" if args.debug else log_cfg.get("level", "INFO"),
        log_file=args.log_file or log_cfg.get("file"),
    )

    if args.camera is not None:
        config_dict["camera"]["device_id"] = args.camera
    if args.debug:
        config_dict["recognition"]["classifier"]["debug"] = True

    app = SignTranslatorApp(create_app_config(config_dict))
    app.run()


if __name__ == "__main__":
    main()
