"""
Main application for the gesture-driven puppet show.
"""
import asyncio
import logging
import sys
import time
from pathlib import Path
from typing import List, Optional, Tuple

import cv2

from .config import Cfg, ConfigError, default_config_path, load_config
from .gestures import GestureProcessor, apply_commands
from .landmarks import HandsTracker, draw_landmarks
from .renderer_cv import OpenCVPuppetRenderer, draw_hints
from .renderer_mock import MockRenderer
from .types import Phase


logger = logging.getLogger(__name__)


class PuppetShowApp:
    """Main application class for the puppet show."""

    def __init__(self, config: Cfg, config_dir: Path, use_mock: bool = False):
        """Initialize the application with configuration."""
        self.config = config
        self.tracker = HandsTracker(
            max_num_hands=self.config.mediapipe.max_num_hands,
            model_complexity=self.config.mediapipe.model_complexity,
            min_detection_conf=self.config.mediapipe.min_detection_confidence,
            min_tracking_conf=self.config.mediapipe.min_tracking_confidence
        )
        self.processor = GestureProcessor(self.config)
        self.show_hints = self.config.display.show_hints

        # Choose renderer type
        if use_mock:
            self.renderer = MockRenderer()
            logger.info("🧪 Using mock renderer - puppet commands are only logged")
        else:
            self.renderer = OpenCVPuppetRenderer(base_dir=config_dir, scale=self.config.display.puppet_scale)

        # Initialize camera
        self.cap = cv2.VideoCapture(self.config.camera.index)
        self.cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.config.camera.width)
        self.cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.config.camera.height)
        self.cap.set(cv2.CAP_PROP_FPS, self.config.camera.fps)

        if not self.cap.isOpened():
            raise RuntimeError(f"Failed to open camera {self.config.camera.index}")

    async def run(self):
        """Run the main application loop."""
        logger.info(f"Starting {self.config.display.window_name}")
        logger.info("🎭 Gestures: two fingers = rabbit, pinch = wolf, point down = elephant, open hand = butterfly")
        logger.info("Press 'h' for hints, 'q' to quit")

        try:
            while True:
                ret, frame = self.cap.read()
                t_now = time.time()
                if not ret:
                    logger.error("Failed to read frame from camera")
                    # Treat the lost feed as no hand so the puppet is hidden
                    result = self.processor.process_frame(None, t_now)
                    await apply_commands(self.renderer, result.commands)
                    break

                if self.config.display.mirror:
                    frame = cv2.flip(frame, 1)

                observation = self.tracker.process(frame)
                result = self.processor.process_frame(observation, t_now)
                await apply_commands(self.renderer, result.commands)

                if observation is not None and self.config.display.show_landmarks:
                    frame = draw_landmarks(frame, observation.landmarks)

                if isinstance(self.renderer, OpenCVPuppetRenderer):
                    frame = self.renderer.compose(frame, t_now)

                if self.show_hints:
                    frame = draw_hints(frame)

                self._draw_status(frame, result)
                cv2.imshow(self.config.display.window_name, frame)

                key = cv2.waitKey(1) & 0xFF
                if key == ord('q'):
                    break
                if key == ord('h'):
                    self.show_hints = not self.show_hints
        finally:
            self.close()

    def _draw_status(self, frame, result) -> None:
        if result.features is None:
            status_text = "No hand detected"
        else:
            status_text = f"Raw: {result.raw_label or '-'}  Stable: {result.stable_label or '-'}"

        phase = result.state.phase
        color = (0, 255, 0) if phase is Phase.ANIMATING else (255, 255, 255)
        cv2.putText(frame, status_text, (10, 30), cv2.FONT_HERSHEY_SIMPLEX, 0.7, (255, 255, 255), 2)
        cv2.putText(frame, f"Puppet: {phase.value}", (10, 60), cv2.FONT_HERSHEY_SIMPLEX, 0.6, color, 2)
        cv2.putText(frame, "Press 'h' for hints, 'q' to quit", (10, frame.shape[0] - 20),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.5, (255, 255, 255), 1)

    def close(self) -> None:
        """Cleanup resources."""
        if self.cap.isOpened():
            self.cap.release()
        self.tracker.close()
        if isinstance(self.renderer, OpenCVPuppetRenderer):
            self.renderer.close()
        cv2.destroyAllWindows()


def parse_args(argv: List[str]) -> Tuple[Optional[str], bool]:
    """Return (config_path, use_mock) from command line arguments."""
    config_path: Optional[str] = None
    if "--config" in argv:
        idx = argv.index("--config")
        if idx + 1 >= len(argv):
            raise SystemExit("--config needs a path")
        config_path = argv[idx + 1]
    return config_path, "--mock" in argv


async def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the application."""
    argv = sys.argv[1:] if argv is None else argv
    config_path, use_mock = parse_args(argv)

    try:
        config = load_config(config_path)
    except (FileNotFoundError, ConfigError) as e:
        logging.basicConfig(level=logging.INFO)
        logger.error(f"❌ {e}")
        return 1

    logging.basicConfig(
        level=getattr(logging, config.logging.level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    config_dir = Path(config_path).resolve().parent if config_path else default_config_path().parent

    try:
        app = PuppetShowApp(config, config_dir, use_mock=use_mock)
        await app.run()
    except KeyboardInterrupt:
        logger.info("Application interrupted by user")
    except Exception as e:
        logger.exception(f"Error: {e}")
        return 1
    return 0


def cli() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    cli()
